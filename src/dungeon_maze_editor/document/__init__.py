"""
World structure documents.

Public API:
    - load_document(), load_file(): parse, validate and repair a document
    - dump_document(), save_document(): serialize a structure
    - ValidationResult, ValidationIssue, Severity: findings collected on load
    - DocumentError and subclasses: raised when a document is rejected
"""

from .core import (
    Severity,
    ValidationIssue,
    ValidationResult,
    DocumentError,
    DocumentParseError,
    DocumentSchemaError,
)
from .loader import (
    OversizePolicy,
    DuplicatePolicy,
    LoadResult,
    parse_document,
    validate_document,
    repair_chunk,
    repair_structure,
    resolve_duplicates,
    load_document,
    load_file,
    dump_document,
    document_file_name,
    save_document,
)
from .schema import WORLD_STRUCTURE_SCHEMA

__all__ = [
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'DocumentError',
    'DocumentParseError',
    'DocumentSchemaError',
    'OversizePolicy',
    'DuplicatePolicy',
    'LoadResult',
    'parse_document',
    'validate_document',
    'repair_chunk',
    'repair_structure',
    'resolve_duplicates',
    'load_document',
    'load_file',
    'dump_document',
    'document_file_name',
    'save_document',
    'WORLD_STRUCTURE_SCHEMA',
]
