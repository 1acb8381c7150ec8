"""
Loading and saving of world structure documents.

Loading runs in stages and installs nothing until every stage succeeds:
1. parse_document(): JSON text -> raw data (DocumentParseError on bad JSON)
2. validate_document(): jsonschema check of the whole document
   (DocumentSchemaError on any mismatch, no partial recovery)
3. resolve_duplicates(): chunks sharing a coordinate, per DuplicatePolicy
4. repair_structure(): pad every chunk grid to GRID_SIZE x GRID_SIZE
   (oversized grids handled per OversizePolicy)
5. check_origin(): warn when the named structure lacks a single origin chunk

Saving writes the document as JSON indented with DOCUMENT_INDENT spaces.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema

from ..constants import DOCUMENT_INDENT, DOCUMENT_SUFFIX, GRID_SIZE
from ..world.data_model import Chunk, WorldStructure, new_cell
from .core import (
    DocumentError, DocumentParseError, DocumentSchemaError, Severity,
    ValidationResult,
)
from .schema import WORLD_STRUCTURE_SCHEMA

logger = logging.getLogger(__name__)


class OversizePolicy(Enum):
    """What to do with rows or cells beyond GRID_SIZE."""
    KEEP = "keep"
    TRUNCATE = "truncate"


class DuplicatePolicy(Enum):
    """What to do with chunks sharing a coordinate."""
    REJECT = "reject"
    FIRST_WINS = "first_wins"
    LAST_WINS = "last_wins"


@dataclass
class LoadResult:
    """A loaded, repaired structure and the findings collected on the way."""
    structure: WorldStructure
    report: ValidationResult = field(default_factory=ValidationResult)


def parse_document(text: str) -> Any:
    """Parse document text as JSON.

    Raises:
        DocumentParseError: If the text is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        result = ValidationResult()
        result.add(Severity.FAIL, "DOC-001", f"Invalid JSON: {e.msg}",
                   location=f"line {e.lineno} column {e.colno}")
        raise DocumentParseError(result) from e
    except (RecursionError, ValueError) as e:
        # Nesting past the recursion limit, or an over-long integer literal
        result = ValidationResult()
        result.add(Severity.FAIL, "DOC-001", f"Invalid JSON: {e}")
        raise DocumentParseError(result) from e


def validate_document(data: Any) -> None:
    """Check ``data`` against the world structure schema.

    Raises:
        DocumentSchemaError: On the first mismatch anywhere in the document.
    """
    try:
        jsonschema.validate(data, WORLD_STRUCTURE_SCHEMA)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        result = ValidationResult()
        result.add(Severity.FAIL, "DOC-002", f"Schema mismatch: {e.message}",
                   location=path)
        raise DocumentSchemaError(result, path) from e
    except RecursionError as e:
        result = ValidationResult()
        result.add(Severity.FAIL, "DOC-002", "Schema mismatch: document nested too deeply",
                   location="<root>")
        raise DocumentSchemaError(result, "<root>") from e


def repair_chunk(chunk: Chunk, oversize: OversizePolicy = OversizePolicy.KEEP) -> Chunk:
    """Pad the chunk's cell grid to GRID_SIZE rows of GRID_SIZE cells.

    Existing cells keep their positions. Missing rows are added empty and
    then padded like any other short row. Rows or cells beyond GRID_SIZE are
    dropped only with OversizePolicy.TRUNCATE. Returns ``chunk`` itself when
    nothing changes.
    """
    rows = list(chunk.cells)
    if oversize == OversizePolicy.TRUNCATE:
        rows = rows[:GRID_SIZE]
    while len(rows) < GRID_SIZE:
        rows.append(())

    cells = []
    for row in rows:
        row = list(row)
        if oversize == OversizePolicy.TRUNCATE:
            row = row[:GRID_SIZE]
        while len(row) < GRID_SIZE:
            row.append(new_cell())
        cells.append(tuple(row))

    cells = tuple(cells)
    if cells == chunk.cells:
        return chunk
    return Chunk(x=chunk.x, y=chunk.y, z=chunk.z, cells=cells,
                 world_structure=chunk.world_structure)


def _is_oversized(chunk: Chunk) -> bool:
    return len(chunk.cells) > GRID_SIZE or any(len(r) > GRID_SIZE for r in chunk.cells)


def repair_structure(structure: WorldStructure,
                     oversize: OversizePolicy = OversizePolicy.KEEP,
                     result: Optional[ValidationResult] = None) -> WorldStructure:
    """Repair every chunk grid of the structure (see repair_chunk())."""
    if result is None:
        result = ValidationResult()

    chunks = []
    for chunk in structure.chunks:
        oversized = _is_oversized(chunk)
        repaired = repair_chunk(chunk, oversize)
        if repaired is not chunk:
            result.add(Severity.INFO, "DOC-010", "Cell grid resized to "
                       f"{GRID_SIZE}x{GRID_SIZE}", location=str(chunk.coord))
        if oversized and oversize == OversizePolicy.KEEP:
            result.add(Severity.WARN, "DOC-011",
                       f"Cell grid larger than {GRID_SIZE}x{GRID_SIZE} kept as-is",
                       location=str(chunk.coord))
        chunks.append(repaired)
    return structure.with_chunks(chunks)


def resolve_duplicates(structure: WorldStructure,
                       policy: DuplicatePolicy = DuplicatePolicy.REJECT,
                       result: Optional[ValidationResult] = None) -> WorldStructure:
    """Apply ``policy`` to chunks sharing a coordinate.

    FIRST_WINS keeps the earliest chunk at each coordinate, LAST_WINS the
    latest; both keep the surviving chunk at its first position.

    Raises:
        DocumentError: With DuplicatePolicy.REJECT when duplicates exist.
    """
    if result is None:
        result = ValidationResult()

    duplicates = structure.duplicate_coordinates()
    if not duplicates:
        return structure

    if policy == DuplicatePolicy.REJECT:
        for coord in duplicates:
            result.add(Severity.FAIL, "DOC-020",
                       "Several chunks share this coordinate", location=str(coord))
        raise DocumentError(result)

    winners: Dict[Any, Chunk] = {}
    for chunk in structure.chunks:
        if policy == DuplicatePolicy.LAST_WINS or chunk.coord not in winners:
            winners[chunk.coord] = chunk
    for coord in duplicates:
        result.add(Severity.WARN, "DOC-021",
                   f"Duplicate chunks merged ({policy.value})", location=str(coord))

    chunks = []
    placed = set()
    for chunk in structure.chunks:
        if chunk.coord not in placed:
            chunks.append(winners[chunk.coord])
            placed.add(chunk.coord)
    return structure.with_chunks(chunks)


def check_origin(structure: WorldStructure, name: Optional[str],
                 result: ValidationResult) -> None:
    """Warn when ``name`` does not have exactly one origin chunk."""
    if name is None or structure.is_empty:
        return
    count = len(structure.origin_chunks(name))
    if count == 0:
        result.add(Severity.WARN, "DOC-030", f"No origin chunk for '{name}'")
    elif count > 1:
        result.add(Severity.WARN, "DOC-031",
                   f"{count} chunks claim to be the origin chunk of '{name}'")


def load_document(text: str, name: Optional[str] = None,
                  oversize: OversizePolicy = OversizePolicy.KEEP,
                  duplicates: DuplicatePolicy = DuplicatePolicy.REJECT) -> LoadResult:
    """Parse, validate and repair a world structure document.

    Args:
        text: Document text
        name: Structure name used for the origin chunk check
        oversize: Policy for grids larger than GRID_SIZE
        duplicates: Policy for chunks sharing a coordinate

    Returns:
        LoadResult whose structure satisfies the grid shape invariant

    Raises:
        DocumentError: If the document is rejected.
    """
    data = parse_document(text)
    validate_document(data)

    result = ValidationResult()
    structure = WorldStructure.from_dict(data)
    structure = resolve_duplicates(structure, duplicates, result)
    structure = repair_structure(structure, oversize, result)
    check_origin(structure, name, result)

    logger.info("Loaded %d chunk(s)%s", len(structure),
                f" for '{name}'" if name else "")
    for issue in result.issues:
        logger.debug("%s", issue)
    return LoadResult(structure=structure, report=result)


def load_file(path: Union[str, Path], **kwargs) -> LoadResult:
    """Load a document from disk. The file stem names the structure."""
    path = Path(path)
    text = path.read_text(encoding='utf-8')
    kwargs.setdefault('name', path.stem)
    return load_document(text, **kwargs)


def dump_document(structure: WorldStructure) -> str:
    """Serialize the structure to document text."""
    return json.dumps(structure.to_dict(), indent=DOCUMENT_INDENT)


def document_file_name(name: str) -> str:
    """File name under which a structure called ``name`` is saved."""
    if name.endswith(DOCUMENT_SUFFIX):
        return name
    return name + DOCUMENT_SUFFIX


def save_document(structure: WorldStructure, path: Union[str, Path]) -> Path:
    """Write the structure to ``path``.

    Returns:
        Path to the saved file

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.write_text(dump_document(structure), encoding='utf-8')
    logger.info("Saved %d chunk(s) to %s", len(structure), path)
    return path
