"""
Findings and errors produced while loading a world structure document.

- Severity: INFO (repaired), WARN (loaded but suspicious), FAIL (rejected)
- ValidationIssue: one finding, tagged with a DOC-nnn code
- ValidationResult: the findings of one load
- DocumentError and subclasses: raised when a document is rejected
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional


class Severity(IntEnum):
    """Ordered so that a higher value is more severe."""
    INFO = 1
    WARN = 2
    FAIL = 3

    def __str__(self) -> str:
        return self.name


@dataclass
class ValidationIssue:
    """A finding about a document.

    Attributes:
        severity: How bad it is
        code: Stable rule code, e.g. "DOC-010"
        message: Text shown to the user
        location: JSON path or chunk coordinate, when known
    """
    severity: Severity
    code: str
    message: str
    location: Optional[str] = None

    def format(self) -> str:
        return f"[{self.severity}] {self.code} at={self.location or '-'} :: {self.message}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Findings collected while loading one document."""
    issues: List[ValidationIssue] = field(default_factory=list)

    def of(self, severity: Severity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    @property
    def passed(self) -> bool:
        return not self.of(Severity.FAIL)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def errors(self) -> List[ValidationIssue]:
        return self.of(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self.of(Severity.WARN)

    @property
    def infos(self) -> List[ValidationIssue]:
        return self.of(Severity.INFO)

    def add(self, severity: Severity, code: str, message: str,
            location: Optional[str] = None) -> ValidationIssue:
        issue = ValidationIssue(severity, code, message, location)
        self.issues.append(issue)
        return issue

    def report(self) -> str:
        """Multi-line summary, most severe findings first."""
        if not self.issues:
            return "Validation passed: no issues"
        verdict = "PASSED" if self.passed else "FAILED"
        ordered = sorted(self.issues, key=lambda issue: -issue.severity)
        header = f"Validation {verdict}: {len(self.issues)} issue(s)"
        return "\n".join([header] + [issue.format() for issue in ordered])


class DocumentError(Exception):
    """A document was rejected. ``result`` holds the FAIL finding(s)."""

    def __init__(self, result: ValidationResult):
        self.result = result
        first = result.errors[0].message if result.errors else "Document rejected"
        super().__init__(first)


class DocumentParseError(DocumentError):
    """The document text is not valid JSON."""


class DocumentSchemaError(DocumentError):
    """The document does not match the world structure schema.

    Attributes:
        path: JSON path of the offending value, e.g. "chunks/0/cells/1"
    """

    def __init__(self, result: ValidationResult, path: str):
        self.path = path
        super().__init__(result)
