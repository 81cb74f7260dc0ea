"""Data validation utilities for the resource and capacity tools.

Provides reusable functions for:
- Required-field checks on initiative payloads
- Collecting and summarising directory data issues (used by scripts/)
"""

from typing import List, Dict, Any, Optional, Mapping

# Fields every initiative must carry, in the order errors are reported.
INITIATIVE_REQUIRED_FIELDS = (
    "project",
    "category",
    "lead",
    "status",
    "requestor",
    "requestor_vp",
    "target_period",
    "description",
)

COMPLETED_STATUS = "Completed"


class ValidationIssue:
    """Represents a single validation issue found during checks."""

    def __init__(self, check_name: str, severity: str, detail: str,
                 sample: Optional[Any] = None, count: int = 1):
        """Initialize a validation issue.

        Args:
            check_name: Name of the check that found this issue
            severity: Issue severity ('error', 'warning', 'info')
            detail: Human-readable description of the issue
            sample: Example value that triggered the issue
            count: Number of affected documents
        """
        self.check_name = check_name
        self.severity = severity
        self.detail = detail
        self.sample = sample
        self.count = count

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "check": self.check_name,
            "severity": self.severity,
            "detail": self.detail,
            "sample": str(self.sample) if self.sample is not None else None,
            "count": self.count,
        }

    def __repr__(self) -> str:
        return (f"ValidationIssue(check={self.check_name}, severity={self.severity}, "
                f"count={self.count})")


class ValidationResult:
    """Collects and reports on validation check results."""

    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def add_issue(self, check_name: str, severity: str, detail: str,
                  sample: Optional[Any] = None, count: int = 1) -> None:
        self.issues.append(ValidationIssue(check_name, severity, detail, sample, count))

    def get_issues_by_severity(self, severity: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == severity]

    def error_count(self) -> int:
        return len(self.get_issues_by_severity("error"))

    def warning_count(self) -> int:
        return len(self.get_issues_by_severity("warning"))

    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return self.error_count() == 0

    def summary_text(self) -> str:
        """Generate human-readable validation summary."""
        lines = [
            "Validation Summary:",
            f"  Issues: {len(self.issues)}",
            f"    - Errors: {self.error_count()}",
            f"    - Warnings: {self.warning_count()}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [i.to_dict() for i in self.issues],
            "summary": {
                "issues": len(self.issues),
                "errors": self.error_count(),
                "warnings": self.warning_count(),
            },
        }


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(data: Mapping[str, Any], required: tuple) -> List[str]:
    """Return the names in *required* that are absent or blank in *data*."""
    return [name for name in required if is_blank(data.get(name))]


def check_initiative_fields(data: Mapping[str, Any]) -> None:
    """Validate the required fields of an initiative payload.

    Raises:
        ValueError: naming the first missing field (``"requestor vp is
            required."``), or when a Completed initiative has no
            completion date.
    """
    missing = missing_fields(data, INITIATIVE_REQUIRED_FIELDS)
    if missing:
        raise ValueError(f"{missing[0].replace('_', ' ')} is required.")
    if data.get("status") == COMPLETED_STATUS and is_blank(data.get("completion_date")):
        raise ValueError(
            "Completion date is required when status is marked as Completed."
        )
