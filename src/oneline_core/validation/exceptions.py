# src/oneline_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when diagram validation finds ERROR-level issues.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class DiagramValidationError(DiagnosableError):
    """
    Container for every ERROR-level `ValidationIssue` of one validation pass. Warnings
    and info messages passed to the constructor are dropped.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = "DiagramValidationError was raised with no error-level issues."
        else:
            summary_message = (
                f"Diagram validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        details = (
            f"One or more structural errors were found in the diagram.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )

        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue:
            context['target'] = first_issue.conductor_id or first_issue.device_id or 'Multiple'

        return format_diagnostic_report(
            error_type="Diagram Validation Error",
            details=details,
            suggestion="Correct the listed devices and conductors in the diagram.",
            context=context
        )
