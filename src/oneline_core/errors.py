# src/oneline_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class OneLineError(Exception):
    """Base class for all custom, user-facing errors in OneLine Core."""
    pass

class DiagramImportError(OneLineError):
    """
    Raised when an exchange payload cannot be turned into a diagram. The message is a
    pre-formatted, user-friendly diagnostic report. The diagram that was active before
    the import is never touched.
    """
    pass

class EnergizationError(OneLineError):
    """
    Raised when the energization computation itself fails for a reason other than the
    content of the diagram (which is always handled softly).
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """A protocol for exceptions that can generate their own rich diagnostic report."""
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception` so it can be caught directly, and declares
    `get_diagnostic_report` abstract so every subclass must be able to describe itself.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


class MalformedDiagramError(DiagnosableError, ValueError):
    """Raised when a Diagram value is constructed in violation of its structural invariants."""

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Malformed Diagram",
            details=self.details,
            suggestion="Give every device a unique id before building the diagram.",
            context={}
        )


class DiagramEditError(DiagnosableError, KeyError):
    """Raised when an edit names a device or conductor that does not exist in the diagram."""

    def __init__(self, target: str, details: str):
        super().__init__(details)
        self.target = target
        self.details = details

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Diagram Edit",
            details=self.details,
            suggestion="Refresh the editor view; the element may have been removed by an earlier edit.",
            context={'target': self.target}
        )


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Schema Validation").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (target, source file, user input).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ OneLine Core: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if target := context.get('target'):
        lines.append(f"Target:         {target}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
