# src/oneline_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for loading a diagram from its exchange format.

`ParsingError` covers payloads that cannot be read at all (missing file, invalid JSON
or YAML, a root that is not a mapping). `SchemaValidationError` covers payloads that
were read but do not have the required shape (missing `nodes`/`edges` lists, wrong
field types, duplicate ids, unknown device types).

Both derive from `DiagnosableError`, so the session can catch one concrete type and
turn it into a single `DiagramImportError` report.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all exchange-format loading errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the diagram payload.",
            context={}
        )


@dataclass()
class ParsingError(BaseParsingError):
    """
    Raised when a payload cannot be loaded: the file is missing or unreadable, the text
    is not valid JSON/YAML, or its root is not a mapping.
    """
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        if self.file_path is not None:
            return f"Parsing error in file '{self.file_path}': {self.details}"
        return f"Parsing error: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Diagram Payload Parsing Error",
            details=self.details,
            suggestion="Ensure the payload is valid JSON (or YAML) whose top level is an object.",
            context={'source_file': self.file_path}
        )


@dataclass()
class SchemaValidationError(BaseParsingError):
    """
    Raised when a payload was loaded but does not conform to the diagram exchange schema.
    """
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self):
        return [f"  - Field '{field}': {messages[0] if isinstance(messages, list) and messages else messages}"
                for field, messages in sorted(self.errors.items(), key=lambda kv: str(kv[0]))]

    def __str__(self):
        origin = f" for file '{self.file_path}'" if self.file_path is not None else ""
        return f"Diagram schema validation failed{origin}:\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the diagram payload does not conform to the exchange schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Diagram Schema Validation Error",
            details=details,
            suggestion="A diagram needs 'version: 1' plus 'nodes' and 'edges' lists. Check for duplicate ids, "
                       "unknown device types, and fields of the wrong type.",
            context={'source_file': self.file_path}
        )
