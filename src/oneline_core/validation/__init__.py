# src/oneline_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import DiagramIssueCode
from .diagram_validator import DiagramValidator
from .exceptions import DiagramValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "DiagramIssueCode",
    "DiagramValidator",
    "DiagramValidationError",
]
