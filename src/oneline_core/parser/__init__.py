# src/oneline_core/parser/__init__.py
from .parser import DiagramParser
from .writer import DiagramWriter
from .exceptions import BaseParsingError, ParsingError, SchemaValidationError

__all__ = [
    # Exchange Format
    "DiagramParser",
    "DiagramWriter",
    # Exceptions
    "BaseParsingError",
    "ParsingError",
    "SchemaValidationError",
]
