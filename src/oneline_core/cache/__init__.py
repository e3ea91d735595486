# src/oneline_core/cache/__init__.py
"""
Exposes the public interface of the cache package.
"""
from .service import EnergizationCache, DEFAULT_MAX_ENTRIES
from .keys import create_diagram_key, create_energization_key

__all__ = [
    "EnergizationCache",
    "DEFAULT_MAX_ENTRIES",
    "create_diagram_key",
    "create_energization_key",
]
