# src/oneline_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("OneLine Core package initialized.")

from .signals import SignalKind, DeviceType, StepKind
from .data_structures import Pin, Device, Conductor, Diagram, DIAGRAM_FORMAT_VERSION
from .starter import starter_diagram
from .network_builder import NetworkModel, NetworkModelBuilder
from .propagation import (
    PropagationResults, EnergizationState, MixedSignalPolicy,
    SignalPropagator, derive_energization, classify_conductor,
)
from .cache import EnergizationCache
from .config import EngineConfig, ConfigParsingError, parse_engine_config, load_engine_config
from .engine import EnergizationEngine, compute_energization
from .parser import DiagramParser, DiagramWriter, ParsingError, SchemaValidationError
from .validation import (
    DiagramValidator, DiagramValidationError, DiagramIssueCode,
    ValidationIssue, ValidationIssueLevel,
)
from .session import DiagramSession
from .errors import (
    OneLineError, DiagramImportError, EnergizationError,
    DiagramEditError, MalformedDiagramError, DiagnosableError,
)

__all__ = [
    # Enumerations
    "SignalKind", "DeviceType", "StepKind",
    # Data Structures
    "Pin", "Device", "Conductor", "Diagram", "DIAGRAM_FORMAT_VERSION", "starter_diagram",
    # Network Model
    "NetworkModel", "NetworkModelBuilder",
    # Propagation
    "PropagationResults", "EnergizationState", "MixedSignalPolicy",
    "SignalPropagator", "derive_energization", "classify_conductor",
    # Engine, Cache & Configuration
    "EnergizationEngine", "compute_energization", "EnergizationCache",
    "EngineConfig", "ConfigParsingError", "parse_engine_config", "load_engine_config",
    # Exchange Format
    "DiagramParser", "DiagramWriter", "ParsingError", "SchemaValidationError",
    # Validation
    "DiagramValidator", "DiagramValidationError", "DiagramIssueCode",
    "ValidationIssue", "ValidationIssueLevel",
    # Session
    "DiagramSession",
    # Top-Level Errors
    "OneLineError", "DiagramImportError", "EnergizationError",
    "DiagramEditError", "MalformedDiagramError", "DiagnosableError",
]
