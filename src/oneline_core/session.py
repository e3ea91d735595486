# src/oneline_core/session.py
"""
The collaborator-facing surface of the library: a session holds the diagram currently
shown in the editor, replaces it wholesale on every edit or import, and answers the
editor's energization queries from the (memoized) derived state.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .config import EngineConfig
from .data_structures import Device, Diagram
from .engine import EnergizationEngine
from .errors import DiagnosableError, DiagramImportError
from .log_config import set_package_level
from .parser import DiagramParser, DiagramWriter
from .propagation import EnergizationState
from .signals import DeviceType, SignalKind
from .starter import starter_diagram
from .validation import DiagramValidator, ValidationIssue

logger = logging.getLogger(__name__)

DiagramEdit = Callable[[Diagram], Diagram]

_DEFAULT_LABELS: Dict[DeviceType, str] = {
    DeviceType.SOURCE: "Source",
    DeviceType.BREAKER: "CB",
    DeviceType.BUS: "Bus",
    DeviceType.LOAD: "Load",
    DeviceType.RECTIFIER: "Rectifier",
    DeviceType.INVERTER: "Inverter",
}


class DiagramSession:
    """
    Owns the active diagram value and an `EnergizationEngine`.

    The active diagram is only ever replaced, never mutated. An edit or import that
    fails leaves the previous diagram active.
    """

    def __init__(self, diagram: Optional[Diagram] = None, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        set_package_level(self.config.log_level)
        self.engine = EnergizationEngine(self.config)
        self._parser = DiagramParser()
        self._writer = DiagramWriter()
        self._diagram: Diagram = diagram if diagram is not None else starter_diagram()

    @property
    def diagram(self) -> Diagram:
        return self._diagram

    @property
    def state(self) -> EnergizationState:
        """Derived state of the active diagram, served from the engine cache when possible."""
        return self.engine.compute(self._diagram)

    def validate(self) -> List[ValidationIssue]:
        return DiagramValidator(self._diagram).validate()

    # --- Queries ---

    def is_device_energized(self, device_id: str) -> bool:
        return self.state.is_device_energized(device_id)

    def conductor_status(self, conductor_id: str) -> Tuple[bool, Optional[SignalKind]]:
        """(energized, display kind) of a conductor; the kind is None when it is dead."""
        state = self.state
        return state.is_conductor_energized(conductor_id), state.conductor_signal(conductor_id)

    # --- Edits ---

    def apply(self, edit: DiagramEdit) -> Diagram:
        """Replaces the active diagram with `edit(active)` and returns the new value."""
        updated = edit(self._diagram)
        if not isinstance(updated, Diagram):
            raise TypeError(f"A diagram edit must return a Diagram, got {type(updated).__name__}.")
        self._diagram = updated
        return updated

    def add_device(
        self,
        device_type: Union[DeviceType, str],
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        device_id: Optional[str] = None,
    ) -> Device:
        """
        Places a new device. New sources default to AC and new breakers start closed,
        matching what the editor's toolbar creates.
        """
        device_type = DeviceType(device_type)
        device_id = device_id or self._diagram.next_id(device_type.value[0].upper())
        device = Device(
            id=device_id,
            type=device_type,
            signal=SignalKind.AC if device_type is DeviceType.SOURCE else None,
            closed=device_type is DeviceType.BREAKER,
            label=label if label is not None else f"{_DEFAULT_LABELS[device_type]} {device_id}",
            x=x,
            y=y,
        )
        self.apply(lambda d: d.add_device(device))
        return device

    def remove_device(self, device_id: str) -> Diagram:
        return self.apply(lambda d: d.remove_device(device_id))

    def connect(self, from_device: str, from_port: int, to_device: str, to_port: int) -> str:
        """Draws a conductor and returns its new id."""
        conductor_id = self._diagram.next_id("E")
        self.apply(lambda d: d.connect(from_device, from_port, to_device, to_port, conductor_id))
        return conductor_id

    def disconnect(self, conductor_id: str) -> Diagram:
        return self.apply(lambda d: d.remove_conductor(conductor_id))

    def toggle_breaker(self, device_id: str) -> Diagram:
        return self.apply(lambda d: d.toggle_breaker(device_id))

    def set_source_signal(self, device_id: str, signal: Union[SignalKind, str]) -> Diagram:
        return self.apply(lambda d: d.set_source_signal(device_id, signal))

    def rename_device(self, device_id: str, label: str) -> Diagram:
        return self.apply(lambda d: d.rename_device(device_id, label))

    def move_device(self, device_id: str, x: float, y: float) -> Diagram:
        return self.apply(lambda d: d.move_device(device_id, x, y))

    # --- Import / Export ---

    def import_json(self, text: Union[str, bytes]) -> Diagram:
        return self._import(lambda: self._parser.parse_json(text))

    def import_record(self, record: Dict[str, Any]) -> Diagram:
        return self._import(lambda: self._parser.parse_record(record))

    def import_file(self, path: Union[str, Path]) -> Diagram:
        return self._import(lambda: self._parser.parse_file(path))

    def export_record(self) -> Dict[str, Any]:
        return self._writer.to_record(self._diagram)

    def export_json(self) -> str:
        return self._writer.to_json(self._diagram)

    def export_file(self, path: Union[str, Path]) -> Path:
        return self._writer.write_file(self._diagram, path)

    def _import(self, load: Callable[[], Diagram]) -> Diagram:
        """
        Loads a diagram and makes it active. Any diagnosable failure is reported as a
        single DiagramImportError and the active diagram is left as it was.
        """
        try:
            diagram = load()
            if self.config.strict_import:
                DiagramValidator(diagram, strict=True).raise_on_errors()
        except DiagnosableError as e:
            logger.warning(f"Diagram import rejected: {e}")
            raise DiagramImportError(e.get_diagnostic_report()) from e

        self._diagram = diagram
        return diagram
