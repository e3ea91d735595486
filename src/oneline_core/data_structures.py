# src/oneline_core/data_structures.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, Optional, Tuple, Union

from .devices.ports import is_valid_port, port_count
from .errors import DiagramEditError, MalformedDiagramError
from .signals import DeviceType, SignalKind

logger = logging.getLogger(__name__)

DIAGRAM_FORMAT_VERSION = 1


@dataclass(frozen=True, order=True)
class Pin:
    """A single device terminal, identified by its device id and terminal index."""
    device_id: str
    port: int

    def __str__(self):
        return f"{self.device_id}#{self.port}"


@dataclass(frozen=True)
class Device:
    """
    One symbol on the one-line diagram.

    `signal` is only meaningful for sources and `closed` only for breakers. `label`,
    `x` and `y` are carried for the editor and never influence energization.
    """
    id: str
    type: DeviceType
    signal: Optional[SignalKind] = None
    closed: bool = False
    label: str = ""
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if not isinstance(self.type, DeviceType):
            object.__setattr__(self, "type", DeviceType(self.type))
        if self.signal is not None and not isinstance(self.signal, SignalKind):
            object.__setattr__(self, "signal", SignalKind(self.signal))

    @property
    def port_count(self) -> int:
        return port_count(self.type)

    @property
    def pins(self) -> Tuple[Pin, ...]:
        return tuple(Pin(self.id, p) for p in range(self.port_count))

    def pin(self, port: int) -> Pin:
        return Pin(self.id, port)


@dataclass(frozen=True)
class Conductor:
    """
    A user-drawn wire joining exactly two terminals. The pair is unordered: which end
    is `from_pin` only records how the wire was drawn.
    """
    id: str
    from_pin: Pin
    to_pin: Pin

    @classmethod
    def between(cls, conductor_id: str, from_device: str, from_port: int, to_device: str, to_port: int) -> Conductor:
        return cls(conductor_id, Pin(from_device, from_port), Pin(to_device, to_port))

    @property
    def endpoints(self) -> Tuple[Pin, Pin]:
        return (self.from_pin, self.to_pin)

    def canonical_endpoints(self) -> Tuple[Pin, Pin]:
        """The endpoint pair in sorted order, so that A-B and B-A compare equal."""
        return tuple(sorted(self.endpoints))

    def touches(self, device_id: str) -> bool:
        return self.from_pin.device_id == device_id or self.to_pin.device_id == device_id


@dataclass(frozen=True)
class Diagram:
    """
    The complete, immutable one-line diagram: devices plus the conductors joining them.

    Every edit method returns a new Diagram and leaves `self` untouched, so a diagram
    that is being read by the engine can never change underneath it.
    """
    devices: Tuple[Device, ...] = ()
    conductors: Tuple[Conductor, ...] = ()
    name: Optional[str] = None
    version: int = DIAGRAM_FORMAT_VERSION

    _device_index: Dict[str, Device] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "devices", tuple(self.devices))
        object.__setattr__(self, "conductors", tuple(self.conductors))

        index: Dict[str, Device] = {}
        duplicates = []
        for device in self.devices:
            if device.id in index:
                duplicates.append(device.id)
            index[device.id] = device
        if duplicates:
            raise MalformedDiagramError(
                f"Device ids must be unique within a diagram. Duplicated id(s): {sorted(set(duplicates))}"
            )
        object.__setattr__(self, "_device_index", index)

    # --- Lookups ---

    def device(self, device_id: str) -> Optional[Device]:
        return self._device_index.get(device_id)

    def has_device(self, device_id: str) -> bool:
        return device_id in self._device_index

    def conductor(self, conductor_id: str) -> Optional[Conductor]:
        return next((c for c in self.conductors if c.id == conductor_id), None)

    def conductors_at(self, device_id: str) -> Tuple[Conductor, ...]:
        return tuple(c for c in self.conductors if c.touches(device_id))

    def iter_pins(self) -> Iterator[Pin]:
        for device in self.devices:
            yield from device.pins

    def is_well_formed(self, conductor: Conductor) -> bool:
        """True when both endpoints name an existing device and an in-range terminal."""
        for pin in conductor.endpoints:
            device = self.device(pin.device_id)
            if device is None or not is_valid_port(device.type, pin.port):
                return False
        return True

    def next_id(self, prefix: str) -> str:
        """First `<prefix><n>` (n >= 1) that is not yet used by any device or conductor."""
        used = set(self._device_index) | {c.id for c in self.conductors}
        n = 1
        while f"{prefix}{n}" in used:
            n += 1
        return f"{prefix}{n}"

    # --- Pure edits ---

    def add_device(self, device: Device) -> Diagram:
        if self.has_device(device.id):
            raise DiagramEditError(device.id, f"A device with id '{device.id}' already exists.")
        return replace(self, devices=self.devices + (device,))

    def remove_device(self, device_id: str) -> Diagram:
        """Removes a device together with every conductor attached to it."""
        self._require_device(device_id)
        return replace(
            self,
            devices=tuple(d for d in self.devices if d.id != device_id),
            conductors=tuple(c for c in self.conductors if not c.touches(device_id)),
        )

    def add_conductor(self, conductor: Conductor) -> Diagram:
        if self.conductor(conductor.id) is not None:
            raise DiagramEditError(conductor.id, f"A conductor with id '{conductor.id}' already exists.")
        return replace(self, conductors=self.conductors + (conductor,))

    def connect(
        self,
        from_device: str,
        from_port: int,
        to_device: str,
        to_port: int,
        conductor_id: Optional[str] = None,
    ) -> Diagram:
        """Draws a new conductor between two distinct, existing terminals."""
        if (from_device, from_port) == (to_device, to_port):
            raise DiagramEditError(
                from_device,
                f"A conductor cannot start and end on the same terminal ({Pin(from_device, from_port)}).",
            )
        for device_id, port in ((from_device, from_port), (to_device, to_port)):
            device = self._require_device(device_id)
            if not is_valid_port(device.type, port):
                raise DiagramEditError(
                    device_id,
                    f"Device '{device_id}' ({device.type}) has no terminal {port}; "
                    f"valid terminals are 0..{device.port_count - 1}.",
                )
        conductor_id = conductor_id or self.next_id("E")
        return self.add_conductor(Conductor.between(conductor_id, from_device, from_port, to_device, to_port))

    def remove_conductor(self, conductor_id: str) -> Diagram:
        if self.conductor(conductor_id) is None:
            raise DiagramEditError(conductor_id, f"No conductor with id '{conductor_id}' exists.")
        return replace(self, conductors=tuple(c for c in self.conductors if c.id != conductor_id))

    def toggle_breaker(self, device_id: str) -> Diagram:
        breaker = self._require_device(device_id, DeviceType.BREAKER)
        return self._replace_device(replace(breaker, closed=not breaker.closed))

    def set_breaker(self, device_id: str, closed: bool) -> Diagram:
        breaker = self._require_device(device_id, DeviceType.BREAKER)
        return self._replace_device(replace(breaker, closed=bool(closed)))

    def set_source_signal(self, device_id: str, signal: Union[SignalKind, str]) -> Diagram:
        source = self._require_device(device_id, DeviceType.SOURCE)
        return self._replace_device(replace(source, signal=SignalKind(signal)))

    def rename_device(self, device_id: str, label: str) -> Diagram:
        return self._replace_device(replace(self._require_device(device_id), label=label))

    def move_device(self, device_id: str, x: float, y: float) -> Diagram:
        return self._replace_device(replace(self._require_device(device_id), x=x, y=y))

    def _replace_device(self, updated: Device) -> Diagram:
        return replace(self, devices=tuple(updated if d.id == updated.id else d for d in self.devices))

    def _require_device(self, device_id: str, expected_type: Optional[DeviceType] = None) -> Device:
        device = self.device(device_id)
        if device is None:
            raise DiagramEditError(device_id, f"No device with id '{device_id}' exists.")
        if expected_type is not None and device.type is not expected_type:
            raise DiagramEditError(
                device_id,
                f"Device '{device_id}' is a {device.type}, not a {expected_type}.",
            )
        return device
