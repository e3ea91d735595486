# src/oneline_core/devices/ports.py
"""
Static terminal layout for every device type.

The number of terminals and, for converters, the signal role of each terminal are
properties of the device *type*, never of an individual instance.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..signals import DeviceType, SignalKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortSpec:
    """One terminal of a device type. `role` is only set for converter terminals."""
    name: str
    role: Optional[SignalKind] = None


PORT_LAYOUTS: Dict[DeviceType, Tuple[PortSpec, ...]] = {
    DeviceType.SOURCE: (PortSpec("out"),),
    DeviceType.BREAKER: (PortSpec("L"), PortSpec("R")),
    DeviceType.BUS: (PortSpec("L"), PortSpec("R")),
    DeviceType.LOAD: (PortSpec("L"), PortSpec("R")),
    # AC in on the left, DC out on the right.
    DeviceType.RECTIFIER: (PortSpec("L", SignalKind.AC), PortSpec("R", SignalKind.DC)),
    # DC in on the left, AC out on the right.
    DeviceType.INVERTER: (PortSpec("L", SignalKind.DC), PortSpec("R", SignalKind.AC)),
}


def port_count(device_type: DeviceType) -> int:
    """Number of terminals a device of this type exposes."""
    return len(PORT_LAYOUTS[device_type])


def port_role(device_type: DeviceType, port: int) -> Optional[SignalKind]:
    """
    The signal role of terminal `port`, or None for role-less terminals and for
    out-of-range indices.
    """
    layout = PORT_LAYOUTS[device_type]
    if 0 <= port < len(layout):
        return layout[port].role
    return None


def is_valid_port(device_type: DeviceType, port: int) -> bool:
    return isinstance(port, int) and not isinstance(port, bool) and 0 <= port < port_count(device_type)
