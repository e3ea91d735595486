# src/oneline_core/starter.py
"""The demo topology the editor opens with."""
from .data_structures import Conductor, Device, Diagram
from .signals import DeviceType, SignalKind


def starter_diagram() -> Diagram:
    """
    Utility and generator sources feeding a main bus and a critical load.

    The generator breaker starts open. A rectifier and an inverter are placed but left
    unconnected so a user can wire up a UPS path in the editor.
    """
    return Diagram(
        name="Utility-Generator-Load (+ converters)",
        devices=(
            Device("UTIL", DeviceType.SOURCE, signal=SignalKind.AC, label="Utility (AC Source)", x=120, y=80),
            Device("BRK_UTIL", DeviceType.BREAKER, closed=True, label="CB-UTIL", x=260, y=80),
            Device("GEN", DeviceType.SOURCE, signal=SignalKind.AC, label="Generator (AC Source)", x=120, y=240),
            Device("BRK_GEN", DeviceType.BREAKER, closed=False, label="CB-GEN", x=260, y=240),
            Device("BUS", DeviceType.BUS, label="Main Bus", x=440, y=160),
            Device("RECT1", DeviceType.RECTIFIER, label="Rectifier", x=520, y=80),
            Device("INV1", DeviceType.INVERTER, label="Inverter", x=520, y=240),
            Device("LOAD", DeviceType.LOAD, label="Critical Load", x=680, y=160),
        ),
        conductors=(
            Conductor.between("E1", "UTIL", 0, "BRK_UTIL", 0),
            Conductor.between("E2", "BRK_UTIL", 1, "BUS", 0),
            Conductor.between("E3", "GEN", 0, "BRK_GEN", 0),
            Conductor.between("E4", "BRK_GEN", 1, "BUS", 1),
            Conductor.between("E5", "BUS", 1, "LOAD", 0),
        ),
    )
