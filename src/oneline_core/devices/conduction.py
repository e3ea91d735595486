# src/oneline_core/devices/conduction.py
"""
The internal conduction table: how a signal may cross from one terminal of a device
to another terminal of the same device.

This is the only place in the library that encodes device "physics". Every rule is
written out in `internal_steps`, which dispatches once on the device type, so the
whole table can be audited in one screen:

    source      no internal step (its single pin is seeded directly)
    breaker     L <-> R, signal unchanged, only while closed
    bus         L <-> R, signal unchanged
    load        L <-> R, signal unchanged (lets loads be daisy-chained)
    rectifier   L -> R only, fires for AC in, emits DC
    inverter    L -> R only, fires for DC in, emits AC

Conversion never happens on a conductor, only across one of these steps.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from ..signals import DeviceType, SignalKind, StepKind

if TYPE_CHECKING:
    from ..data_structures import Device

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InternalStep:
    """A directed step between two terminals of the same device."""
    from_port: int
    to_port: int
    step: StepKind
    requires: Optional[SignalKind] = None
    emits: Optional[SignalKind] = None


def apply_step(
    step: StepKind,
    incoming: SignalKind,
    requires: Optional[SignalKind] = None,
    emits: Optional[SignalKind] = None,
) -> Optional[SignalKind]:
    """
    Transfer function shared by conductor edges and internal steps.

    WIRE and PASS_THROUGH preserve the kind. CONVERSION emits its output kind only when
    the incoming kind matches its required input; otherwise it yields None and the
    edge simply does not fire.
    """
    if step is StepKind.CONVERSION:
        return emits if incoming is requires else None
    return incoming


def _tie(left: int = 0, right: int = 1) -> List[InternalStep]:
    return [
        InternalStep(left, right, StepKind.PASS_THROUGH),
        InternalStep(right, left, StepKind.PASS_THROUGH),
    ]


def internal_steps(device: "Device") -> List[InternalStep]:
    """Returns the internal steps a device currently offers, in a fixed order."""
    device_type = device.type

    if device_type is DeviceType.SOURCE:
        return []
    if device_type is DeviceType.BREAKER:
        return _tie() if device.closed else []
    if device_type is DeviceType.BUS:
        return _tie()
    if device_type is DeviceType.LOAD:
        return _tie()
    if device_type is DeviceType.RECTIFIER:
        return [InternalStep(0, 1, StepKind.CONVERSION, requires=SignalKind.AC, emits=SignalKind.DC)]
    if device_type is DeviceType.INVERTER:
        return [InternalStep(0, 1, StepKind.CONVERSION, requires=SignalKind.DC, emits=SignalKind.AC)]

    # Unreachable while DeviceType stays closed; a new member must be added above.
    raise ValueError(f"No conduction rule defined for device type '{device_type}'.")
