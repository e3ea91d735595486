# src/oneline_core/cache/keys.py
"""
Centralizes the logic for generating cache keys for energization results.

A key must change whenever anything that can influence energization changes, and must
stay the same for edits that cannot (moving or renaming a device, reordering the device
or conductor lists). Keeping that rule in one function prevents different callers from
building subtly different keys for the same result.
"""
from typing import Tuple

from ..data_structures import Diagram
from ..propagation.classification import MixedSignalPolicy


def create_diagram_key(diagram: Diagram) -> Tuple:
    """
    Canonical, order-independent key of the electrical content of a diagram.

    Included: device ids and types, source signal kinds, breaker states, conductor ids
    and endpoints. Excluded: labels, positions, the diagram name.
    """
    devices = tuple(sorted(
        (
            d.id,
            d.type.value,
            d.signal.value if d.signal is not None else None,
            bool(d.closed),
        )
        for d in diagram.devices
    ))
    # Endpoints are sorted within each conductor because a conductor is an unordered pair.
    conductors = tuple(sorted(
        (c.id,) + tuple((p.device_id, p.port) for p in c.canonical_endpoints())
        for c in diagram.conductors
    ))
    return ("diagram", diagram.version, devices, conductors)


def create_energization_key(diagram: Diagram, policy: MixedSignalPolicy) -> Tuple:
    """
    Key for a derived `EnergizationState`. The classification policy is part of the key
    because it changes the conductor kinds reported for the same reachability.
    """
    return ("energization", policy.value) + create_diagram_key(diagram)[1:]
