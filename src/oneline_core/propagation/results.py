# src/oneline_core/propagation/results.py
"""
Formal, immutable result contracts of the energization pipeline.

`PropagationResults` is the raw output of the search (which kinds reach which pin);
`EnergizationState` is what collaborators read: energized devices, energized
conductors and the display classification of each energized conductor. Both are
frozen so a cached result can be shared between callers without copying.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from ..data_structures import Pin
from ..signals import SignalKind


@dataclass(frozen=True)
class PropagationResults:
    """
    For every pin the search touched, the set of signal kinds that reach it.
    Pins that are absent were never reached.
    """
    reached: Mapping[Pin, FrozenSet[SignalKind]]
    states_visited: int = 0

    def __post_init__(self):
        object.__setattr__(self, "reached", MappingProxyType(dict(self.reached)))

    def kinds_at(self, pin: Pin) -> FrozenSet[SignalKind]:
        return self.reached.get(pin, frozenset())

    def is_reached(self, pin: Pin) -> bool:
        return bool(self.reached.get(pin))


@dataclass(frozen=True)
class EnergizationState:
    """
    The derived state of one diagram value, and the only thing the UI reads back.
    All queries are plain lookups; nothing is recomputed per query.
    """
    energized_devices: FrozenSet[str]
    energized_conductors: FrozenSet[str]
    conductor_signals: Mapping[str, SignalKind] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "energized_devices", frozenset(self.energized_devices))
        object.__setattr__(self, "energized_conductors", frozenset(self.energized_conductors))
        object.__setattr__(self, "conductor_signals", MappingProxyType(dict(self.conductor_signals)))

    def is_device_energized(self, device_id: str) -> bool:
        return device_id in self.energized_devices

    def is_conductor_energized(self, conductor_id: str) -> bool:
        return conductor_id in self.energized_conductors

    def conductor_signal(self, conductor_id: str) -> Optional[SignalKind]:
        """Display kind of an energized conductor; None when the conductor is dead or unknown."""
        return self.conductor_signals.get(conductor_id)

    def __eq__(self, other):
        if not isinstance(other, EnergizationState):
            return NotImplemented
        return (
            self.energized_devices == other.energized_devices
            and self.energized_conductors == other.energized_conductors
            and dict(self.conductor_signals) == dict(other.conductor_signals)
        )

    def __hash__(self):
        return hash((
            self.energized_devices,
            self.energized_conductors,
            frozenset(self.conductor_signals.items()),
        ))
