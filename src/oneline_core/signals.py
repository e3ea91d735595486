# src/oneline_core/signals.py
from enum import Enum, auto


class SignalKind(Enum):
    """
    The kind of current a pin or conductor can carry. The propagator treats this as
    an open enumeration: it never assumes exactly two members.
    """
    AC = "AC"
    DC = "DC"

    def __str__(self):
        return self.value


class DeviceType(Enum):
    """The closed set of device types a one-line diagram may contain."""
    SOURCE = "source"
    BREAKER = "breaker"
    BUS = "bus"
    LOAD = "load"
    RECTIFIER = "rectifier"
    INVERTER = "inverter"

    def __str__(self):
        return self.value


class StepKind(Enum):
    """
    How a single edge of the pin graph treats the signal crossing it.
    """
    WIRE = auto()          # User-drawn conductor; kind preserved, both directions.
    PASS_THROUGH = auto()  # Internal tie (closed breaker, bus, load); kind preserved.
    CONVERSION = auto()    # Converter internal step; fires only for its required input kind.
