# src/oneline_core/propagation/classification.py
"""
Display classification of an energized conductor from the kinds reaching its two ends.

NOTE: this is a presentation policy, not a safety property. A wire that is reachable
by both AC and DC at once has no physically meaningful single kind; the policies below
only decide how such a wire is drawn. Callers that need the full picture should read
`PropagationResults.kinds_at` for both endpoints instead.
"""
import logging
from enum import Enum
from typing import AbstractSet

from ..signals import SignalKind

logger = logging.getLogger(__name__)


class MixedSignalPolicy(Enum):
    """How a conductor reached by both AC and DC is classified for display."""
    # Any DC at either end makes the wire DC.
    PREFER_DC = "prefer_dc"
    # DC at either end makes the wire DC unless both ends are also AC-reachable.
    LEGACY = "legacy"
    # Any AC at either end makes the wire AC.
    PREFER_AC = "prefer_ac"

    def __str__(self):
        return self.value


def classify_conductor(
    kinds_a: AbstractSet[SignalKind],
    kinds_b: AbstractSet[SignalKind],
    policy: MixedSignalPolicy = MixedSignalPolicy.PREFER_DC,
) -> SignalKind:
    """
    Classifies an energized conductor whose endpoints are reached by `kinds_a` and
    `kinds_b` respectively. Both sets are expected to be non-empty.
    """
    any_dc = SignalKind.DC in kinds_a or SignalKind.DC in kinds_b
    any_ac = SignalKind.AC in kinds_a or SignalKind.AC in kinds_b

    if policy is MixedSignalPolicy.PREFER_DC:
        return SignalKind.DC if any_dc else SignalKind.AC
    if policy is MixedSignalPolicy.LEGACY:
        both_ac = SignalKind.AC in kinds_a and SignalKind.AC in kinds_b
        return SignalKind.DC if any_dc and not both_ac else SignalKind.AC
    if policy is MixedSignalPolicy.PREFER_AC:
        return SignalKind.AC if any_ac else SignalKind.DC

    raise ValueError(f"Unknown mixed-signal policy: {policy!r}")
