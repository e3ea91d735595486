# src/oneline_core/propagation/__init__.py
"""
Public interface of the energization search.

The package holds the multi-label propagator, the reduction of its output to
device/conductor energization, the conductor display-classification policy, and the
formal result contracts consumed by the engine and the session.
"""
from .results import PropagationResults, EnergizationState
from .classification import MixedSignalPolicy, classify_conductor
from .propagator import SignalPropagator, derive_energization

__all__ = [
    # Formal Result Contracts
    "PropagationResults",
    "EnergizationState",
    # Classification
    "MixedSignalPolicy",
    "classify_conductor",
    # Search and Derivation
    "SignalPropagator",
    "derive_energization",
]
