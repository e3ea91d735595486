# src/oneline_core/engine.py
"""
The energization engine: the single entry point that turns a `Diagram` into the derived
state the editor displays.

Pipeline:
    Diagram -> NetworkModelBuilder -> NetworkModel
            -> SignalPropagator    -> PropagationResults
            -> derive_energization -> EnergizationState

Every stage is a pure function of its input. The engine memoizes the final state on a
canonical key of the diagram's electrical content, so re-rendering the same diagram, or
a diagram that only differs in labels and positions, does not rerun the search.
"""
import logging
from typing import Optional

from .cache.keys import create_energization_key
from .cache.service import EnergizationCache
from .config import EngineConfig
from .data_structures import Diagram
from .network_builder import NetworkModel, NetworkModelBuilder
from .propagation import (
    EnergizationState,
    MixedSignalPolicy,
    PropagationResults,
    SignalPropagator,
    derive_energization,
)

logger = logging.getLogger(__name__)


class EnergizationEngine:
    """
    Computes and caches the `EnergizationState` of diagram values.

    The engine keeps no state about any particular diagram; the cache only ever maps
    a diagram key to the result that the pure computation would produce anyway.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config: EngineConfig = config or EngineConfig()
        self.cache: Optional[EnergizationCache] = (
            EnergizationCache(self.config.cache_max_entries) if self.config.cache_enabled else None
        )
        self._builder = NetworkModelBuilder()
        self._propagator = SignalPropagator()
        logger.debug(
            "EnergizationEngine initialized (policy=%s, cache=%s).",
            self.config.mixed_signal_policy, "on" if self.cache is not None else "off",
        )

    @property
    def policy(self) -> MixedSignalPolicy:
        return self.config.mixed_signal_policy

    def compute(self, diagram: Diagram) -> EnergizationState:
        """
        Returns the energized devices, energized conductors and conductor kinds of
        `diagram`. Never raises for diagram content; a malformed diagram at worst
        energizes nothing.
        """
        if not isinstance(diagram, Diagram):
            raise TypeError(f"EnergizationEngine.compute expects a Diagram, got {type(diagram).__name__}.")

        if self.cache is None:
            return self._compute_uncached(diagram)

        cache_key = create_energization_key(diagram, self.policy)
        cached_state = self.cache.get(cache_key)
        if cached_state is not None:
            return cached_state

        state = self._compute_uncached(diagram)
        self.cache.put(cache_key, state)
        return state

    def build_model(self, diagram: Diagram) -> NetworkModel:
        """Exposes the pin graph of a diagram, mostly for inspection and debugging."""
        return self._builder.build(diagram)

    def propagate(self, diagram: Diagram) -> PropagationResults:
        """Per-pin reachability for a diagram, without the conductor/device reduction."""
        return self._propagator.propagate(self._builder.build(diagram))

    def _compute_uncached(self, diagram: Diagram) -> EnergizationState:
        model = self._builder.build(diagram)
        results = self._propagator.propagate(model)
        state = derive_energization(diagram, results, self.policy)
        logger.debug(
            "Diagram '%s': %d/%d device(s) and %d/%d conductor(s) energized.",
            diagram.name,
            len(state.energized_devices), len(diagram.devices),
            len(state.energized_conductors), len(diagram.conductors),
        )
        return state


def compute_energization(
    diagram: Diagram,
    policy: MixedSignalPolicy = MixedSignalPolicy.PREFER_DC,
) -> EnergizationState:
    """Uncached, one-shot form of `EnergizationEngine.compute`."""
    engine = EnergizationEngine(EngineConfig(mixed_signal_policy=policy, cache_enabled=False))
    return engine.compute(diagram)
