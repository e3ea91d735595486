# src/oneline_core/propagation/propagator.py

"""
Multi-label reachability over the pin graph, and the derivation of per-device and
per-conductor energization from its result.
"""

import logging
from collections import deque
from typing import Deque, Dict, Set, Tuple

from ..data_structures import Diagram, Pin
from ..devices.conduction import apply_step
from ..network_builder import NetworkModel
from ..signals import SignalKind
from .classification import MixedSignalPolicy, classify_conductor
from .results import EnergizationState, PropagationResults

logger = logging.getLogger(__name__)

State = Tuple[Pin, SignalKind]


class SignalPropagator:
    """
    Computes which signal kinds reach every pin of a `NetworkModel`.

    The search runs over `(pin, kind)` states. Each state is recorded and enqueued at
    most once, so the number of iterations is bounded by |pins| x |SignalKind| and the
    search terminates on any topology, cycles included. The result is the least fixed
    point of the reachability relation and therefore does not depend on the order in
    which states are visited.
    """

    def propagate(self, model: NetworkModel) -> PropagationResults:
        reached: Dict[Pin, Set[SignalKind]] = {}
        frontier: Deque[State] = deque()

        def record(pin: Pin, kind: SignalKind):
            kinds = reached.setdefault(pin, set())
            if kind not in kinds:
                kinds.add(kind)
                frontier.append((pin, kind))

        for pin, kind in model.sources:
            record(pin, kind)

        visited = 0
        while frontier:
            pin, kind = frontier.popleft()
            visited += 1
            for neighbour, edge in model.successors(pin):
                out_kind = apply_step(edge["step"], kind, edge.get("requires"), edge.get("emits"))
                if out_kind is not None:
                    record(neighbour, out_kind)

        logger.debug(
            "Propagation reached a fixed point after %d state(s); %d of %d pin(s) reached.",
            visited, len(reached), model.graph.number_of_nodes(),
        )
        return PropagationResults(
            reached={pin: frozenset(kinds) for pin, kinds in reached.items()},
            states_visited=visited,
        )


def derive_energization(
    diagram: Diagram,
    results: PropagationResults,
    policy: MixedSignalPolicy = MixedSignalPolicy.PREFER_DC,
) -> EnergizationState:
    """
    Reduces pin reachability to the collaborator-facing state.

    - A device is energized when any of its pins is reached.
    - A conductor is energized when both of its endpoint pins are reached.
    - Each energized conductor gets a display kind according to `policy`.
    """
    energized_devices = {
        device.id for device in diagram.devices
        if any(results.is_reached(pin) for pin in device.pins)
    }

    energized_conductors = set()
    conductor_signals: Dict[str, SignalKind] = {}
    for conductor in diagram.conductors:
        kinds_a = results.kinds_at(conductor.from_pin)
        kinds_b = results.kinds_at(conductor.to_pin)
        if not kinds_a or not kinds_b:
            continue
        energized_conductors.add(conductor.id)
        conductor_signals[conductor.id] = classify_conductor(kinds_a, kinds_b, policy)

    return EnergizationState(
        energized_devices=frozenset(energized_devices),
        energized_conductors=frozenset(energized_conductors),
        conductor_signals=conductor_signals,
    )
