# src/oneline_core/network_builder.py

"""
Defines the NetworkModelBuilder, which turns an immutable `Diagram` into the directed
pin graph walked by the signal propagator.

Architectural Role:
The builder is the bridge between the user-facing diagram (devices and the wires drawn
between them) and the purely structural view needed for energization:

1.  **Pin Enumeration:** Every terminal of every device becomes a node of a
    `networkx.MultiDiGraph`, keyed by its `Pin`.

2.  **Conductor Edges:** Every well-formed conductor contributes a `WIRE` edge in each
    direction between its two endpoint pins. Conductors never convert.

3.  **Internal Edges:** Every device contributes the steps listed in its conduction
    rule (`devices.conduction.internal_steps`). Only converters produce directional,
    signal-gated `CONVERSION` edges.

4.  **Fail-Soft Exclusion:** A conductor that names a missing device or an out-of-range
    terminal is left out of the graph and reported in `excluded_conductors`. A human
    editor may be mid-edit, so this is never an error.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import networkx as nx

from .data_structures import Diagram, Pin
from .devices.conduction import internal_steps
from .errors import EnergizationError, format_diagnostic_report
from .signals import DeviceType, SignalKind, StepKind

logger = logging.getLogger(__name__)

EdgeData = Dict[str, Any]


@dataclass(frozen=True)
class NetworkModel:
    """
    The pin-level structural model of one diagram value.

    `graph` edges carry the attributes `step` (StepKind), `requires` and `emits`
    (SignalKind or None). Edge keys are `("wire", conductor_id)` for conductors and
    `("internal", device_id, from_port, to_port)` for device steps, so no conductor id
    can collide with a device step.
    """
    graph: nx.MultiDiGraph
    sources: Tuple[Tuple[Pin, SignalKind], ...]
    excluded_conductors: Tuple[str, ...]

    def successors(self, pin: Pin) -> List[Tuple[Pin, EdgeData]]:
        """Pins reachable from `pin` in one structural step, in edge insertion order."""
        if pin not in self.graph:
            return []
        return [
            (neighbour, data)
            for neighbour, edges in self.graph.adj[pin].items()
            for data in edges.values()
        ]

    @property
    def pins(self) -> List[Pin]:
        return list(self.graph.nodes)


class NetworkModelBuilder:
    """
    Builds a `NetworkModel` from a `Diagram`. Holds no state between calls.
    """

    def build(self, diagram: Diagram) -> NetworkModel:
        """
        Main entry point. Builds the pin graph for `diagram` without modifying it.
        """
        logger.debug(
            "Building pin graph for diagram '%s' (%d devices, %d conductors).",
            diagram.name, len(diagram.devices), len(diagram.conductors),
        )
        try:
            graph = nx.MultiDiGraph()
            graph.add_nodes_from(diagram.iter_pins())

            excluded = self._add_conductor_edges(graph, diagram)
            self._add_internal_edges(graph, diagram)
            sources = self._collect_sources(diagram)
        except Exception as e:
            report = format_diagnostic_report(
                error_type=f"An Unexpected Error Occurred ({type(e).__name__})",
                details=f"The network model builder encountered an unexpected internal error: {e}",
                suggestion="This may indicate a bug in OneLine Core. Please review the traceback.",
                context={'target': diagram.name}
            )
            raise EnergizationError(report) from e

        logger.debug(
            "Pin graph built: %d pins, %d directed steps, %d source seed(s), %d excluded conductor(s).",
            graph.number_of_nodes(), graph.number_of_edges(), len(sources), len(excluded),
        )
        return NetworkModel(graph=graph, sources=sources, excluded_conductors=excluded)

    def _add_conductor_edges(self, graph: nx.MultiDiGraph, diagram: Diagram) -> Tuple[str, ...]:
        excluded: List[str] = []
        for conductor in diagram.conductors:
            if not diagram.is_well_formed(conductor):
                logger.warning(
                    "Excluding conductor '%s' (%s -> %s): endpoint names a missing device or terminal.",
                    conductor.id, conductor.from_pin, conductor.to_pin,
                )
                excluded.append(conductor.id)
                continue

            a, b = conductor.endpoints
            key = ("wire", conductor.id)
            graph.add_edge(a, b, key=key, step=StepKind.WIRE, requires=None, emits=None)
            graph.add_edge(b, a, key=key, step=StepKind.WIRE, requires=None, emits=None)
        return tuple(excluded)

    def _add_internal_edges(self, graph: nx.MultiDiGraph, diagram: Diagram):
        for device in diagram.devices:
            for step in internal_steps(device):
                graph.add_edge(
                    device.pin(step.from_port),
                    device.pin(step.to_port),
                    key=("internal", device.id, step.from_port, step.to_port),
                    step=step.step,
                    requires=step.requires,
                    emits=step.emits,
                )

    def _collect_sources(self, diagram: Diagram) -> Tuple[Tuple[Pin, SignalKind], ...]:
        seeds: List[Tuple[Pin, SignalKind]] = []
        for device in diagram.devices:
            if device.type is not DeviceType.SOURCE:
                continue
            if device.signal is None:
                logger.debug("Source '%s' declares no signal kind and will not be seeded.", device.id)
                continue
            seeds.append((device.pin(0), device.signal))
        return tuple(seeds)
