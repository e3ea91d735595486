# tests/test_network_builder.py
import logging

import networkx as nx

from oneline_core import Pin, SignalKind, StepKind
from tests.conftest import base_case_diagram, create_diagram


def _steps(model, a: Pin, b: Pin):
    """All step kinds on the directed edges a -> b."""
    if not model.graph.has_edge(a, b):
        return []
    return [data["step"] for data in model.graph.get_edge_data(a, b).values()]


class TestNetworkModelBuilder:

    def test_every_pin_is_a_node(self, builder_instance, base_case):
        model = builder_instance.build(base_case)
        assert isinstance(model.graph, nx.MultiDiGraph)
        assert set(model.pins) == set(base_case.iter_pins())
        # Two single-pin sources plus four two-pin devices.
        assert model.graph.number_of_nodes() == 10

    def test_conductors_are_bidirectional_wires(self, builder_instance, base_case):
        model = builder_instance.build(base_case)
        assert _steps(model, Pin("UTIL", 0), Pin("BRK_UTIL", 0)) == [StepKind.WIRE]
        assert _steps(model, Pin("BRK_UTIL", 0), Pin("UTIL", 0)) == [StepKind.WIRE]

    def test_breaker_conducts_only_when_closed(self, builder_instance, base_case):
        model = builder_instance.build(base_case)
        assert _steps(model, Pin("BRK_UTIL", 0), Pin("BRK_UTIL", 1)) == [StepKind.PASS_THROUGH]
        assert _steps(model, Pin("BRK_UTIL", 1), Pin("BRK_UTIL", 0)) == [StepKind.PASS_THROUGH]
        assert _steps(model, Pin("BRK_GEN", 0), Pin("BRK_GEN", 1)) == []
        assert _steps(model, Pin("BRK_GEN", 1), Pin("BRK_GEN", 0)) == []

    def test_bus_and_load_always_tie_through(self, builder_instance, base_case):
        model = builder_instance.build(base_case)
        for device_id in ("BUS", "LOAD"):
            assert _steps(model, Pin(device_id, 0), Pin(device_id, 1)) == [StepKind.PASS_THROUGH]
            assert _steps(model, Pin(device_id, 1), Pin(device_id, 0)) == [StepKind.PASS_THROUGH]

    def test_converters_have_one_gated_forward_step(self, builder_instance, conversion_chain):
        model = builder_instance.build(conversion_chain)

        rect = model.graph.get_edge_data(Pin("RECT", 0), Pin("RECT", 1))
        (rect_step,) = rect.values()
        assert rect_step["step"] is StepKind.CONVERSION
        assert rect_step["requires"] is SignalKind.AC
        assert rect_step["emits"] is SignalKind.DC
        assert not model.graph.has_edge(Pin("RECT", 1), Pin("RECT", 0))

        inv = model.graph.get_edge_data(Pin("INV", 0), Pin("INV", 1))
        (inv_step,) = inv.values()
        assert inv_step["requires"] is SignalKind.DC
        assert inv_step["emits"] is SignalKind.AC
        assert not model.graph.has_edge(Pin("INV", 1), Pin("INV", 0))

    def test_sources_are_seeded_with_declared_kind(self, builder_instance):
        diagram = create_diagram(
            [("A", "source", {"signal": "AC"}), ("D", "source", {"signal": "DC"}), ("N", "source", {})],
            [],
        )
        model = builder_instance.build(diagram)
        assert model.sources == ((Pin("A", 0), SignalKind.AC), (Pin("D", 0), SignalKind.DC))

    def test_dangling_conductors_are_excluded_not_fatal(self, builder_instance, caplog):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("L", "load", {})],
            [
                ("OK", "S", 0, "L", 0),
                ("GHOST", "S", 0, "MISSING", 0),
                ("RANGE", "L", 1, "S", 3),
            ],
        )
        with caplog.at_level(logging.WARNING):
            model = builder_instance.build(diagram)

        assert model.excluded_conductors == ("GHOST", "RANGE")
        assert Pin("MISSING", 0) not in model.graph
        assert Pin("S", 3) not in model.graph
        assert _steps(model, Pin("S", 0), Pin("L", 0)) == [StepKind.WIRE]
        assert "GHOST" in caplog.text

    def test_fan_out_keeps_every_conductor(self, builder_instance):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("L1", "load", {}), ("L2", "load", {})],
            [("E1", "S", 0, "L1", 0), ("E2", "S", 0, "L2", 0)],
        )
        model = builder_instance.build(diagram)
        neighbours = [pin for pin, _ in model.successors(Pin("S", 0))]
        assert neighbours == [Pin("L1", 0), Pin("L2", 0)]

    def test_parallel_conductors_between_same_pins_are_distinct_edges(self, builder_instance):
        diagram = create_diagram(
            [("A", "bus", {}), ("B", "bus", {})],
            [("E1", "A", 1, "B", 0), ("E2", "B", 0, "A", 1)],
        )
        model = builder_instance.build(diagram)
        assert model.graph.number_of_edges(Pin("A", 1), Pin("B", 0)) == 2

    def test_conductor_ids_never_collide_with_device_steps(self, builder_instance, propagator_instance):
        # A wire across a rectifier named like the rectifier's own internal step.
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("R", "rectifier", {})],
            [("E1", "S", 0, "R", 0), ("R:0->1", "R", 0, "R", 1)],
        )
        model = builder_instance.build(diagram)
        steps = sorted(_steps(model, Pin("R", 0), Pin("R", 1)), key=lambda s: s.value)
        assert steps == [StepKind.WIRE, StepKind.CONVERSION]
        assert _steps(model, Pin("R", 1), Pin("R", 0)) == [StepKind.WIRE]

        results = propagator_instance.propagate(model)
        assert results.kinds_at(Pin("R", 1)) == frozenset({SignalKind.AC, SignalKind.DC})

    def test_edges_carry_only_step_attributes(self, builder_instance, conversion_chain):
        model = builder_instance.build(conversion_chain)
        for _, _, data in model.graph.edges(data=True):
            assert set(data) == {"step", "requires", "emits"}

    def test_successors_of_unknown_pin_is_empty(self, builder_instance, base_case):
        model = builder_instance.build(base_case)
        assert model.successors(Pin("NOPE", 0)) == []

    def test_builder_does_not_mutate_input(self, builder_instance, base_case):
        builder_instance.build(base_case)
        assert base_case == base_case_diagram()
