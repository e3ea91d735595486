# tests/conftest.py
import pytest

from oneline_core import (
    Conductor, Device, DeviceType, Diagram, EnergizationEngine, EngineConfig,
    NetworkModelBuilder, SignalKind, SignalPropagator,
)


@pytest.fixture
def builder_instance():
    return NetworkModelBuilder()


@pytest.fixture
def propagator_instance():
    return SignalPropagator()


@pytest.fixture
def uncached_engine():
    return EnergizationEngine(EngineConfig(cache_enabled=False))


def make_device(device_id: str, type_str: str, **attrs) -> Device:
    """
    Shorthand device factory. `signal` may be given as "AC"/"DC".
    e.g. make_device("UTIL", "source", signal="AC"), make_device("CB1", "breaker", closed=True)
    """
    signal = attrs.pop("signal", None)
    return Device(
        id=device_id,
        type=DeviceType(type_str),
        signal=SignalKind(signal) if signal is not None else None,
        **attrs,
    )


def create_diagram(devices_def: list, conductors_def: list, name: str = "TestDiagram") -> Diagram:
    """
    Programmatically creates a Diagram from compact definitions.
    devices_def:    [("UTIL", "source", {"signal": "AC"}), ("BUS", "bus", {})]
    conductors_def: [("E1", "UTIL", 0, "BUS", 0)]
    """
    devices = tuple(make_device(dev_id, type_str, **dict(attrs)) for dev_id, type_str, attrs in devices_def)
    conductors = tuple(Conductor.between(*c) for c in conductors_def)
    return Diagram(devices=devices, conductors=conductors, name=name)


def base_case_diagram() -> Diagram:
    """UTIL -> closed CB -> BUS -> LOAD, with GEN behind an open CB into the same bus."""
    return create_diagram(
        [
            ("UTIL", "source", {"signal": "AC"}),
            ("BRK_UTIL", "breaker", {"closed": True}),
            ("GEN", "source", {"signal": "AC"}),
            ("BRK_GEN", "breaker", {"closed": False}),
            ("BUS", "bus", {}),
            ("LOAD", "load", {}),
        ],
        [
            ("E1", "UTIL", 0, "BRK_UTIL", 0),
            ("E2", "BRK_UTIL", 1, "BUS", 0),
            ("E3", "GEN", 0, "BRK_GEN", 0),
            ("E4", "BRK_GEN", 1, "BUS", 1),
            ("E5", "BUS", 1, "LOAD", 0),
        ],
        name="BaseCase",
    )


def conversion_chain_diagram() -> Diagram:
    """AC source -> closed CB -> BUS -> rectifier -> inverter -> LOAD."""
    return create_diagram(
        [
            ("SRC", "source", {"signal": "AC"}),
            ("CB", "breaker", {"closed": True}),
            ("BUS", "bus", {}),
            ("RECT", "rectifier", {}),
            ("INV", "inverter", {}),
            ("LOAD", "load", {}),
        ],
        [
            ("W1", "SRC", 0, "CB", 0),
            ("W2", "CB", 1, "BUS", 0),
            ("W3", "BUS", 1, "RECT", 0),
            ("W4", "RECT", 1, "INV", 0),
            ("W5", "INV", 1, "LOAD", 0),
        ],
        name="ConversionChain",
    )


@pytest.fixture
def base_case():
    return base_case_diagram()


@pytest.fixture
def conversion_chain():
    return conversion_chain_diagram()
