# src/oneline_core/devices/__init__.py
import logging
logger = logging.getLogger(__name__)

from .ports import PortSpec, PORT_LAYOUTS, port_count, port_role, is_valid_port
from .conduction import InternalStep, apply_step, internal_steps

__all__ = [
    "PortSpec",
    "PORT_LAYOUTS",
    "port_count",
    "port_role",
    "is_valid_port",
    "InternalStep",
    "apply_step",
    "internal_steps",
]
