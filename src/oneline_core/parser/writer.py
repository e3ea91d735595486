# src/oneline_core/parser/writer.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..data_structures import Device, Diagram
from ..signals import DeviceType

logger = logging.getLogger(__name__)


class DiagramWriter:
    """
    Produces the exchange format read by `DiagramParser`. The output of `to_record` for
    any diagram loaded by the parser parses back to an equal diagram.
    """

    def to_record(self, diagram: Diagram) -> Dict[str, Any]:
        record: Dict[str, Any] = {"version": diagram.version}
        if diagram.name is not None:
            record["name"] = diagram.name
        record["nodes"] = [self._device_record(d) for d in diagram.devices]
        record["edges"] = [
            {
                "id": c.id,
                "from": c.from_pin.device_id,
                "fromPort": c.from_pin.port,
                "to": c.to_pin.device_id,
                "toPort": c.to_pin.port,
            }
            for c in diagram.conductors
        ]
        return record

    def to_json(self, diagram: Diagram, indent: int = 2) -> str:
        return json.dumps(self.to_record(diagram), indent=indent)

    def write_file(self, diagram: Diagram, path: Union[str, Path]) -> Path:
        """Writes JSON for a `.json` path and YAML otherwise. Returns the resolved path."""
        target = Path(path).resolve()
        if target.suffix.lower() == ".json":
            text = self.to_json(diagram)
        else:
            text = yaml.safe_dump(self.to_record(diagram), sort_keys=False)
        target.write_text(text, encoding="utf-8")
        logger.info(f"Wrote diagram '{diagram.name}' to {target}")
        return target

    @staticmethod
    def _device_record(device: Device) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": device.id,
            "type": device.type.value,
            "label": device.label,
            "x": device.x,
            "y": device.y,
        }
        if device.type is DeviceType.SOURCE and device.signal is not None:
            record["sourceSignal"] = device.signal.value
        if device.type is DeviceType.BREAKER:
            record["closed"] = device.closed
        return record
