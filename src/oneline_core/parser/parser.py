# src/oneline_core/parser/parser.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import cerberus
import yaml

from ..data_structures import DIAGRAM_FORMAT_VERSION, Conductor, Device, Diagram
from ..errors import MalformedDiagramError
from ..signals import DeviceType, SignalKind
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

DEVICE_TYPE_NAMES = [t.value for t in DeviceType]
SIGNAL_KIND_NAMES = [k.value for k in SignalKind]


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator adding a uniqueness rule for lists of records."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return # Let the 'type: list' rule handle this.

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue # Let sub-schema validation handle this.

            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(set(map(str, duplicates)))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class DiagramParser:
    """
    Loads and validates a diagram from its exchange format (a mapping, JSON text, or a
    JSON/YAML file) and returns an immutable `Diagram`.

    Validation is strict about shape and never coerces values. It is deliberately *not*
    strict about references: a conductor naming a missing device or terminal is loaded
    as-is and later excluded from the pin graph.
    """
    _id_rule = {"type": "string", "required": True, "empty": False}

    _node_schema = {
        "id": _id_rule,
        "type": {"type": "string", "required": True, "allowed": DEVICE_TYPE_NAMES},
        "label": {"type": "string", "required": False},
        "x": {"type": "number", "required": False},
        "y": {"type": "number", "required": False},
        "sourceSignal": {"type": "string", "required": False, "nullable": True, "allowed": SIGNAL_KIND_NAMES},
        "closed": {"type": "boolean", "required": False, "nullable": True},
    }

    _edge_schema = {
        "id": _id_rule,
        "from": {"type": "string", "required": True, "empty": False},
        "fromPort": {"type": "integer", "required": True},
        "to": {"type": "string", "required": True, "empty": False},
        "toPort": {"type": "integer", "required": True},
    }

    _schema = {
        "version": {"type": "integer", "required": True, "allowed": [DIAGRAM_FORMAT_VERSION]},
        "name": {"type": "string", "required": False, "nullable": True},
        "nodes": {"type": "list", "required": True, "unique_elements_by_key": "id",
                  "schema": {"type": "dict", "schema": _node_schema}},
        "edges": {"type": "list", "required": True, "unique_elements_by_key": "id",
                  "schema": {"type": "dict", "schema": _edge_schema}},
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("DiagramParser initialized with strict structural validation rules.")

    def parse_record(self, record: Any, source: Optional[Path] = None) -> Diagram:
        """Validates an already-decoded payload and builds the Diagram it describes."""
        if not isinstance(record, dict):
            raise ParsingError(
                details=f"The root of a diagram payload must be a mapping, got {type(record).__name__}.",
                file_path=source,
            )
        if not self._validator.validate(record):
            raise SchemaValidationError(self._validator.errors, source)

        document = self._validator.document
        try:
            diagram = Diagram(
                name=document.get("name"),
                version=document["version"],
                devices=tuple(self._build_device(n) for n in document["nodes"]),
                conductors=tuple(self._build_conductor(e) for e in document["edges"]),
            )
        except MalformedDiagramError as e:
            raise SchemaValidationError({"nodes": [e.details]}, source) from e

        logger.info(
            "Loaded diagram '%s' with %d device(s) and %d conductor(s).",
            diagram.name, len(diagram.devices), len(diagram.conductors),
        )
        return diagram

    def parse_json(self, text: Union[str, bytes], source: Optional[Path] = None) -> Diagram:
        try:
            record = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParsingError(details=f"Invalid JSON: {e}", file_path=source) from e
        return self.parse_record(record, source)

    def parse_yaml(self, text: str, source: Optional[Path] = None) -> Diagram:
        try:
            record = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if record is None:
            raise ParsingError(details="The YAML payload is empty or contains no valid content.", file_path=source)
        return self.parse_record(record, source)

    def parse_file(self, path: Union[str, Path]) -> Diagram:
        """Loads a `.json` file as JSON and anything else (`.yaml`, `.yml`) as YAML."""
        source = Path(path).resolve()
        logger.info(f"Loading diagram from file: {source}")
        text = self._read_text(source)
        if source.suffix.lower() == ".json":
            return self.parse_json(text, source)
        return self.parse_yaml(text, source)

    def _read_text(self, source: Path) -> str:
        if not source.is_file():
            raise ParsingError(details=f"Diagram file not found at path: {source}", file_path=source)
        try:
            return source.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except UnicodeDecodeError as e:
            raise ParsingError(details=f"File is not valid UTF-8 text: {e}", file_path=source) from e

    @staticmethod
    def _build_device(node: Dict[str, Any]) -> Device:
        device_type = DeviceType(node["type"])
        signal = node.get("sourceSignal") if device_type is DeviceType.SOURCE else None
        return Device(
            id=node["id"],
            type=device_type,
            signal=SignalKind(signal) if signal is not None else None,
            closed=bool(node.get("closed")) if device_type is DeviceType.BREAKER else False,
            label=node.get("label", ""),
            x=node.get("x", 0.0),
            y=node.get("y", 0.0),
        )

    @staticmethod
    def _build_conductor(edge: Dict[str, Any]) -> Conductor:
        return Conductor.between(edge["id"], edge["from"], edge["fromPort"], edge["to"], edge["toPort"])
