# src/oneline_core/validation/diagram_validator.py
import logging
from collections import Counter
from typing import List

from ..data_structures import Diagram
from ..devices.ports import is_valid_port, port_role
from ..signals import DeviceType
from .exceptions import DiagramValidationError
from .issue_codes import DiagramIssueCode
from .issues import ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)


class DiagramValidator:
    """
    Reports structural problems in a diagram without changing how it is energized.

    The engine already handles every problem listed here softly (a dangling conductor
    is simply left out of the pin graph). The validator exists so the editor can show
    the user *why* part of a network stays dark.
    """

    def __init__(self, diagram: Diagram, strict: bool = False):
        if not isinstance(diagram, Diagram):
            raise TypeError("DiagramValidator requires a Diagram value.")
        self.diagram = diagram
        # Strict mode treats conductors the engine would exclude as errors.
        self._reference_level = ValidationIssueLevel.ERROR if strict else ValidationIssueLevel.WARNING
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found (errors, warnings and info).
        Callers decide whether ERROR-level issues should stop them.
        """
        self.issues = []
        logger.debug(f"Validating diagram '{self.diagram.name}'...")
        self._check_conductor_ids()
        self._check_conductor_endpoints()
        self._check_sources()
        self._check_isolated_devices()

        if self.issues:
            errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
            warnings = sum(1 for i in self.issues if i.level == ValidationIssueLevel.WARNING)
            infos = sum(1 for i in self.issues if i.level == ValidationIssueLevel.INFO)
            logger.info(f"Validation complete. Found: {errors} errors, {warnings} warnings, {infos} info messages.")
        else:
            logger.debug("Validation complete with no issues found.")
        return self.issues

    def raise_on_errors(self) -> List[ValidationIssue]:
        """Validates and raises `DiagramValidationError` if any issue is ERROR-level."""
        issues = self.validate()
        if any(i.level == ValidationIssueLevel.ERROR for i in issues):
            raise DiagramValidationError(issues)
        return issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: DiagramIssueCode, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            device_id=kwargs.get('device_id'), conductor_id=kwargs.get('conductor_id'),
            details=kwargs,
        ))

    def _check_conductor_ids(self):
        counts = Counter(c.id for c in self.diagram.conductors)
        for conductor_id, count in sorted(counts.items()):
            if count > 1:
                self._add_issue(ValidationIssueLevel.ERROR, DiagramIssueCode.CONDUCTOR_ID_DUPLICATE,
                                conductor_id=conductor_id, count=count)

    def _check_conductor_endpoints(self):
        for conductor in self.diagram.conductors:
            endpoints_ok = True
            for pin in conductor.endpoints:
                device = self.diagram.device(pin.device_id)
                if device is None:
                    endpoints_ok = False
                    self._add_issue(self._reference_level, DiagramIssueCode.CONDUCTOR_DANGLING_DEVICE,
                                    conductor_id=conductor.id, device_id=pin.device_id)
                elif not is_valid_port(device.type, pin.port):
                    endpoints_ok = False
                    self._add_issue(self._reference_level, DiagramIssueCode.CONDUCTOR_PORT_RANGE,
                                    conductor_id=conductor.id, device_id=pin.device_id, port=pin.port,
                                    device_type=device.type.value, max_port=device.port_count - 1)
            if not endpoints_ok:
                continue

            a, b = conductor.endpoints
            if a == b:
                self._add_issue(ValidationIssueLevel.INFO, DiagramIssueCode.CONDUCTOR_SELF_LOOP,
                                conductor_id=conductor.id, device_id=a.device_id, port=a.port)
                continue

            role_a = port_role(self.diagram.device(a.device_id).type, a.port)
            role_b = port_role(self.diagram.device(b.device_id).type, b.port)
            if role_a is not None and role_b is not None and role_a is not role_b:
                self._add_issue(ValidationIssueLevel.WARNING, DiagramIssueCode.CONDUCTOR_ROLE_MISMATCH,
                                conductor_id=conductor.id, device_a=a.device_id, role_a=role_a.value,
                                device_b=b.device_id, role_b=role_b.value)

    def _check_sources(self):
        for device in self.diagram.devices:
            if device.type is DeviceType.SOURCE and device.signal is None:
                self._add_issue(ValidationIssueLevel.WARNING, DiagramIssueCode.SOURCE_SIGNAL_MISSING,
                                device_id=device.id)

    def _check_isolated_devices(self):
        attached = {pin.device_id for c in self.diagram.conductors for pin in c.endpoints}
        for device in self.diagram.devices:
            if device.id not in attached:
                self._add_issue(ValidationIssueLevel.INFO, DiagramIssueCode.DEVICE_ISOLATED,
                                device_id=device.id, device_type=device.type.value)
