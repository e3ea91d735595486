# tests/test_validation.py
import pytest

from oneline_core import (
    DiagramIssueCode, DiagramValidationError, DiagramValidator, ValidationIssueLevel,
)
from tests.conftest import base_case_diagram, create_diagram, make_device


def _codes(issues):
    return [issue.code for issue in issues]


def _find(issues, code: DiagramIssueCode):
    matches = [issue for issue in issues if issue.code == code.code]
    assert matches, f"Expected an issue with code {code.code}, got {_codes(issues)}"
    return matches


class TestDiagramValidator:

    def test_base_case_is_clean(self):
        assert DiagramValidator(base_case_diagram()).validate() == []

    def test_requires_a_diagram(self):
        with pytest.raises(TypeError):
            DiagramValidator({"nodes": [], "edges": []})

    def test_dangling_device_reference(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("L", "load", {})],
            [("E1", "S", 0, "L", 0), ("E2", "L", 1, "GONE", 0)],
        )
        (issue,) = _find(DiagramValidator(diagram).validate(), DiagramIssueCode.CONDUCTOR_DANGLING_DEVICE)
        assert issue.level == ValidationIssueLevel.WARNING
        assert issue.conductor_id == "E2"
        assert issue.device_id == "GONE"

    def test_terminal_out_of_range(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("L", "load", {})],
            [("E1", "S", 1, "L", 0)],
        )
        (issue,) = _find(DiagramValidator(diagram).validate(), DiagramIssueCode.CONDUCTOR_PORT_RANGE)
        assert issue.level == ValidationIssueLevel.WARNING
        assert issue.details["max_port"] == 0
        assert "terminals 0..0" in issue.message

    def test_self_loop(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("B", "bus", {})],
            [("E1", "S", 0, "B", 0), ("E2", "B", 1, "B", 1)],
        )
        (issue,) = _find(DiagramValidator(diagram).validate(), DiagramIssueCode.CONDUCTOR_SELF_LOOP)
        assert issue.level == ValidationIssueLevel.INFO
        assert issue.conductor_id == "E2"

    def test_converter_role_mismatch(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("RECT", "rectifier", {}), ("INV", "inverter", {})],
            [("E1", "S", 0, "RECT", 0), ("E2", "RECT", 1, "INV", 1)],
        )
        (issue,) = _find(DiagramValidator(diagram).validate(), DiagramIssueCode.CONDUCTOR_ROLE_MISMATCH)
        assert issue.level == ValidationIssueLevel.WARNING
        assert issue.details["role_a"] == "DC"
        assert issue.details["role_b"] == "AC"

    def test_matching_converter_roles_are_fine(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("RECT", "rectifier", {}), ("INV", "inverter", {})],
            [("E1", "S", 0, "RECT", 0), ("E2", "RECT", 1, "INV", 0)],
        )
        assert DiagramValidator(diagram).validate() == []

    def test_source_without_signal(self):
        diagram = create_diagram(
            [("S", "source", {}), ("L", "load", {})],
            [("E1", "S", 0, "L", 0)],
        )
        (issue,) = _find(DiagramValidator(diagram).validate(), DiagramIssueCode.SOURCE_SIGNAL_MISSING)
        assert issue.device_id == "S"
        assert issue.level == ValidationIssueLevel.WARNING

    def test_isolated_device(self, conversion_chain):
        diagram = conversion_chain.add_device(make_device("SPARE", "bus"))
        (issue,) = _find(DiagramValidator(diagram).validate(), DiagramIssueCode.DEVICE_ISOLATED)
        assert issue.device_id == "SPARE"
        assert issue.level == ValidationIssueLevel.INFO

    def test_duplicate_conductor_ids_are_errors(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("L", "load", {})],
            [("E1", "S", 0, "L", 0), ("E1", "L", 1, "S", 0)],
        )
        validator = DiagramValidator(diagram)
        (issue,) = _find(validator.validate(), DiagramIssueCode.CONDUCTOR_ID_DUPLICATE)
        assert issue.level == ValidationIssueLevel.ERROR
        assert issue.details["count"] == 2

        with pytest.raises(DiagramValidationError) as excinfo:
            validator.raise_on_errors()
        assert [i.code for i in excinfo.value.issues] == ["CONDUCTOR_ID_DUPLICATE"]
        assert "Diagram Validation Error" in excinfo.value.get_diagnostic_report()

    def test_warnings_alone_do_not_raise(self):
        diagram = create_diagram([("S", "source", {})], [])
        issues = DiagramValidator(diagram).raise_on_errors()
        assert set(_codes(issues)) == {"SOURCE_SIGNAL_MISSING", "DEVICE_ISOLATED"}

    def test_issue_string_names_its_target(self):
        diagram = create_diagram([("L", "load", {})], [])
        (issue,) = DiagramValidator(diagram).validate()
        text = str(issue)
        assert text.startswith("[INFO - DEVICE_ISOLATED]")
        assert "Device: L" in text


class TestDiagramValidationError:

    def test_keeps_only_error_level_issues(self):
        diagram = create_diagram(
            [("S", "source", {})],
            [("E1", "S", 0, "GONE", 0), ("E1", "S", 0, "GONE", 1)],
        )
        issues = DiagramValidator(diagram).validate()
        error = DiagramValidationError(issues)
        assert len(issues) > len(error.issues) == 1
        assert "1 error(s)" in str(error)

    def test_message_template_keys(self):
        message = DiagramIssueCode.CONDUCTOR_ID_DUPLICATE.format_message(conductor_id="E9", count=3)
        assert message == "Conductor id 'E9' is used by 3 conductors. Conductor ids must be unique."

    def test_strict_mode_escalates_unresolved_references(self):
        diagram = create_diagram(
            [("S", "source", {"signal": "AC"}), ("L", "load", {})],
            [("E1", "S", 0, "L", 0), ("E2", "L", 1, "GONE", 0), ("E3", "L", 5, "S", 0)],
        )
        issues = DiagramValidator(diagram, strict=True).validate()
        assert {i.code for i in issues if i.level == ValidationIssueLevel.ERROR} == {
            "CONDUCTOR_DANGLING_DEVICE", "CONDUCTOR_PORT_RANGE",
        }
        with pytest.raises(DiagramValidationError):
            DiagramValidator(diagram, strict=True).raise_on_errors()
