"""Unit tests for the layout request advisory checks."""

from typing import Any

from traylayout.application.config.loader import load_config_from_dict
from traylayout.application.config.validator import ValidationResult, validate_config


def _validate(**overrides: Any) -> ValidationResult:
    data: dict[str, Any] = {
        "schema_version": "1.0",
        "tray": {"name": "T1", "width": 400, "height": 100},
        "cables": [{"id": "P-001", "diameter": 20, "purpose": "Power supply"}],
    }
    data.update(overrides)
    return validate_config(load_config_from_dict(data))


def _warning_paths(result: ValidationResult) -> list[str]:
    return [warning.path for warning in result.warnings]


class TestValidationResult:
    def test_exit_codes(self) -> None:
        assert ValidationResult().exit_code == 0
        assert ValidationResult().add_warning("tray", "w").exit_code == 2
        assert ValidationResult().add_warning("tray", "w").add_error("x", "e").exit_code == 1

    def test_flags(self) -> None:
        result = ValidationResult().add_warning("tray", "w")
        assert result.is_valid
        assert result.has_warnings


class TestValidateConfig:
    def test_clean_request(self) -> None:
        result = _validate()
        assert result.exit_code == 0
        assert result.warnings == []

    def test_missing_dimensions(self) -> None:
        result = _validate(tray={"name": "T-NEW", "width": 0})
        assert _warning_paths(result) == ["tray"]
        assert result.warnings[0].suggestion is not None

    def test_missing_diameter(self) -> None:
        result = _validate(cables=[{"id": "P-001", "purpose": "Power supply"}])
        assert _warning_paths(result) == ["cables[0].diameter"]
        assert "1 mm" in result.warnings[0].message

    def test_uncategorised_cable(self) -> None:
        result = _validate(cables=[{"id": "L-001", "diameter": 8, "purpose": "Lighting"}])
        assert _warning_paths(result) == ["cables[0].purpose"]

    def test_explicit_category_is_accepted(self) -> None:
        result = _validate(
            cables=[{"id": "L-001", "diameter": 8, "purpose": "Lighting", "category": "power"}]
        )
        assert result.warnings == []

    def test_too_many_categories(self) -> None:
        result = _validate(
            cables=[
                {"id": "P-001", "diameter": 20, "purpose": "Power supply"},
                {"id": "C-001", "diameter": 10, "purpose": "Control signal"},
                {"id": "V-001", "diameter": 15, "purpose": "VFD motor feed"},
            ]
        )
        assert _warning_paths(result) == ["cables"]
        assert "control, power, vfd" in result.warnings[0].message

    def test_duplicate_ids(self) -> None:
        result = _validate(
            cables=[
                {"id": "P-001", "diameter": 20, "purpose": "Power supply"},
                {"id": "P-001", "diameter": 22, "purpose": "Power supply"},
            ]
        )
        assert result.exit_code == 1
        (error,) = result.errors
        assert error.path == "cables[1].id"
        assert error.value == "P-001"
        assert "cables[0]" in error.message

    def test_phase_rotation_without_trefoil(self) -> None:
        result = _validate(layout={"vfd": {"phase_rotation": True}})
        assert _warning_paths(result) == ["layout.vfd.phase_rotation"]

    def test_phase_rotation_with_trefoil(self) -> None:
        result = _validate(layout={"vfd": {"phase_rotation": True, "trefoil": True}})
        assert result.warnings == []

    def test_routing_filter_without_matches(self) -> None:
        result = _validate(
            filter_by_routing=True,
            cables=[{"id": "P-001", "diameter": 20, "purpose": "Power", "routing": "T9"}],
        )
        assert _warning_paths(result) == ["filter_by_routing"]

    def test_routing_filter_limits_checks(self) -> None:
        result = _validate(
            filter_by_routing=True,
            cables=[
                {"id": "P-001", "diameter": 20, "purpose": "Power", "routing": "T1"},
                {"id": "L-001", "purpose": "Lighting", "routing": "T2"},
            ],
        )
        assert result.exit_code == 0
