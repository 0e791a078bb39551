#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from validate_yaml import load_schema, main, validate_fleet_file


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert "vehicles" in schema["properties"]
        assert "fields" in schema["properties"]


class TestValidateFleetFile:
    """Tests for validate_fleet_file function."""

    def test_valid_minimal_returns_no_errors(self, tmp_path):
        """Valid minimal fleet file returns empty error list."""
        path = tmp_path / "valid.yaml"
        path.write_text("""
vehicles:
  - id: v-001
    vehicleNumber: CAB-4512
    insuranceExpiry: 2025-06-25
    licenseExpiry: null
    leaseDue: ''
""")
        errors = validate_fleet_file(path, load_schema())
        assert errors == []

    def test_missing_id_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - vehicleNumber: CAB-4512
""")
        errors = validate_fleet_file(path, load_schema())
        assert len(errors) >= 1
        assert any("Schema validation error" in e for e in errors)

    def test_bad_field_definition(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
fields:
  - name: insuranceExpiry
vehicles: []
""")
        errors = validate_fleet_file(path, load_schema())
        assert any("type" in e for e in errors)

    def test_yaml_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("vehicles: [unclosed\n")
        errors = validate_fleet_file(path, load_schema())
        assert any("YAML parse error" in e for e in errors)

    def test_example_file_is_valid(self):
        from pathlib import Path

        example = Path(__file__).parent.parent / "fleet.example.yaml"
        assert validate_fleet_file(example, load_schema()) == []


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_exit_codes(self, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("vehicles: []\n")
        assert main([str(good)]) == 0
        assert main([str(tmp_path / "missing.yaml")]) == 1
        out = capsys.readouterr().out
        assert "OK: good.yaml" in out
        assert "not found" in out
