#!/usr/bin/env python3
"""Tests for fleet YAML loading."""
import pytest

from expiry import (
    DEFAULT_FIELDS,
    FieldConfig,
    FleetFileError,
    fleet_record_source,
    load_field_configs,
    load_fleet,
    load_fleet_file,
)

FLEET_YAML = """
fields:
  - name: insuranceExpiry
    type: insurance
    label: Insurance
  - name: permitEnd
    type: permit

vehicles:
  - id: v-001
    vehicleNumber: CAB-4512
    make: Toyota
    year: 2019
    insuranceExpiry: '2025-06-25'
    permitEnd: 2025-07-04
    assignedDriver:
      name: Nimal
      phone: '0771234567'
  - _id: 66a1f0
    insuranceExpiry: null
"""


@pytest.fixture
def fleet_file(tmp_path):
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    return path


class TestLoadFleet:
    """Tests for load_fleet."""

    def test_loads_records(self, fleet_file):
        records = load_fleet(fleet_file)
        assert len(records) == 2
        assert records[0]["vehicleNumber"] == "CAB-4512"
        assert records[1]["_id"] == "66a1f0"

    def test_unquoted_dates_become_iso_strings(self, fleet_file):
        records = load_fleet(fleet_file)
        assert records[0]["permitEnd"] == "2025-07-04"

    def test_nested_mappings_stay_dicts(self, fleet_file):
        records = load_fleet(fleet_file)
        assert records[0]["assignedDriver"] == {"name": "Nimal", "phone": "0771234567"}

    def test_name_type_mapping_in_record_stays_dict(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text(
            "vehicles:\n"
            "  - id: v1\n"
            "    owner:\n"
            "      name: Nimal\n"
            "      type: company\n"
        )
        (record,) = load_fleet(path)
        assert record["owner"] == {"name": "Nimal", "type": "company"}
        assert type(record["owner"]) is dict

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_fleet(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FleetFileError, match="Cannot read"):
            load_fleet(tmp_path / "nope.yaml")

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vehicles: [unclosed\n")
        with pytest.raises(FleetFileError, match="YAML parse error"):
            load_fleet(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- id: v1\n")
        with pytest.raises(FleetFileError, match="mapping"):
            load_fleet(path)

    def test_vehicles_must_be_list(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("vehicles: 3\n")
        with pytest.raises(FleetFileError, match="must be a list"):
            load_fleet(path)

    def test_vehicle_without_id(self, tmp_path):
        path = tmp_path / "noid.yaml"
        path.write_text("vehicles:\n  - make: Toyota\n")
        with pytest.raises(FleetFileError, match="no id"):
            load_fleet(path)

    def test_error_is_value_error(self):
        assert issubclass(FleetFileError, ValueError)


class TestLoadFieldConfigs:
    """Tests for load_field_configs."""

    def test_reads_fields_section(self, fleet_file):
        configs = load_field_configs(fleet_file)
        assert configs == [
            FieldConfig("insuranceExpiry", "insurance", "Insurance"),
            FieldConfig("permitEnd", "permit"),
        ]

    def test_defaults_when_absent(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text("vehicles: []\n")
        assert load_field_configs(path) == DEFAULT_FIELDS

    def test_incomplete_field(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text("fields:\n  - name: insuranceExpiry\nvehicles: []\n")
        with pytest.raises(FleetFileError, match="'name' and 'type'"):
            load_field_configs(path)

    def test_fields_must_be_list(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text("fields:\n  name: insuranceExpiry\nvehicles: []\n")
        with pytest.raises(FleetFileError, match="must be a list"):
            load_field_configs(path)


class TestLoadFleetFile:
    """Tests for reading records and field configs together."""

    def test_returns_both(self, fleet_file):
        records, configs = load_fleet_file(fleet_file)
        assert [r.get("id") or r.get("_id") for r in records] == ["v-001", "66a1f0"]
        assert [c.type for c in configs] == ["insurance", "permit"]

    def test_defaults_when_fields_absent(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text("vehicles: []\n")
        records, configs = load_fleet_file(path)
        assert records == []
        assert configs == list(DEFAULT_FIELDS)


class TestFleetRecordSource:
    """Tests for fleet_record_source."""

    def test_rereads_file_each_call(self, fleet_file):
        source = fleet_record_source(fleet_file)
        assert len(source()) == 2
        fleet_file.write_text("vehicles:\n  - id: only\n")
        assert [r["id"] for r in source()] == ["only"]
