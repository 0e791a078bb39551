"""Shared fixtures: a small fleet file evaluated as of 2025-07-01."""
from datetime import date

import pytest

AS_OF = date(2025, 7, 1)

FLEET_YAML = """
fields:
  - name: insuranceExpiry
    type: insurance
    label: Insurance
  - name: licenseExpiry
    type: license
    label: License

vehicles:
  - id: v1
    vehicleNumber: CAB-4512
    department: Operations
    insuranceExpiry: '2025-06-25'
    licenseExpiry: '2025-07-04'
  - id: v2
    vehicleNumber: KV-8831
    insuranceExpiry: '2025-07-20'
    licenseExpiry: ''
  - id: v3
    vehicleNumber: WP-1207
    insuranceExpiry: '2026-03-15'
"""


@pytest.fixture
def fleet_path(tmp_path):
    path = tmp_path / "fleet.yaml"
    path.write_text(FLEET_YAML)
    return path
