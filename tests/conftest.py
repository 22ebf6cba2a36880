"""Shared fixtures: a small fleet file evaluated as of 2025-03-10."""

import pytest

TODAY = "2025-03-10"

SAMPLE_FLEET = """
vehicles:
  - id: 1
    licensePlate: GX-412-K
    brand: Toyota
    model: Corolla
    availabilityStatus: rented
    dailyPrice: 45.0
  - id: 2
    licensePlate: HR-09-TZ
    brand: Volkswagen
    model: Transporter
    availabilityStatus: scheduled
  - id: 3
    licensePlate: KL-771-B
    brand: Renault
    model: Clio
    availabilityStatus: needs_fixing
    remarks: Rear bumper damage
  - id: 4
    licensePlate: TN-303-P
    brand: Ford
    model: Transit
    availabilityStatus: available
  - id: 5
    licensePlate: PS-550-X
    brand: Volkswagen
    model: Passat
    availabilityStatus: not_for_rental

reservations:
  - id: 1
    vehicleId: 1
    customer: J. de Vries
    startDate: '2025-03-01'
    endDate: '2025-03-14'
    status: picked_up
    type: standard
  - id: 2
    vehicleId: 2
    customer: Bakkerij Smit BV
    startDate: '2025-03-05'
    status: booked
    type: standard
  - id: 3
    vehicleId: 3
    startDate: '2025-03-03'
    endDate: '2025-03-12'
    status: booked
    type: maintenance_block
    maintenanceStatus: in
  - id: 4
    vehicleId: 4
    customer: A. Yilmaz
    startDate: '2025-02-10'
    endDate: '2025-02-17'
    status: returned
    type: standard
  - id: 5
    vehicleId: 4
    customer: K. Peters
    startDate: '2025-03-20'
    endDate: '2025-03-25'
    status: booked
    type: standard
"""


@pytest.fixture
def fleet_file(tmp_path):
    path = tmp_path / "fleet.yaml"
    path.write_text(SAMPLE_FLEET)
    return path
