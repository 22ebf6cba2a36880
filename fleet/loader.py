"""YAML loading and saving utilities for fleet data."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .reservation import Reservation
from .snapshot import FleetSnapshot
from .status import MaintenanceStatus, ReservationStatus, ReservationType, VehicleStatus
from .vehicle import Vehicle

# Python attribute name -> YAML key for reservation updates
_RESERVATION_KEYS = {
    "vehicle_id": "vehicleId",
    "customer": "customer",
    "start_date": "startDate",
    "end_date": "endDate",
    "status": "status",
    "type": "type",
    "maintenance_status": "maintenanceStatus",
    "deleted_at": "deletedAt",
    "notes": "notes",
}


def _parse_object(dct: Dict[str, Any]) -> Union[Vehicle, Reservation, FleetSnapshot, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle row
    if "licensePlate" in dct:
        status = dct.get("availabilityStatus")
        return Vehicle(
            dct["id"],
            dct["licensePlate"],
            dct["brand"],
            dct["model"],
            VehicleStatus(status) if status else None,
            dct.get("dailyPrice"),
            dct.get("remarks"),
        )
    # Reservation row
    elif "vehicleId" in dct:
        maintenance = dct.get("maintenanceStatus")
        return Reservation(
            dct.get("id"),
            dct["vehicleId"],
            dct["startDate"],
            dct.get("endDate"),
            ReservationStatus(dct.get("status") or "booked"),
            ReservationType(dct.get("type") or "standard"),
            MaintenanceStatus(maintenance) if maintenance else None,
            dct.get("customer"),
            dct.get("deletedAt"),
            dct.get("notes"),
        )
    # Top-level fleet object
    elif "vehicles" in dct:
        return FleetSnapshot(dct.get("vehicles"), dct.get("reservations"))
    else:
        return dct


def _read(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    if data.get("vehicles") is None:
        data["vehicles"] = []
    if data.get("reservations") is None:
        data["reservations"] = []
    return data


def _write(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _apply_fields(row: Dict[str, Any], fields: Dict[str, Any]) -> None:
    """Set reservation fields on a raw row; None removes the key."""
    for name, value in fields.items():
        if name not in _RESERVATION_KEYS:
            raise ValueError(f"Unknown reservation field '{name}'")
        key = _RESERVATION_KEYS[name]
        if value is None:
            row.pop(key, None)
        else:
            row[key] = value.value if isinstance(value, Enum) else value


def _find(rows, row_id: int, kind: str) -> Dict[str, Any]:
    for row in rows:
        if row.get("id") == row_id:
            return row
    raise KeyError(f"Unknown {kind} id {row_id}")


def load_fleet(filename: Union[str, Path]) -> FleetSnapshot:
    """Load vehicles and reservations from a YAML file."""
    with open(filename, "rb") as fp:
        raw = yaml.load(fp, Loader=yaml.SafeLoader) or {}
        raw.setdefault("vehicles", [])
        # Unquoted YAML dates come back as date objects; str() gives ISO form
        json_data = json.dumps(raw, indent=4, default=str)
        return json.loads(json_data, object_hook=_parse_object)


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": vehicle.id,
        "licensePlate": vehicle.license_plate,
        "brand": vehicle.brand,
        "model": vehicle.model,
        "availabilityStatus": vehicle.availability_status.value,
    }
    if vehicle.daily_price is not None:
        d["dailyPrice"] = vehicle.daily_price
    if vehicle.remarks is not None:
        d["remarks"] = vehicle.remarks
    return d


def _reservation_to_dict(reservation: Reservation) -> Dict[str, Any]:
    """Serialize a Reservation, omitting None values for cleaner YAML."""
    d: Dict[str, Any] = {
        "id": reservation.id,
        "vehicleId": reservation.vehicle_id,
    }
    if reservation.customer is not None:
        d["customer"] = reservation.customer
    d["startDate"] = reservation.start_date
    if reservation.end_date is not None:
        d["endDate"] = reservation.end_date
    d["status"] = reservation.status.value
    d["type"] = reservation.type.value
    if reservation.maintenance_status is not None:
        d["maintenanceStatus"] = reservation.maintenance_status.value
    if reservation.deleted_at is not None:
        d["deletedAt"] = reservation.deleted_at
    if reservation.notes is not None:
        d["notes"] = reservation.notes
    return d


def create_fleet(filename: Union[str, Path]) -> None:
    """Create an empty fleet YAML file."""
    _write(filename, {"vehicles": [], "reservations": []})


def add_vehicle(filename: Union[str, Path], vehicle: Vehicle) -> None:
    """
    Append a vehicle to a fleet YAML file.

    Raises ValueError if the id or license plate is already taken.
    """
    data = _read(filename)
    for row in data["vehicles"]:
        if row.get("id") == vehicle.id:
            raise ValueError(f"Vehicle id {vehicle.id} already exists")
        if row.get("licensePlate") == vehicle.license_plate:
            raise ValueError(f"License plate {vehicle.license_plate} already exists")
    data["vehicles"].append(_vehicle_to_dict(vehicle))
    _write(filename, data)


def save_vehicle_status(
    filename: Union[str, Path], vehicle_id: int, status: VehicleStatus
) -> None:
    """Update availabilityStatus of one vehicle."""
    data = _read(filename)
    row = _find(data["vehicles"], vehicle_id, "vehicle")
    row["availabilityStatus"] = status.value
    _write(filename, data)


def add_reservation(
    filename: Union[str, Path],
    reservation: Reservation,
    vehicle_status: Optional[VehicleStatus] = None,
) -> int:
    """
    Append a reservation to a fleet YAML file.

    Assigns the next free id when the reservation has none and returns the id.
    With ``vehicle_status`` the vehicle is updated in the same write.
    """
    data = _read(filename)
    vehicle_row = _find(data["vehicles"], reservation.vehicle_id, "vehicle")

    if reservation.id is None:
        reservation.id = max((r.get("id") or 0 for r in data["reservations"]), default=0) + 1
    elif any(r.get("id") == reservation.id for r in data["reservations"]):
        raise ValueError(f"Reservation id {reservation.id} already exists")

    data["reservations"].append(_reservation_to_dict(reservation))
    if vehicle_status is not None:
        vehicle_row["availabilityStatus"] = vehicle_status.value
    _write(filename, data)
    return reservation.id


def update_reservation(
    filename: Union[str, Path], reservation_id: int, **fields: Any
) -> None:
    """
    Update fields of one reservation, e.g. ``status=ReservationStatus.RETURNED``.

    Enum values are stored as their string value; None removes the key.
    """
    data = _read(filename)
    row = _find(data["reservations"], reservation_id, "reservation")
    _apply_fields(row, fields)
    _write(filename, data)


def soft_delete_reservation(
    filename: Union[str, Path], reservation_id: int, deleted_at: str
) -> None:
    """Mark a reservation deleted without removing the row."""
    update_reservation(filename, reservation_id, deleted_at=deleted_at)


def write_changes(
    filename: Union[str, Path],
    vehicle_id: int,
    vehicle_status: VehicleStatus,
    reservation_id: Optional[int] = None,
    **reservation_fields: Any,
) -> None:
    """
    Write a vehicle status and reservation update in a single file write.

    Used by the event handlers so one event never leaves the file half-updated.
    """
    data = _read(filename)
    vehicle_row = _find(data["vehicles"], vehicle_id, "vehicle")
    if reservation_id is not None:
        row = _find(data["reservations"], reservation_id, "reservation")
        _apply_fields(row, reservation_fields)
    vehicle_row["availabilityStatus"] = vehicle_status.value
    _write(filename, data)
