"""Status context builder: a per-decision snapshot of a vehicle's reservations."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from dateutil.parser import isoparse

from .reservation import Reservation
from .status import ReservationStatus
from .vehicle import Vehicle

DateLike = Union[date, str]


@dataclass(frozen=True)
class VehicleStatusContext:
    """Derived view of one vehicle's reservations as of ``today``."""

    vehicle: Vehicle
    today: str
    active_reservations: List[Reservation] = field(default_factory=list)
    has_picked_up_reservation: bool = False
    has_booked_reservation: bool = False
    has_maintenance_block: bool = False

    @property
    def picked_up_count(self) -> int:
        return sum(
            1 for r in self.active_reservations if r.status is ReservationStatus.PICKED_UP
        )


def iso_day(value: Optional[DateLike] = None) -> str:
    """
    Normalize a day reference to an ISO ``YYYY-MM-DD`` string.

    Accepts a date, a datetime or an ISO string (a time part is dropped).
    None means the local calendar day.
    """
    if value is None:
        return date.today().isoformat()
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return isoparse(value).date().isoformat()


def build_status_context(
    vehicle: Vehicle,
    reservations: Iterable[Reservation],
    today: Optional[DateLike] = None,
) -> VehicleStatusContext:
    """
    Build the status context for a vehicle from the full reservation set.

    Logic:
    - Keep rows for this vehicle that are not soft-deleted, cancelled,
      completed or returned
    - Ordinary rows inside the date window are the active reservations and
      drive the picked-up/booked flags
    - Maintenance blocks inside the window with an in-progress maintenance
      status drive the maintenance flag only
    """
    day = iso_day(today)

    live = [r for r in reservations if r.vehicle_id == vehicle.id and r.is_live]

    active = [r for r in live if not r.is_maintenance_block and r.covers(day)]

    has_maintenance = any(
        r.is_maintenance_block
        and r.covers(day)
        and r.maintenance_status is not None
        and r.maintenance_status.in_progress
        for r in live
    )

    return VehicleStatusContext(
        vehicle=vehicle,
        today=day,
        active_reservations=active,
        has_picked_up_reservation=any(
            r.status is ReservationStatus.PICKED_UP for r in active
        ),
        has_booked_reservation=any(r.status is ReservationStatus.BOOKED for r in active),
        has_maintenance_block=has_maintenance,
    )
