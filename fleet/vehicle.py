"""Vehicle class - the entity whose availability status is managed."""

from typing import Optional

from .status import VehicleStatus


class Vehicle:
    """A rentable vehicle and its stored availability status."""

    def __init__(
        self,
        id: int,
        license_plate: str,
        brand: str,
        model: str,
        availability_status: Optional[VehicleStatus] = None,
        daily_price: Optional[float] = None,
        remarks: Optional[str] = None,
    ):
        self.id = id
        self.license_plate = license_plate
        self.brand = brand
        self.model = model
        self.availability_status = availability_status or VehicleStatus.AVAILABLE
        self.daily_price = daily_price
        self.remarks = remarks

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.brand} {self.model} ({self.license_plate})"
