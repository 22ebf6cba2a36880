"""Display labels and badge colors for vehicle statuses."""

from .status import VehicleStatus

STATUS_LABELS = {
    VehicleStatus.AVAILABLE: "Available",
    VehicleStatus.RENTED: "Rented",
    VehicleStatus.SCHEDULED: "Scheduled",
    VehicleStatus.NEEDS_FIXING: "Needs Fixing",
    VehicleStatus.NOT_FOR_RENTAL: "Not for Rental",
}

# Tailwind background classes used by the status badges
STATUS_COLORS = {
    VehicleStatus.AVAILABLE: "bg-green-500",
    VehicleStatus.RENTED: "bg-blue-500",
    VehicleStatus.SCHEDULED: "bg-yellow-500",
    VehicleStatus.NEEDS_FIXING: "bg-orange-500",
    VehicleStatus.NOT_FOR_RENTAL: "bg-gray-500",
}


def status_label(status: VehicleStatus) -> str:
    return STATUS_LABELS[status]


def status_color(status: VehicleStatus) -> str:
    return STATUS_COLORS[status]
