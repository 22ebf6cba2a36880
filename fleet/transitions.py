"""
Transition validators for vehicle availability status.

Each triggering event owns an ordered rule table. Rules are evaluated top to
bottom and the first rule whose predicate holds decides the outcome; later
rules are never consulted. Every table ends with an unconditional rule, so
the validators are total and never raise.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .context import VehicleStatusContext
from .status import VehicleStatus
from .transition_result import TransitionResult

AVAILABLE = VehicleStatus.AVAILABLE
RENTED = VehicleStatus.RENTED
SCHEDULED = VehicleStatus.SCHEDULED
NEEDS_FIXING = VehicleStatus.NEEDS_FIXING
NOT_FOR_RENTAL = VehicleStatus.NOT_FOR_RENTAL


@dataclass(frozen=True)
class TransitionRequest:
    """Inputs of a single decision."""

    current: VehicleStatus
    requested: Optional[VehicleStatus] = None
    context: Optional[VehicleStatusContext] = None

    @property
    def picked_up(self) -> bool:
        return bool(self.context and self.context.has_picked_up_reservation)

    @property
    def booked(self) -> bool:
        return bool(self.context and self.context.has_booked_reservation)

    @property
    def in_maintenance(self) -> bool:
        return bool(self.context and self.context.has_maintenance_block)


@dataclass(frozen=True)
class TransitionRule:
    """A named (predicate, outcome) pair in a rule table."""

    name: str
    applies: Callable[[TransitionRequest], bool]
    outcome: Callable[[TransitionRequest], TransitionResult]


def _always(req: TransitionRequest) -> bool:
    return True


def _keep_current(req: TransitionRequest) -> TransitionResult:
    return TransitionResult.allow(req.current)


def _keep_requested(req: TransitionRequest) -> TransitionResult:
    return TransitionResult.allow(req.requested)


def _to(status: VehicleStatus) -> Callable[[TransitionRequest], TransitionResult]:
    return lambda req: TransitionResult.allow(status)


def _warn_requested(warning: str) -> Callable[[TransitionRequest], TransitionResult]:
    return lambda req: TransitionResult.allow(req.requested, warning=warning)


def _deny(error: str) -> Callable[[TransitionRequest], TransitionResult]:
    return lambda req: TransitionResult.deny(error)


def first_match(rules: Sequence[TransitionRule], req: TransitionRequest) -> TransitionResult:
    """Return the outcome of the first rule that applies."""
    for rule in rules:
        if rule.applies(req):
            return rule.outcome(req)
    raise LookupError(f"No transition rule matched {req!r}")


def matching_rule(rules: Sequence[TransitionRule], req: TransitionRequest) -> str:
    """Name of the rule that decides ``req``."""
    for rule in rules:
        if rule.applies(req):
            return rule.name
    raise LookupError(f"No transition rule matched {req!r}")


# =============================================================================
# Manual edit
# =============================================================================

MANUAL_CHANGE_RULES = (
    TransitionRule(
        "unchanged",
        lambda req: req.requested is req.current,
        _keep_requested,
    ),
    TransitionRule(
        "picked_up_to_available",
        lambda req: req.picked_up and req.requested is AVAILABLE,
        _deny(
            'Cannot set vehicle to "available" while it has an active picked-up '
            "rental. Please return the vehicle first."
        ),
    ),
    TransitionRule(
        "picked_up_to_needs_fixing",
        lambda req: req.picked_up and req.requested is NEEDS_FIXING,
        _warn_requested(
            'Vehicle has an active rental. Setting to "needs fixing" will not '
            "affect the current rental, but the vehicle will need attention "
            "after return."
        ),
    ),
    TransitionRule(
        "picked_up_to_not_for_rental",
        lambda req: req.picked_up and req.requested is NOT_FOR_RENTAL,
        _warn_requested(
            'Vehicle has an active rental. It will be marked as "not for rental" '
            "after the current rental ends."
        ),
    ),
    TransitionRule(
        "maintenance_to_available",
        lambda req: req.in_maintenance and req.requested is AVAILABLE,
        _deny(
            'Cannot set vehicle to "available" while it has an active maintenance '
            "block. Please close the maintenance first."
        ),
    ),
    TransitionRule(
        "maintenance_to_not_for_rental",
        lambda req: req.in_maintenance and req.requested is NOT_FOR_RENTAL,
        _warn_requested(
            'Vehicle has active maintenance. It will be marked as "not for rental" '
            "after maintenance is complete."
        ),
    ),
    TransitionRule(
        "booked_to_blocked",
        lambda req: req.booked and req.requested in (NEEDS_FIXING, NOT_FOR_RENTAL),
        _warn_requested(
            "Vehicle has upcoming booked reservations. Changing status may "
            "require rescheduling those bookings."
        ),
    ),
    TransitionRule(
        "rented_without_pickup",
        lambda req: req.requested is RENTED and not req.picked_up,
        _deny(
            'Cannot manually set vehicle to "rented". This status is set '
            "automatically when a reservation is picked up."
        ),
    ),
    TransitionRule(
        "scheduled_without_booking",
        lambda req: req.requested is SCHEDULED and not req.booked,
        _deny(
            'Cannot manually set vehicle to "scheduled". This status is set '
            "automatically when there are upcoming reservations."
        ),
    ),
    TransitionRule("default", _always, _keep_requested),
)


def validate_manual_status_change(
    current: VehicleStatus,
    requested: VehicleStatus,
    context: VehicleStatusContext,
) -> TransitionResult:
    """Validate an operator's direct edit of a vehicle's status."""
    return first_match(
        MANUAL_CHANGE_RULES,
        TransitionRequest(current=current, requested=requested, context=context),
    )


# =============================================================================
# Pickup / return
# =============================================================================

PICKUP_RULES = (
    TransitionRule(
        "not_for_rental",
        lambda req: req.current is NOT_FOR_RENTAL,
        _deny('Cannot pickup vehicle that is marked as "not for rental".'),
    ),
    TransitionRule("default", _always, _to(RENTED)),
)


def get_status_on_pickup(current: VehicleStatus) -> TransitionResult:
    return first_match(PICKUP_RULES, TransitionRequest(current=current))


def _other_rentals_active(req: TransitionRequest) -> bool:
    # The snapshot still contains the rental being returned.
    return req.context is not None and req.context.picked_up_count > 1


RETURN_RULES = (
    TransitionRule(
        "needs_fixing_sticky",
        lambda req: req.current is NEEDS_FIXING,
        lambda req: TransitionResult.allow(
            NEEDS_FIXING, warning='Vehicle will remain as "needs fixing" after return.'
        ),
    ),
    TransitionRule(
        "not_for_rental_sticky",
        lambda req: req.current is NOT_FOR_RENTAL,
        lambda req: TransitionResult.allow(
            NOT_FOR_RENTAL,
            warning='Vehicle will remain as "not for rental" after return.',
        ),
    ),
    TransitionRule(
        "other_rentals_active",
        _other_rentals_active,
        lambda req: TransitionResult.allow(
            RENTED, warning="Vehicle has other active rentals."
        ),
    ),
    TransitionRule("booked", lambda req: req.booked, _to(SCHEDULED)),
    TransitionRule("default", _always, _to(AVAILABLE)),
)


def get_status_on_return(
    current: VehicleStatus, context: VehicleStatusContext
) -> TransitionResult:
    """
    Status after a rental is returned.

    ``context`` is the snapshot taken before the return is committed, so the
    returned rental itself still counts as picked up.
    """
    return first_match(RETURN_RULES, TransitionRequest(current=current, context=context))


# =============================================================================
# Maintenance
# =============================================================================

MAINTENANCE_START_RULES = (
    TransitionRule(
        "rented",
        lambda req: req.current is RENTED,
        _deny(
            "Cannot start maintenance on a rented vehicle. Please return the "
            "vehicle first or schedule maintenance for after the rental ends."
        ),
    ),
    TransitionRule("default", _always, _to(NEEDS_FIXING)),
)


def get_status_on_maintenance_start(current: VehicleStatus) -> TransitionResult:
    return first_match(MAINTENANCE_START_RULES, TransitionRequest(current=current))


MAINTENANCE_END_RULES = (
    TransitionRule(
        "not_for_rental_sticky", lambda req: req.current is NOT_FOR_RENTAL, _keep_current
    ),
    TransitionRule("picked_up", lambda req: req.picked_up, _to(RENTED)),
    TransitionRule("booked", lambda req: req.booked, _to(SCHEDULED)),
    TransitionRule("default", _always, _to(AVAILABLE)),
)


def get_status_on_maintenance_end(
    current: VehicleStatus, context: VehicleStatusContext
) -> TransitionResult:
    return first_match(
        MAINTENANCE_END_RULES, TransitionRequest(current=current, context=context)
    )


# =============================================================================
# Reservation cancel
# =============================================================================

RESERVATION_CANCEL_RULES = (
    TransitionRule("sticky", lambda req: req.current.is_sticky, _keep_current),
    TransitionRule("picked_up", lambda req: req.picked_up, _to(RENTED)),
    TransitionRule("booked", lambda req: req.booked, _to(SCHEDULED)),
    TransitionRule("default", _always, _to(AVAILABLE)),
)


def get_status_on_reservation_cancel(
    current: VehicleStatus, context: VehicleStatusContext
) -> TransitionResult:
    """Status after a reservation is cancelled; ``context`` excludes it."""
    return first_match(
        RESERVATION_CANCEL_RULES, TransitionRequest(current=current, context=context)
    )
