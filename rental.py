#!/usr/bin/env python3
"""
Unified CLI for vehicle rental fleet status.

Commands:
  status            - Show stored vs calculated status for each vehicle
  reservations      - List reservations
  set-status        - Manually change a vehicle's status
  pickup            - Hand a vehicle over for a reservation
  return            - Take a rented vehicle back
  maintenance-start - Open a maintenance block
  maintenance-end   - Close a maintenance block
  cancel            - Cancel a reservation
  delete            - Soft-delete a reservation
  reconcile         - Find (and optionally fix) status drift
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    FleetSnapshot,
    Reservation,
    TransitionResult,
    VehicleStatus,
    build_status_context,
    calculate_correct_status,
    has_drift,
    iso_day,
    load_fleet,
    status_label,
)
from fleet import actions

# =============================================================================
# Formatting helpers
# =============================================================================


def format_date(value: Optional[str]) -> str:
    """Format an optional ISO date for display."""
    return value if value else "-"


def format_price(price: Optional[float]) -> str:
    """Format a daily price for display."""
    return f"€{price:,.2f}" if price is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def report(result: TransitionResult, dry_run: bool = False) -> int:
    """Print the outcome of a transition and return the exit code."""
    if not result.allowed:
        print(f"Error: {result.message}")
        return 1
    if result.message:
        print(f"Warning: {result.message}")
    print(f"New status: {status_label(result.new_status)}")
    if dry_run:
        print("(dry run - no changes made)")
    return 0


# =============================================================================
# Status command
# =============================================================================


def make_status_table(fleet: FleetSnapshot, today: str) -> List[List[str]]:
    """One row per vehicle: stored status, calculated status, drift marker."""
    rows = []
    for vehicle in sorted(fleet.vehicles, key=lambda v: v.id):
        context = build_status_context(vehicle, fleet.reservations, today)
        calculated = calculate_correct_status(context)
        rows.append(
            [
                str(vehicle.id),
                vehicle.name,
                status_label(vehicle.availability_status),
                status_label(calculated),
                "*" if has_drift(context) else "",
                str(len(context.active_reservations)),
                format_price(vehicle.daily_price),
            ]
        )
    return rows


def cmd_status(args):
    """Show stored vs calculated status for each vehicle."""
    fleet = load_fleet(args.fleet_file)
    today = iso_day(args.date)

    if args.vehicle is not None:
        fleet = FleetSnapshot([fleet.get_vehicle(args.vehicle)], fleet.reservations)

    print(f"Fleet: {len(fleet.vehicles)} vehicles (as of {today})")
    print()

    headers = ["ID", "Vehicle", "Stored", "Calculated", "Drift", "Active", "Daily"]
    print(tabulate(make_status_table(fleet, today), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Reservations command
# =============================================================================


def make_reservation_table(entries: List[Reservation]) -> List[List[str]]:
    """Convert reservations to table rows."""
    rows = []
    for entry in entries:
        rows.append(
            [
                str(entry.id),
                str(entry.vehicle_id),
                truncate(entry.customer, 20),
                entry.start_date,
                format_date(entry.end_date),
                entry.status.value,
                entry.type.value,
                entry.maintenance_status.value if entry.maintenance_status else "-",
            ]
        )
    return rows


def cmd_reservations(args):
    """List reservations."""
    fleet = load_fleet(args.fleet_file)
    today = iso_day(args.date)

    if args.vehicle is not None:
        entries = fleet.reservations_for(args.vehicle)
    else:
        entries = sorted(
            (r for r in fleet.reservations if r.deleted_at is None),
            key=lambda r: (r.start_date, r.id or 0),
        )

    if args.active:
        entries = [e for e in entries if e.is_live and e.covers(today)]

    if not entries:
        print("No reservations found.")
        return 0

    headers = ["ID", "Vehicle", "Customer", "Start", "End", "Status", "Type", "Maintenance"]
    print(tabulate(make_reservation_table(entries), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Transition commands
# =============================================================================


def cmd_set_status(args):
    """Manually change a vehicle's status."""
    result = actions.change_status(
        args.fleet_file, args.vehicle_id, VehicleStatus(args.status),
        today=args.date, dry_run=args.dry_run,
    )
    return report(result, args.dry_run)


def cmd_pickup(args):
    result = actions.pickup_reservation(
        args.fleet_file, args.reservation_id, today=args.date, dry_run=args.dry_run
    )
    return report(result, args.dry_run)


def cmd_return(args):
    result = actions.return_reservation(
        args.fleet_file, args.reservation_id, today=args.date, dry_run=args.dry_run
    )
    return report(result, args.dry_run)


def cmd_maintenance_start(args):
    """Open a maintenance block."""
    result = actions.start_maintenance(
        args.fleet_file,
        args.vehicle_id,
        start_date=args.start,
        end_date=args.end,
        today=args.date,
        notes=args.notes,
        dry_run=args.dry_run,
    )
    return report(result, args.dry_run)


def cmd_maintenance_end(args):
    result = actions.end_maintenance(
        args.fleet_file, args.reservation_id, today=args.date, dry_run=args.dry_run
    )
    return report(result, args.dry_run)


def cmd_cancel(args):
    result = actions.cancel_reservation(
        args.fleet_file, args.reservation_id, today=args.date, dry_run=args.dry_run
    )
    return report(result, args.dry_run)


def cmd_delete(args):
    result = actions.delete_reservation(
        args.fleet_file, args.reservation_id, today=args.date, dry_run=args.dry_run
    )
    return report(result, args.dry_run)


# =============================================================================
# Reconcile command
# =============================================================================


def cmd_reconcile(args):
    """Find (and optionally fix) status drift."""
    drift = actions.reconcile(args.fleet_file, today=args.date, apply=args.apply)

    if not drift:
        print("All vehicle statuses match their reservations.")
        return 0

    rows = [
        [str(d.vehicle.id), d.vehicle.name, status_label(d.stored), status_label(d.calculated)]
        for d in drift
    ]
    print(tabulate(rows, headers=["ID", "Vehicle", "Stored", "Calculated"], tablefmt="simple"))
    print()
    if args.apply:
        print(f"Updated {len(drift)} vehicle(s).")
    else:
        print(f"{len(drift)} vehicle(s) out of sync (use --apply to fix).")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle rental fleet status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleet.yaml status
  %(prog)s fleet.yaml reservations --vehicle 1 --active
  %(prog)s fleet.yaml set-status 1 not_for_rental
  %(prog)s fleet.yaml pickup 12 --date 2025-03-01
  %(prog)s fleet.yaml return 12
  %(prog)s fleet.yaml maintenance-start 1 --end 2025-03-04 --notes "brakes"
  %(prog)s fleet.yaml maintenance-end 13
  %(prog)s fleet.yaml reconcile --apply
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Evaluate as of this date in YYYY-MM-DD format (default: today)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show stored vs calculated status for each vehicle"
    )
    status_parser.add_argument("--vehicle", type=int, help="Only this vehicle id")

    # Reservations subcommand
    reservations_parser = subparsers.add_parser("reservations", help="List reservations")
    reservations_parser.add_argument("--vehicle", type=int, help="Only this vehicle id")
    reservations_parser.add_argument(
        "--active",
        action="store_true",
        help="Only reservations that are open and cover the date",
    )

    # Set status subcommand
    set_status_parser = subparsers.add_parser(
        "set-status", help="Manually change a vehicle's status"
    )
    set_status_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    set_status_parser.add_argument(
        "status",
        choices=[s.value for s in VehicleStatus],
        help="Requested status",
    )

    # Reservation event subcommands
    for name, help_text in (
        ("pickup", "Hand a vehicle over for a reservation"),
        ("return", "Take a rented vehicle back"),
        ("cancel", "Cancel a reservation"),
        ("delete", "Soft-delete a reservation"),
        ("maintenance-end", "Close a maintenance block"),
    ):
        event_parser = subparsers.add_parser(name, help=help_text)
        event_parser.add_argument("reservation_id", type=int, help="Reservation id")

    # Maintenance start subcommand
    maintenance_parser = subparsers.add_parser(
        "maintenance-start", help="Open a maintenance block"
    )
    maintenance_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    maintenance_parser.add_argument(
        "--start", type=str, help="Block start date (default: today)"
    )
    maintenance_parser.add_argument(
        "--end", type=str, help="Block end date (default: open-ended)"
    )
    maintenance_parser.add_argument("--notes", type=str, help="Notes about the work")

    for name in ("set-status", "pickup", "return", "cancel", "delete",
                 "maintenance-start", "maintenance-end"):
        subparsers.choices[name].add_argument(
            "--dry-run",
            action="store_true",
            help="Validate without saving",
        )

    # Reconcile subcommand
    reconcile_parser = subparsers.add_parser(
        "reconcile", help="Find vehicles whose status disagrees with reservations"
    )
    reconcile_parser.add_argument(
        "--apply",
        action="store_true",
        help="Write the calculated status for drifted vehicles",
    )

    return parser


COMMANDS = {
    "status": cmd_status,
    "reservations": cmd_reservations,
    "set-status": cmd_set_status,
    "pickup": cmd_pickup,
    "return": cmd_return,
    "maintenance-start": cmd_maintenance_start,
    "maintenance-end": cmd_maintenance_end,
    "cancel": cmd_cancel,
    "delete": cmd_delete,
    "reconcile": cmd_reconcile,
}


def main(argv: Optional[List[str]] = None):
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "ERROR").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    if args.date:
        try:
            args.date = iso_day(args.date)
        except ValueError:
            print(f"Error: Invalid date '{args.date}' (expected YYYY-MM-DD)")
            return 1

    # Dispatch to command handler
    try:
        return COMMANDS[args.command](args)
    except (KeyError, ValueError) as e:
        message = e.args[0] if e.args else str(e)
        print(f"Error: {message}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
