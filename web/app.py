"""Flask web application for vehicle rental fleet status."""

import logging
import os
from pathlib import Path

from flask import (
    Flask,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)

# Add parent directory to path for fleet imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleet import actions
from fleet.calculations import calculate_correct_status, has_drift
from fleet.context import build_status_context, iso_day
from fleet.labels import status_color, status_label
from fleet.loader import load_fleet
from fleet.status import VehicleStatus

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to the fleet file (default: project root)
app.config["FLEET_FILE"] = Path(
    os.environ.get("FLEET_FILE", Path(__file__).parent.parent / "fleet.yaml")
)
# Fixed evaluation day; None means the server's local date
app.config["TODAY"] = None

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def fleet_file() -> Path:
    return Path(current_app.config["FLEET_FILE"])


def today() -> str:
    return iso_day(current_app.config.get("TODAY"))


def format_date(date_str):
    """Format date for display."""
    if date_str is None:
        return "—"
    return date_str


def wants_json() -> bool:
    """HTMX and API callers get JSON instead of a redirect."""
    return bool(request.headers.get("HX-Request")) or request.accept_mimetypes.best == "application/json"


# Register template filters
app.jinja_env.filters["format_date"] = format_date
app.jinja_env.filters["status_label"] = status_label
app.jinja_env.filters["status_color"] = status_color


def respond(result, vehicle_id):
    """
    Translate a TransitionResult into a response.

    Denials are 409 with the error; allowed results are 200, with the
    warning surfaced when present.
    """
    if wants_json():
        return jsonify(result.to_dict()), (200 if result.allowed else 409)

    if not result.allowed:
        flash(result.message, "error")
    elif result.message:
        flash(result.message, "warning")
    else:
        flash(f"Status set to {status_label(result.new_status)}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


def fail(message: str, code: int, vehicle_id=None):
    """Report a lookup or input error."""
    logger.warning("request failed (%s): %s", code, message)
    if wants_json():
        return jsonify({"allowed": False, "error": message}), code
    flash(message, "error")
    if vehicle_id is None:
        return redirect(url_for("index"))
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


def run_reservation_event(handler, reservation_id: int):
    """Run a reservation event handler and build the response."""
    try:
        vehicle_id = load_fleet(fleet_file()).get_reservation(reservation_id).vehicle_id
    except KeyError:
        return fail(f"Reservation {reservation_id} not found", 404)
    try:
        result = handler(fleet_file(), reservation_id, today=today())
    except ValueError as e:
        return fail(str(e), 400, vehicle_id)
    return respond(result, vehicle_id)


@app.route("/")
def index():
    """Dashboard showing all vehicles."""
    fleet = load_fleet(fleet_file())
    day = today()

    vehicles = []
    for vehicle in sorted(fleet.vehicles, key=lambda v: v.id):
        context = build_status_context(vehicle, fleet.reservations, day)
        calculated = calculate_correct_status(context)
        vehicles.append({
            "vehicle": vehicle,
            "calculated": calculated,
            "drift": has_drift(context),
            "active": len(context.active_reservations),
        })

    status_counts = {
        status: sum(1 for v in fleet.vehicles if v.availability_status is status)
        for status in VehicleStatus
    }

    return render_template(
        "index.html",
        vehicles=vehicles,
        status_counts=status_counts,
        today=day,
    )


@app.route("/vehicle/<int:vehicle_id>")
def vehicle_detail(vehicle_id: int):
    """Vehicle detail page with reservations and status actions."""
    fleet = load_fleet(fleet_file())
    try:
        vehicle = fleet.get_vehicle(vehicle_id)
    except KeyError:
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    day = today()
    context = build_status_context(vehicle, fleet.reservations, day)

    return render_template(
        "vehicle.html",
        vehicle=vehicle,
        context=context,
        calculated=calculate_correct_status(context),
        reservations=fleet.reservations_for(vehicle_id),
        statuses=list(VehicleStatus),
        today=day,
    )


@app.route("/vehicle/<int:vehicle_id>/status", methods=["POST"])
def change_status(vehicle_id: int):
    """Handle a manual status change."""
    requested = request.form.get("status")
    try:
        status = VehicleStatus(requested)
    except ValueError:
        return fail(f"Invalid status '{requested}'", 400, vehicle_id)

    try:
        result = actions.change_status(fleet_file(), vehicle_id, status, today=today())
    except KeyError:
        return fail(f"Vehicle {vehicle_id} not found", 404)
    return respond(result, vehicle_id)


@app.route("/vehicle/<int:vehicle_id>/maintenance", methods=["POST"])
def start_maintenance(vehicle_id: int):
    """Open a maintenance block from the form."""
    try:
        result = actions.start_maintenance(
            fleet_file(),
            vehicle_id,
            start_date=request.form.get("start_date") or None,
            end_date=request.form.get("end_date") or None,
            today=today(),
            notes=request.form.get("notes") or None,
        )
    except KeyError:
        return fail(f"Vehicle {vehicle_id} not found", 404)
    except ValueError as e:
        return fail(str(e), 400, vehicle_id)
    return respond(result, vehicle_id)


@app.route("/maintenance/<int:reservation_id>/end", methods=["POST"])
def end_maintenance(reservation_id: int):
    return run_reservation_event(actions.end_maintenance, reservation_id)


@app.route("/reservation/<int:reservation_id>/pickup", methods=["POST"])
def pickup(reservation_id: int):
    return run_reservation_event(actions.pickup_reservation, reservation_id)


@app.route("/reservation/<int:reservation_id>/return", methods=["POST"])
def return_vehicle(reservation_id: int):
    return run_reservation_event(actions.return_reservation, reservation_id)


@app.route("/reservation/<int:reservation_id>/cancel", methods=["POST"])
def cancel(reservation_id: int):
    return run_reservation_event(actions.cancel_reservation, reservation_id)


@app.route("/reservation/<int:reservation_id>/delete", methods=["POST"])
def delete(reservation_id: int):
    return run_reservation_event(actions.delete_reservation, reservation_id)


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
