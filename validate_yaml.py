#!/usr/bin/env python3
"""Validate fleet YAML files against the schema."""
import argparse
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _duplicate_ids(rows, kind: str) -> list[str]:
    seen = set()
    errors = []
    for row in rows or []:
        row_id = row.get("id")
        if row_id in seen:
            errors.append(f"Duplicate {kind} id: {row_id}")
        seen.add(row_id)
    return errors


def validate_fleet_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single fleet YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
        return errors
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
        return errors
    except Exception as e:
        errors.append(f"Error: {e}")
        return errors

    vehicles = data.get("vehicles") or []
    reservations = data.get("reservations") or []
    errors.extend(_duplicate_ids(vehicles, "vehicle"))
    errors.extend(_duplicate_ids(reservations, "reservation"))

    vehicle_ids = {v["id"] for v in vehicles}
    for r in reservations:
        if r["vehicleId"] not in vehicle_ids:
            errors.append(f"Reservation {r.get('id')} references unknown vehicle {r['vehicleId']}")
        if r.get("endDate") and str(r["endDate"]) < str(r["startDate"]):
            errors.append(f"Reservation {r.get('id')} ends before it starts")
    return errors


def main(argv=None):
    """Validate the given fleet YAML files."""
    parser = argparse.ArgumentParser(description="Validate fleet YAML files")
    parser.add_argument(
        "files",
        type=Path,
        nargs="*",
        default=[Path(__file__).parent / "fleet.yaml"],
        help="Fleet YAML files (default: fleet.yaml)",
    )
    args = parser.parse_args(argv)
    schema = load_schema()

    all_valid = True
    for filepath in args.files:
        errors = validate_fleet_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
