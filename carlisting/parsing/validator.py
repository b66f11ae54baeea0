"""Per-record validation of candidate car listings."""

import math
from datetime import date
from typing import Any

from carlisting.logging.logger import Log

MIN_YEAR = 1900

_REQUIRED_TEXT_FIELDS = ("make", "model")
_REQUIRED_AMOUNT_FIELDS = ("mileage", "price")
_OPTIONAL_AMOUNT_FIELDS = (
    "co2",
    "power_kw",
    "power_hp",
    "number_of_doors",
    "number_of_seats",
)

FUEL_TYPES: dict[str, str] = {
    "gasoline": "Petrol",
    "gas": "Petrol",
    "petrol": "Petrol",
    "diesel": "Diesel",
    "electric": "Electric",
    "hybrid": "Hybrid",
    "plug-in hybrid": "Plug-in Hybrid",
    "plugin hybrid": "Plug-in Hybrid",
    "phev": "Plug-in Hybrid",
}


def is_valid_listing(candidate: Any) -> bool:
    """Return True if the candidate satisfies all listing field constraints.

    Normalizes ``fuel_type`` in place: a recognized synonym is rewritten to
    its canonical value, anything else is removed. An unrecognized fuel type
    alone never rejects a record. Never raises.
    """
    try:
        return _validate(candidate)
    except Exception as exc:  # noqa: BLE001
        Log.warning(f"Error validating listing: {exc}")
        return False


def normalize_fuel_type(value: str | None) -> str | None:
    """Map a free-text fuel type to the canonical vocabulary, or None."""
    if value is None:
        return None
    return FUEL_TYPES.get(value.strip().lower())


def max_year() -> int:
    return date.today().year + 1


def _validate(candidate: Any) -> bool:
    if not isinstance(candidate, dict):
        Log.debug(f"Invalid listing - not an object: {candidate!r}")
        return False

    for name in _REQUIRED_TEXT_FIELDS:
        value = candidate.get(name)
        if not isinstance(value, str) or not value.strip():
            Log.debug(f"Invalid listing - '{name}' must be a non-empty string")
            return False

    year = candidate.get("year")
    if not _is_number(year) or not MIN_YEAR <= year <= max_year():
        Log.debug(f"Invalid listing - year out of range: {year!r}")
        return False

    for name in _REQUIRED_AMOUNT_FIELDS:
        if not _is_amount(candidate.get(name)):
            Log.debug(f"Invalid listing - '{name}' must be a number >= 0")
            return False

    for name in _OPTIONAL_AMOUNT_FIELDS:
        if name in candidate and not _is_amount(candidate[name]):
            Log.debug(f"Invalid listing - '{name}' must be a number >= 0")
            return False

    if "fuel_type" in candidate:
        raw_fuel = candidate["fuel_type"]
        if raw_fuel and not isinstance(raw_fuel, str):
            Log.debug(f"Invalid listing - fuel_type is not text: {raw_fuel!r}")
            return False
        # Falsy non-text values (0, False, []) count as "no fuel type".
        fuel_type = normalize_fuel_type(raw_fuel) if isinstance(raw_fuel, str) else None
        if fuel_type is None:
            Log.debug(f"Dropping unrecognized fuel type: {raw_fuel!r}")
            del candidate["fuel_type"]
        else:
            candidate["fuel_type"] = fuel_type

    return True


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_amount(value: Any) -> bool:
    return _is_number(value) and value >= 0
