"""Field-level validation of incoming product bodies."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

ALLOWED_FIELDS = ("name", "price", "inStock")


def _valid_name(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _valid_price(value: Any) -> bool:
    # bool is an int subclass but never a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value >= 0


def _valid_in_stock(value: Any) -> bool:
    return isinstance(value, bool)


_RULES = (
    ("name", _valid_name, "name must be a non-empty string"),
    ("price", _valid_price, "price must be a non-negative number"),
    ("inStock", _valid_in_stock, "inStock must be a boolean"),
)


def _as_fields(body: Any) -> Mapping[str, Any]:
    """View ``body`` as a key/value mapping; arrays are keyed by index."""

    if isinstance(body, Mapping):
        return body
    if isinstance(body, list):
        return {str(index): value for index, value in enumerate(body)}
    return {}


def validate_product_input(body: Any, *, partial: bool = False) -> list[str]:
    """Return every problem found in ``body``; an empty list means valid.

    Unknown keys are reported first in the order they appear, followed by
    ``name``, ``price`` and ``inStock`` errors. In full mode a missing field
    is reported exactly like a wrongly typed one; in partial mode only the
    keys present in ``body`` are checked.
    """

    fields = _as_fields(body)
    errors = [f"Unknown field: {key}" for key in fields if key not in ALLOWED_FIELDS]

    for field, is_valid, message in _RULES:
        if partial and field not in fields:
            continue
        if not is_valid(fields.get(field)):
            errors.append(message)

    return errors
