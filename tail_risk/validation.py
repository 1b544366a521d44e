"""Input validation shared by every public routine."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from .errors import FinancialModelError


def ensure_finite_array(values: Any, name: str = "values", *, allow_empty: bool = False) -> np.ndarray:
    """Convert ``values`` to a one-dimensional float64 array, rejecting NaN/Inf.

    The returned array is always a fresh copy, so callers may sort or
    resample it without touching the caller's data.
    """
    if values is None or isinstance(values, (str, bytes)):
        raise FinancialModelError(f"{name} must be an array of numbers", code="not_array")
    try:
        array = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise FinancialModelError(f"{name} must be an array of numbers", code="not_array") from exc

    if array.ndim != 1:
        raise FinancialModelError(
            f"{name} must be a one-dimensional array of numbers", code="not_array"
        )

    if array.size == 0:
        if allow_empty:
            return array
        raise FinancialModelError(f"{name} cannot be empty", code="empty")

    bad = np.flatnonzero(~np.isfinite(array))
    if bad.size:
        index = int(bad[0])
        raise FinancialModelError(
            f"{name}[{index}] must be a finite number, got: {array[index]}",
            code="non_finite",
        )
    return array


def ensure_min_length(array: np.ndarray, minimum: int, message: str) -> None:
    if array.size < minimum:
        raise FinancialModelError(message, code="too_short")


def ensure_finite_scalar(value: Any, name: str) -> float:
    if isinstance(value, (str, bytes)):
        raise FinancialModelError(f"{name} must be a number, got: {value!r}", code="not_number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise FinancialModelError(f"{name} must be a number, got: {value!r}", code="not_number") from exc
    if not math.isfinite(number):
        raise FinancialModelError(f"{name} must be a finite number, got: {number}", code="non_finite")
    return number
