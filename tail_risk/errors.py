from __future__ import annotations

from typing import Optional


class FinancialModelError(ValueError):
    """Invalid input handed to one of the risk routines.

    ``code`` is a short machine-readable tag (``"empty"``, ``"non_finite"``,
    ``"too_short"``, ``"zero_price"``, ...) for callers that translate errors
    into user-facing messages.
    """

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code
