# turntable/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class TurntableError(Exception):
    """
    Base exception class for errors raised by the turntable state machine.

    Every error carries a stable machine-readable ``code`` and the HTTP
    ``status`` the API layer answers with, so callers never need to inspect
    message strings.
    """

    code = "INTERNAL_ERROR"
    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Return the error envelope sent to API clients."""
        return {"error": {"code": self.code, "message": self.message}}


class InvalidTransition(TurntableError):
    """
    Raised when an action is not legal from the machine's current state.
    The machine is left untouched.
    """

    code = "INVALID_STATE_TRANSITION"
    status = 409

    def __init__(self, action: Optional[str], message: str) -> None:
        super().__init__(message)
        self.action = action


class CatalogUnavailable(TurntableError):
    """
    Raised when the catalog cannot supply an item for put-item/change-item.
    """

    code = "CATALOG_UNAVAILABLE"
    status = 500


class ValidationError(TurntableError):
    """
    Raised when a state space or transition table definition is malformed.
    """

    code = "INVALID_DEFINITION"
    status = 500
