from __future__ import annotations

from typing import Any, Dict, Optional


class RosterError(Exception):
    """Base class for failures scoped to a single list-screen interaction."""

    title = "Something went wrong"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(RosterError):
    """Input or target the data source will not accept; retrying unchanged does not help."""

    title = "Invalid input"

    def __init__(self, message: str, *, field: str | None = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.field = field


class NetworkFailure(RosterError):
    title = "Connection problem"


class AuthFailure(RosterError):
    title = "Session expired"


class MutationConflict(RosterError):
    """A mutation targeted a row that no longer exists or changed underneath us."""

    title = "Update failed"

    def __init__(self, message: str, *, table: str | None = None, item_id: Any = None):
        super().__init__(message, details={"table": table, "id": item_id})
        self.table = table
        self.item_id = item_id


class ActionRejected(RosterError):
    """A row action was attempted while the screen could not accept it."""

    title = "Please wait"


class StaleResponse(RosterError):
    """A fetch completed after a newer fetch was issued; its rows were dropped."""

    def __init__(self, token: int, current: int):
        super().__init__(f"Response for request {token} superseded by request {current}")
        self.token = token
        self.current = current
