"""
Error Taxonomy

Every failure the ordering core can report to a caller. Each error carries
the HTTP status code the API layers translate it to, so route handlers
never have to map exceptions one by one.

    ValidationError   bad or missing input             400
    NotOnMenu         drink not recognised             400
    NoActiveSession   no session selected              400
    NotFound          named session does not exist     404
    StorageError      durable read/write failure       500
"""

from typing import Optional


class TorcError(Exception):
    """Base class for all ordering-core errors."""

    status_code: int = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(TorcError):
    """Input is missing or malformed; the client can correct it."""

    status_code = 400


class NotOnMenu(TorcError):
    status_code = 400

    def __init__(self, drink: str):
        super().__init__("drink not on menu", detail=drink)
        self.drink = drink


class NoActiveSession(TorcError):
    status_code = 400

    def __init__(self):
        super().__init__("no session selected")


class NotFound(TorcError):
    status_code = 404


class StorageError(TorcError):
    """The underlying filesystem read or write failed."""

    status_code = 500
