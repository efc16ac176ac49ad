"""
Domain error types

Every error carries a message that is safe to return to the client.
The HTTP status for each type is assigned in fintrack.main.
"""


class DomainError(Exception):
    """Base class for errors raised by use cases and repositories"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Missing or malformed field, non-positive amount, category type mismatch"""


class InvalidCategoryError(ValidationError):
    """
    Category reference rejected for a record

    `reason` keeps the internal cause (not found / wrong type); the outward
    message is the same for both.
    """

    def __init__(self, kind: str, reason):
        super().__init__(f"invalid {kind} category")
        self.reason = reason


class Unauthorized(DomainError):
    """Missing, invalid or expired credentials"""

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class InvalidCredentials(Unauthorized):
    """Login failed: unknown user or wrong password (not distinguished)"""

    def __init__(self):
        super().__init__("invalid credentials")


class Conflict(DomainError):
    """Uniqueness violation (duplicate email or username)"""


class NotFound(DomainError):
    """Entity does not exist"""


class NotFoundOrUnauthorized(DomainError):
    """
    Owner-scoped update/delete matched no row.

    Covers both "record does not exist" and "record belongs to another user";
    the two are intentionally not distinguished so record ids of other users
    cannot be probed.
    """

    def __init__(self, kind: str):
        super().__init__(f"{kind} not found or unauthorized")
        self.kind = kind


class InternalError(DomainError):
    """Store, hashing or rendering failure; `detail` is logged, never returned"""

    def __init__(self, detail: str = ""):
        super().__init__("internal server error")
        self.detail = detail
