"""Error taxonomy shared by services and the HTTP layer."""


class BookNestError(Exception):
    """Base error carrying the HTTP status and a user-visible message."""

    status_code = 500

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, object]:
        """Render the error as a JSON body."""
        payload: dict[str, object] = {"message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class Unauthenticated(BookNestError):
    """Missing, invalid or malformed credential."""

    status_code = 401


class ValidationFailed(BookNestError):
    """Missing field, schema violation or duplicate unique key."""

    status_code = 400


class NotFound(BookNestError):
    """Resource missing by id."""

    status_code = 404


class UpstreamError(BookNestError):
    """The external book catalog could not serve the request."""

    status_code = 500


class DuplicateKeyError(Exception):
    """Raised by repositories when a unique constraint rejects a write."""

    def __init__(self, constraint: str) -> None:
        super().__init__(f"Duplicate key violates {constraint}")
        self.constraint = constraint
