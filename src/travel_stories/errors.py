"""Error types shared by services and the HTTP layer."""


class TravelStoriesError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(TravelStoriesError):
    """Missing or malformed input."""

    status_code = 400


class AuthError(TravelStoriesError):
    """Missing, malformed or expired bearer token."""

    status_code = 401


class CredentialsError(AuthError):
    """Email/password pair rejected at login."""

    # Login failures have always been answered with 400.
    status_code = 400


class NotFoundError(TravelStoriesError):
    """Resource absent or owned by someone else."""

    status_code = 404


class ConflictError(TravelStoriesError):
    """Resource already exists."""

    # Kept at 400 for existing clients.
    status_code = 400


class StorageError(TravelStoriesError):
    """Filesystem failure while storing or removing an upload."""
