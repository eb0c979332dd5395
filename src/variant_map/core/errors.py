"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these; ``main.create_app`` maps them to HTTP responses.
"""


class VariantMapError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(VariantMapError):
    """Malformed or out-of-range input (non-finite coordinates, missing field)."""

    status_code = 422


class NotFoundError(VariantMapError):
    """A referenced location does not exist."""

    status_code = 404


class ConflictError(VariantMapError):
    """A write collided with the natural-key uniqueness constraint."""

    status_code = 409


class AuthError(VariantMapError):
    """Bad admin secret, or an invalid or expired admin token."""

    status_code = 401


class StoreError(VariantMapError):
    """The transactional store is unavailable or aborted the transaction."""

    status_code = 503
