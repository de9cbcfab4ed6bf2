class RocketFistError(Exception):
    """Base class for every error the API turns into a client response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(RocketFistError):
    """Malformed input: bad id, bad date, out-of-range values."""

    status_code = 400


class NotFoundError(RocketFistError):
    """A referenced record does not exist."""

    status_code = 404


class InvalidStateError(RocketFistError):
    """The requested transition is not allowed from the record's current state."""

    status_code = 409


class InternalError(RocketFistError):
    """Unexpected failure. The message is logged, never sent to the client."""

    status_code = 500
