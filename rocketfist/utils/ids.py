import uuid

from rocketfist.errors.base_errors import InvalidInputError


def new_uuid() -> str:
    return str(uuid.uuid4())


def parse_uuid(value: str, message: str = "Invalid ID format") -> str:
    """Returns the canonical lowercase form of a UUID string or raises InvalidInputError."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidInputError(message)
