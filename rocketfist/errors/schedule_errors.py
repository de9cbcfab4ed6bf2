from rocketfist.errors.base_errors import InvalidStateError, NotFoundError


class ClassTemplateNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Class not found")


class ClassInstanceNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Class instance not found")


class InactiveClassTemplateError(InvalidStateError):
    def __init__(self, name: str):
        super().__init__(f"Class '{name}' is inactive and cannot be scheduled")


class InstanceNotScheduledError(InvalidStateError):
    """Raised when a reservation targets an instance that is cancelled or completed."""

    def __init__(self, status: str):
        super().__init__(f"Class instance is {status}, registrations are closed")


class InstanceStateError(InvalidStateError):
    """Raised on a status change that is not scheduled -> cancelled/completed."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move class instance from {current} to {target}")


class InstanceAlreadyExistsError(InvalidStateError):
    def __init__(self):
        super().__init__("This class is already scheduled at that time")


class DuplicateClassNameError(InvalidStateError):
    def __init__(self, name: str):
        super().__init__(f"A class named '{name}' already exists")
