from rocketfist.errors.base_errors import InvalidStateError, NotFoundError


class RegistrationNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Reservation not found")


class RegistrationCancelledError(InvalidStateError):
    def __init__(self):
        super().__init__("Reservation is cancelled")


class RegistrationStateError(InvalidStateError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move reservation from {current} to {target}")


class DuplicateRegistrationError(InvalidStateError):
    def __init__(self):
        super().__init__("Member already has an active reservation for this class")


class CapacityExceededError(InvalidStateError):
    def __init__(self, max_capacity: int):
        super().__init__(f"Class is full ({max_capacity} spots)")


class CheckInTooEarlyError(InvalidStateError):
    def __init__(self):
        super().__init__("Check-in opens when the class starts")
