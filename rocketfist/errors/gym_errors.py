from rocketfist.errors.base_errors import NotFoundError


class GymNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Gym not found")


class MemberNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Member not found")


class CoachNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Coach not found")
