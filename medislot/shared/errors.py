"""Domain errors raised by services and rendered by the API as {success: false, message}"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Doctor, availability, date entry, slot, booking or patient is absent"""

    status_code = 404


class SlotsExhaustedError(DomainError):
    """The slot exists but its count is already zero"""

    status_code = 400

    def __init__(self, message: str = "No slots left"):
        super().__init__(message)


class InvalidTransitionError(DomainError):
    status_code = 409


class ConflictError(DomainError):
    status_code = 409


class DateRangeError(DomainError):
    """A calendar view would step outside the supported date range"""

    status_code = 422
