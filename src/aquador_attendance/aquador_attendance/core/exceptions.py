class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransition(DomainError):
    """Raised when an attendance action does not apply to the record's current state."""

    status_code = 409


class ProfileNotFound(DomainError):
    status_code = 404


class ProfileInactive(DomainError):
    status_code = 403


class NotStaffProfile(DomainError):
    status_code = 403


class NoActiveEnrollment(DomainError):
    """The learner has no active enrollment at all."""

    status_code = 404


class NoSessionToday(DomainError):
    """None of the learner's enrollments has an active session on the requested date."""

    status_code = 400


class PaymentRequired(DomainError):
    """Outstanding invoices block attendance recording."""

    status_code = 403


class StoreUnavailable(DomainError):
    """The database could not be reached or rejected the statement."""

    status_code = 500


class StoreTimeout(StoreUnavailable):
    status_code = 504
