"""
Domain Exceptions

Error taxonomy of the settlement core. Everything derives from
``ValueError`` so code that already guards domain calls with
``except ValueError`` keeps working.

- ValidationError: bad input, detected before any write
- NotFoundError: referenced hotel/service/provider/booking missing or inactive
- InvalidTransition: the booking's current state forbids the operation
- NotificationFailure: a channel failed; logged, never surfaced to callers
"""


class DomainError(ValueError):
    code = 'domain_error'

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(DomainError):
    code = 'invalid'


class InvalidInput(ValidationError):
    """Raised by the price calculator for non-positive or non-finite amounts."""
    code = 'invalid_input'


class NotFoundError(DomainError):
    code = 'not_found'


class InvalidTransition(DomainError):
    code = 'invalid_transition'


class DuplicateReview(InvalidTransition):
    code = 'duplicate_review'


class NotificationFailure(DomainError):
    code = 'notification_failed'
