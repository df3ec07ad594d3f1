"""
Errors raised by the fleet core services.

Views translate these into HTTP responses; the services never retry.
"""


class FleetError(Exception):
    """Base class. ``code`` is a stable machine-readable identifier."""
    default_code = 'fleet_error'

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __str__(self):
        return self.message


class ValidationFailed(FleetError):
    """Malformed or out-of-range input; the caller can fix and resend."""
    default_code = 'invalid_input'


class PreconditionFailed(FleetError):
    """A business rule rejected the operation (unavailable resource, expired license, ...)."""
    default_code = 'precondition_failed'


class NotFound(FleetError):
    default_code = 'not_found'


class InvalidTransition(FleetError):
    """The trip cannot move from its current status to the requested one."""
    default_code = 'invalid_transition'

    def __init__(self, message, current_status=None, requested_status=None):
        super().__init__(message)
        self.current_status = current_status
        self.requested_status = requested_status


class StoreFailure(FleetError):
    """The transactional write could not be applied. No partial state was committed."""
    default_code = 'store_failure'
