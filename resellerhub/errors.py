class WorkflowError(Exception):
    """Base class for errors surfaced to the admin as an error envelope."""
    kind = 'error'

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_result(self):
        return {'success': False, 'error': self.message, 'error_type': self.kind}


class NotFound(WorkflowError):
    kind = 'not_found'


class InvalidState(WorkflowError):
    kind = 'invalid_state'


class InvalidTransition(InvalidState):
    kind = 'invalid_transition'


class ValidationError(WorkflowError):
    kind = 'validation_error'


class StoreError(WorkflowError):
    kind = 'store_error'
