class TaskStoreError(Exception):
    """Base class for failures surfaced by the task store client."""

    def __init__(self, message, status_code=None, detail=None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ValidationError(TaskStoreError):
    pass


class AuthError(TaskStoreError):
    pass


class NotFoundError(TaskStoreError):
    pass


class TransportError(TaskStoreError):
    pass
