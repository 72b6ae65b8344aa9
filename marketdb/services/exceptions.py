# marketdb/services/exceptions.py

class ServiceError(Exception):
    """Base class for service-layer errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class DomainValidationError(ServiceError):
    """Invalid domain input."""
    pass


class ResourceNotFoundError(ServiceError):
    """The requested resource does not exist."""
    pass


class ConflictError(ServiceError):
    """The entity is in a state that does not allow the operation."""
    pass
