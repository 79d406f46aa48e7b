class TurnosError(Exception):
    """Base class for every error raised by the turnos package."""


class ValidationError(TurnosError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class DuplicateError(TurnosError):
    """An active reservation already holds the requested slot."""


class NotFoundError(TurnosError):
    def __init__(self, reservation_id):
        super().__init__(f"No reservation found with id: {reservation_id}")
        self.reservation_id = reservation_id


class InfrastructureError(TurnosError):
    pass


class StoreError(InfrastructureError):
    """The reservation store could not complete the operation."""
