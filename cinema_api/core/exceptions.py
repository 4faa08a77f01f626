class CinemaError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(CinemaError):
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class InvalidReferenceError(CinemaError):
    """Client referenced a related entity that does not exist."""

    def __init__(self, message: str = "one or more genreIds do not exist"):
        super().__init__(message, status_code=400)


class ConflictError(CinemaError):
    def __init__(self, message: str = "Operation blocked by dependent records"):
        super().__init__(message, status_code=409)


class NotFoundError(CinemaError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class StorageError(CinemaError):
    """Unexpected database failure. The message is safe to show to clients."""

    def __init__(self, message: str = "Database error"):
        super().__init__(message, status_code=500)


class EncodingError(CinemaError):
    def __init__(self, message: str = "Failed to generate image"):
        super().__init__(message, status_code=500)
