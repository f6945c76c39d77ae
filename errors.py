# errors.py - error types raised by services and repositories
# each one knows the http status it should be answered with


class ShopError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ShopError):
    """Bad or missing input that the client can fix."""
    status_code = 400


class InvalidArgument(ValidationError):
    pass


class NotFoundError(ShopError):
    status_code = 404


class AuthError(ShopError):
    status_code = 401


class ConflictError(ShopError):
    status_code = 409


class StorageError(ShopError):
    """The database failed. The message is for the logs, not for the client."""
    status_code = 500
