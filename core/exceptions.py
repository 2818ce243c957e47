class AppError(Exception):
    """Base class for errors that the API layer knows how to render."""

    status_code = 500
    public_message = "Error"

    def to_dict(self):
        return {"error": self.public_message}


class ValidationError(AppError):
    """A required field is missing or a value is out of range."""

    status_code = 400
    public_message = "Invalid request"

    def __init__(self, errors=None, message=None):
        self.errors = errors or {}
        if message:
            self.public_message = message
        super().__init__(self.public_message)

    def to_dict(self):
        return {"error": self.public_message, "errors": self.errors}


class MalformedIdentifier(AppError):
    """An external identifier string is not a valid time-ordered identifier."""

    status_code = 400

    def __init__(self, value, field=None):
        self.value = value
        self.field = field
        label = f"'{field}'" if field else "identifier"
        self.public_message = f"Malformed {label}: {value!r}"
        super().__init__(self.public_message)


class StorageUnavailable(AppError):
    """
    Any failure reported by the wide-column store: lost connection, timeout,
    rejected query. The message is for the server log only, clients get a
    generic error body.
    """

    status_code = 500
    public_message = "Error"
