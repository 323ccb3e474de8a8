"""
Domain errors raised by the workflow services.

Services never build HTTP responses; ``main.py`` maps each class to its
status code and a ``{"message": ...}`` body.
"""


class AssetVerseError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AssetVerseError):
    status_code = 400
    default_message = "Invalid request"


class AuthError(AssetVerseError):
    status_code = 401
    default_message = "Unauthorized access"


class Forbidden(AssetVerseError):
    status_code = 403
    default_message = "Forbidden"


class LimitExceeded(Forbidden):
    default_message = "Employee limit reached for the current package"


class NotFound(AssetVerseError):
    status_code = 404
    default_message = "Not found"


class Conflict(AssetVerseError):
    status_code = 409
    default_message = "Conflict"


class Unavailable(AssetVerseError):
    status_code = 400
    default_message = "Asset is not available"


class ExternalServiceError(AssetVerseError):
    status_code = 502
    default_message = "Payment provider unavailable"


def parse_id(value, label: str = "id") -> int:
    """Validate a client supplied identifier before it reaches the store"""
    text = str(value).strip() if value is not None else ""
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise ValidationError(f"Invalid {label}")
    return int(text)
