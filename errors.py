# Error kinds raised by resolvers
import enum


class ErrorKind(enum.Enum):
    VALIDATION = 400
    UNAUTHENTICATED = 401
    UNAUTHORIZED = 403
    NOT_FOUND = 404
    CONFLICT = 409

    @property
    def status_code(self):
        return self.value


class BeerBuddyError(Exception):
    """A request-level failure with a human-readable message.

    The transport layer turns ``kind`` into a protocol status; callers never
    need to inspect ``message`` to decide how to react.
    """

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self):
        return {"error": self.message}


def validation_error(message):
    return BeerBuddyError(ErrorKind.VALIDATION, message)


def not_authenticated():
    return BeerBuddyError(ErrorKind.UNAUTHENTICATED, "Not authenticated")


def not_authorized(message):
    return BeerBuddyError(ErrorKind.UNAUTHORIZED, message)


def not_found(message):
    return BeerBuddyError(ErrorKind.NOT_FOUND, message)


def conflict(message):
    return BeerBuddyError(ErrorKind.CONFLICT, message)
