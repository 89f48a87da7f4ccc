"""Failure taxonomy shared by services and the HTTP layer.

Every error carries a ``kind`` (one of ValidationError, NotFound, Conflict,
StateConflict, Internal), a more specific ``code`` that clients can match
on, a human readable message and the HTTP status it is rendered with.
"""


class ServiceError(Exception):
    kind = "Internal"
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"kind": self.kind, "code": self.code, "message": self.message}


class Internal(ServiceError):
    pass


# --- ValidationError ---------------------------------------------------------


class ValidationError(ServiceError):
    kind = "ValidationError"
    status_code = 400
    default_message = "Invalid request"


class InvalidCredentials(ValidationError):
    status_code = 401
    default_message = "Invalid email or password"


class NotACook(ValidationError):
    status_code = 403
    default_message = "Only cooks can own a cook profile"


# --- NotFound ----------------------------------------------------------------


class NotFound(ServiceError):
    kind = "NotFound"
    status_code = 404
    default_message = "Not found"


# --- Conflict ----------------------------------------------------------------


class Conflict(ServiceError):
    kind = "Conflict"
    status_code = 409
    default_message = "Conflict"


class CrossCookConflict(Conflict):
    default_message = (
        "You can only order from one cook at a time. "
        "Please clear your current cart first."
    )


class DuplicateReview(Conflict):
    default_message = "You have already reviewed this cook"


class CartBusy(Conflict):
    default_message = "Your cart is being updated by another request, try again"


class Unavailable(Conflict):
    status_code = 400
    default_message = "Menu item is not available"


class ItemUnavailable(Conflict):
    status_code = 400

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(f'"{item_name}" is no longer available')


class EmptyCart(Conflict):
    status_code = 400
    default_message = "Cart is empty"


# --- StateConflict -----------------------------------------------------------


class StateConflict(ServiceError):
    kind = "StateConflict"
    status_code = 400
    default_message = "Operation not allowed in the current status"
