"""Errors raised by the content service."""


class ContentError(Exception):
    """Base class for rejected content operations."""

    pass


class UnknownListError(ContentError):
    """Raised when a list key is not declared."""

    def __init__(self, list_key: str):
        self.list_key = list_key
        super().__init__(f"Unknown list '{list_key}'")


class ItemNotFoundError(ContentError):
    """Raised when an item (or a related item) does not exist."""

    def __init__(self, list_key: str, item_id: object):
        self.list_key = list_key
        self.item_id = item_id
        super().__init__(f"{list_key} '{item_id}' not found")


class ValidationError(ContentError):
    """Raised when a value breaks a field's declared constraints."""

    def __init__(self, list_key: str, field: str, message: str):
        self.list_key = list_key
        self.field = field
        super().__init__(f"{list_key}.{field}: {message}")


class UniqueConstraintError(ValidationError):
    """Raised when a unique field value is already in use."""

    def __init__(self, list_key: str, field: str, value: object):
        self.value = value
        super().__init__(list_key, field, f"value '{value}' is already in use")
