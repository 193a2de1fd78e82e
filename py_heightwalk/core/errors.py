"""Exceptions raised by the terrain generator."""


class InvalidParameterError(ValueError):
    """Level parameters rejected before generation starts."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")
