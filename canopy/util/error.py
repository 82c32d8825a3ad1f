"""Errors raised while wiring the application together."""


class ConfigurationError(Exception):
    """A setting has a value the application cannot start with."""

    def __init__(self, setting: str, value: object, reason: str) -> None:
        self.setting = setting
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {setting} {value!r}: {reason}")
