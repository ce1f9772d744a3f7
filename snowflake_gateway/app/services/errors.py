from typing import Any


class SnowflakeError(ValueError):
    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidTimestampError(SnowflakeError):
    pass


class InvalidSnowflakeError(SnowflakeError):
    pass


class InvalidInputError(SnowflakeError):
    pass


class MalformedTransportStringError(SnowflakeError):
    pass
