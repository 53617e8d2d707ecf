"""exceptions raised by lazyq. data conditions (nil, empty, exhausted) never raise."""
from typing import Any


class LazyqError(Exception):
    """base class for all lazyq errors."""
    pass


class InvalidArgumentError(LazyqError, TypeError):
    """raised at pipeline-construction time when an operator gets an unusable argument."""

    def __init__(self, operator: str, argument: str, value: Any):
        self.operator = operator
        self.argument = argument
        self.value = value
        super().__init__(f"{operator}() expects '{argument}' to be callable, got {type(value).__name__}")


class ChannelClosedError(LazyqError):
    """raised when sending on a channel that has already been closed."""
    pass


def ensure_callable(operator: str, argument: str, value: Any) -> None:
    """validate a user callable up front so pulling never has to."""
    if not callable(value):
        raise InvalidArgumentError(operator, argument, value)
