"""Exceptions raised while resolving CloudWatch alarm status."""
from __future__ import annotations


class AlarmStatusError(Exception):
    """Base class for every failure of an alarm status lookup."""


class QueryConstructionError(AlarmStatusError):
    """The tag filters could not be serialised into a resource query."""


class RemoteCallError(AlarmStatusError):
    """A remote AWS call failed; ``operation`` names what was being attempted."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


class SearchError(RemoteCallError):
    """The Resource Groups search call failed."""


class DescribeError(RemoteCallError):
    """The CloudWatch describe-alarms call failed."""


class ArnParseError(AlarmStatusError, ValueError):
    """A resource identifier is not a well-formed ARN."""

    def __init__(self, value: str, reason: str = "") -> None:
        message = f"parse alarm ARN {value}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value = value


class MalformedResourceIdentifier(AlarmStatusError, ValueError):
    """An ARN resource part is not of the form ``alarm:<name>``."""

    def __init__(self, value: str) -> None:
        super().__init__(f"cannot parse alarm ARN resource {value}")
        self.value = value


__all__ = [
    "AlarmStatusError",
    "ArnParseError",
    "DescribeError",
    "MalformedResourceIdentifier",
    "QueryConstructionError",
    "RemoteCallError",
    "SearchError",
]
