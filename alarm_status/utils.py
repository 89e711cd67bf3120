"""Shared helpers for the alarm status lookup."""
from __future__ import annotations

import calendar
from datetime import datetime
from typing import Callable, Dict, Iterator, Optional, Protocol, TypeVar

from botocore.utils import ArnParser, InvalidArnException

from .errors import ArnParseError


class TokenPage(Protocol):
    next_token: Optional[str]


P = TypeVar("P", bound=TokenPage)

_ARN_PARSER = ArnParser()


def paginate_tokens(fetch: Callable[[Optional[str]], P]) -> Iterator[P]:
    """Yield pages from *fetch* until a page comes back without a next token.

    ``fetch`` receives the previous page's token (``None`` for the first call).
    Empty pages that still carry a token do not stop the iteration.
    """

    next_token: Optional[str] = None
    while True:
        page = fetch(next_token)
        yield page
        if page.next_token is None:
            return
        next_token = page.next_token


def parse_arn(value: str) -> Dict[str, str]:
    """Split an ARN into partition, service, region, account and resource."""

    if not value.startswith("arn:"):
        raise ArnParseError(value, "arn: invalid prefix")
    try:
        return _ARN_PARSER.parse_arn(value)
    except InvalidArnException as exc:
        raise ArnParseError(value, "arn: not enough sections") from exc


def to_unix_seconds(timestamp: Optional[datetime]) -> int:
    """Return *timestamp* as whole seconds since the epoch.

    Naive datetimes are taken to be UTC; ``None`` maps to ``0``.
    """

    if timestamp is None:
        return 0
    return calendar.timegm(timestamp.utctimetuple())


__all__ = ["paginate_tokens", "parse_arn", "to_unix_seconds"]
