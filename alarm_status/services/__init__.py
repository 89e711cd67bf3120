"""Remote AWS capabilities used to look up alarm status."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..models import DescribePage, SearchPage


class ResourceSearchClient(Protocol):
    """Anything that can run a tag-filter resource search one page at a time.

    Transport failures must be raised as ``botocore.exceptions.ClientError`` or
    ``BotoCoreError`` so the lookup reports them as a search failure.
    """

    def search(self, query: str, next_token: Optional[str] = None) -> SearchPage:
        ...


class AlarmDescribeClient(Protocol):
    """Anything that can describe CloudWatch alarms by name one page at a time.

    Transport failures must be raised as ``botocore.exceptions.ClientError`` or
    ``BotoCoreError`` so the lookup reports them as a describe failure.
    """

    def describe(
        self, names: Sequence[str], next_token: Optional[str] = None
    ) -> DescribePage:
        ...


__all__ = ["AlarmDescribeClient", "ResourceSearchClient"]
