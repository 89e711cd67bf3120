"""Shared fixtures: in-memory stand-ins for the remote AWS capabilities."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from alarm_status.models import DescribePage, SearchPage  # noqa: E402


class FakeSearchClient:
    """Serve pre-built search pages in order, recording each request."""

    def __init__(self, pages: Sequence[Union[SearchPage, Exception]]) -> None:
        self.pages = list(pages)
        self.calls: List[tuple[str, Optional[str]]] = []

    def search(self, query: str, next_token: Optional[str] = None) -> SearchPage:
        self.calls.append((query, next_token))
        page = self.pages[len(self.calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page


class FakeDescribeClient:
    """Serve pre-built describe pages in order, recording each request."""

    def __init__(self, pages: Sequence[Union[DescribePage, Exception]]) -> None:
        self.pages = list(pages)
        self.calls: List[tuple[List[str], Optional[str]]] = []

    def describe(
        self, names: Sequence[str], next_token: Optional[str] = None
    ) -> DescribePage:
        self.calls.append((list(names), next_token))
        page = self.pages[len(self.calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture
def search_client_factory():
    return FakeSearchClient


@pytest.fixture
def describe_client_factory():
    return FakeDescribeClient
