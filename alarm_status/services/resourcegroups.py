"""Discover CloudWatch alarms through AWS Resource Groups tag search."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import MalformedResourceIdentifier, QueryConstructionError, SearchError
from ..models import SearchPage
from ..utils import paginate_tokens, parse_arn
from . import ResourceSearchClient

RESOURCE_QUERY_TYPE = "TAG_FILTERS_1_0"
CLOUDWATCH_ALARM_RESOURCE_TYPE = "AWS::CloudWatch::Alarm"
SEARCH_OPERATION = "search CloudWatch alarm resources"

log = structlog.get_logger(__name__)


class ResourceGroupsSearchClient:
    """:class:`ResourceSearchClient` backed by the ``resource-groups`` API."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_session(cls, session: boto3.session.Session) -> "ResourceGroupsSearchClient":
        return cls(session.client("resource-groups"))

    def search(self, query: str, next_token: Optional[str] = None) -> SearchPage:
        kwargs: Dict[str, Any] = {
            "ResourceQuery": {"Type": RESOURCE_QUERY_TYPE, "Query": query},
        }
        if next_token is not None:
            kwargs["NextToken"] = next_token
        response = self._client.search_resources(**kwargs)
        return SearchPage(
            resource_arns=[
                identifier.get("ResourceArn", "")
                for identifier in response.get("ResourceIdentifiers", [])
            ],
            next_token=response.get("NextToken"),
        )


def build_search_query(tags: Mapping[str, str]) -> str:
    """Return the JSON resource query matching CloudWatch alarms with *tags*."""

    query = {
        "ResourceTypeFilters": [CLOUDWATCH_ALARM_RESOURCE_TYPE],
        "TagFilters": [{"Key": key, "Values": [value]} for key, value in tags.items()],
    }
    try:
        return json.dumps(query)
    except (TypeError, ValueError) as exc:
        raise QueryConstructionError(f"construct search resource query: {exc}") from exc


def alarm_name_from_arn(alarm_arn: str) -> str:
    """Return the alarm name embedded in *alarm_arn*.

    For example ``arn:aws:cloudwatch:us-west-2:1234567890:alarm:SDc-ReadCapacityUnitsLimit-BasicAlarm``
    yields ``SDc-ReadCapacityUnitsLimit-BasicAlarm``.
    """

    resource = parse_arn(alarm_arn)["resource"]
    parts = resource.split(":")
    if len(parts) != 2:
        raise MalformedResourceIdentifier(resource)
    return parts[1]


def resolve_alarm_names(
    client: ResourceSearchClient, tags: Mapping[str, str]
) -> List[str]:
    """Return the names of every CloudWatch alarm carrying all of *tags*.

    All result pages are read before returning. Any failure discards the names
    collected so far.
    """

    query = build_search_query(tags)
    names: List[str] = []
    pages = 0

    def fetch(next_token: Optional[str]) -> SearchPage:
        try:
            return client.search(query, next_token)
        except (BotoCoreError, ClientError) as exc:
            raise SearchError(SEARCH_OPERATION, exc) from exc

    for page in paginate_tokens(fetch):
        pages += 1
        log.debug(
            "search_page",
            page=pages,
            resources=len(page.resource_arns),
            has_next=page.next_token is not None,
        )
        names.extend(alarm_name_from_arn(arn) for arn in page.resource_arns)
    return names


__all__ = [
    "CLOUDWATCH_ALARM_RESOURCE_TYPE",
    "RESOURCE_QUERY_TYPE",
    "ResourceGroupsSearchClient",
    "alarm_name_from_arn",
    "build_search_query",
    "resolve_alarm_names",
]
