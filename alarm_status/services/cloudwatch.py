"""Fetch live CloudWatch alarm state."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import DescribeError
from ..models import (
    COMPOSITE_ALARM_TYPE,
    METRIC_ALARM_TYPE,
    AlarmStatus,
    CompositeAlarm,
    DescribePage,
    MetricAlarm,
    normalize_alarm,
)
from ..utils import paginate_tokens
from . import AlarmDescribeClient

DESCRIBE_OPERATION = "describe CloudWatch alarms"
ALARM_TYPES = ["CompositeAlarm", "MetricAlarm"]

log = structlog.get_logger(__name__)


class CloudWatchDescribeClient:
    """:class:`AlarmDescribeClient` backed by the ``cloudwatch`` API."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_session(cls, session: boto3.session.Session) -> "CloudWatchDescribeClient":
        return cls(session.client("cloudwatch"))

    def describe(
        self, names: Sequence[str], next_token: Optional[str] = None
    ) -> DescribePage:
        # Without AlarmTypes the API only returns metric alarms.
        kwargs: Dict[str, Any] = {"AlarmNames": list(names), "AlarmTypes": ALARM_TYPES}
        if next_token is not None:
            kwargs["NextToken"] = next_token
        response = self._client.describe_alarms(**kwargs)
        return DescribePage(
            composite_alarms=[
                CompositeAlarm.from_response(item)
                for item in response.get("CompositeAlarms", [])
            ],
            metric_alarms=[
                MetricAlarm.from_response(item)
                for item in response.get("MetricAlarms", [])
            ],
            next_token=response.get("NextToken"),
        )


def fetch_alarm_statuses(
    client: AlarmDescribeClient, names: Sequence[str]
) -> List[AlarmStatus]:
    """Describe the alarms called *names* and return their normalised status.

    Within each page composite alarms come before metric alarms.
    """

    statuses: List[AlarmStatus] = []
    pages = 0

    def fetch(next_token: Optional[str]) -> DescribePage:
        try:
            return client.describe(names, next_token)
        except (BotoCoreError, ClientError) as exc:
            raise DescribeError(DESCRIBE_OPERATION, exc) from exc

    for page in paginate_tokens(fetch):
        pages += 1
        log.debug(
            "describe_page",
            page=pages,
            composite=len(page.composite_alarms),
            metric=len(page.metric_alarms),
            has_next=page.next_token is not None,
        )
        statuses.extend(
            normalize_alarm(alarm, COMPOSITE_ALARM_TYPE) for alarm in page.composite_alarms
        )
        statuses.extend(
            normalize_alarm(alarm, METRIC_ALARM_TYPE) for alarm in page.metric_alarms
        )
    return statuses


__all__ = ["ALARM_TYPES", "CloudWatchDescribeClient", "fetch_alarm_statuses"]
