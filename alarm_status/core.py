"""Core orchestration utilities for the CloudWatch alarm status lookup."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Sequence

import boto3
import structlog

from .models import AlarmStatus
from .services import AlarmDescribeClient, ResourceSearchClient
from .services.cloudwatch import CloudWatchDescribeClient, fetch_alarm_statuses
from .services.resourcegroups import ResourceGroupsSearchClient, resolve_alarm_names

log = structlog.get_logger(__name__)


class CloudWatchAlarms:
    """Look up CloudWatch alarms by resource tag and report their state."""

    def __init__(
        self, search_client: ResourceSearchClient, describe_client: AlarmDescribeClient
    ) -> None:
        self.search_client = search_client
        self.describe_client = describe_client

    @classmethod
    def from_session(cls, session: boto3.session.Session) -> "CloudWatchAlarms":
        """Return an instance whose clients are created from *session*."""

        return cls(
            ResourceGroupsSearchClient.from_session(session),
            CloudWatchDescribeClient.from_session(session),
        )

    def get_alarms_with_tags(self, tags: Mapping[str, str]) -> List[AlarmStatus]:
        """Return the status of every CloudWatch alarm that has all of *tags*."""

        names = resolve_alarm_names(self.search_client, tags)
        statuses = fetch_alarm_statuses(self.describe_client, names)
        log.info("alarms_resolved", tags=len(tags), names=len(names), alarms=len(statuses))
        return statuses


def get_alarms_with_tags(
    session: boto3.session.Session, tags: Mapping[str, str]
) -> List[AlarmStatus]:
    """Convenience wrapper around :meth:`CloudWatchAlarms.get_alarms_with_tags`."""

    return CloudWatchAlarms.from_session(session).get_alarms_with_tags(tags)


def _format_timestamp(seconds: int) -> str:
    if not seconds:
        return "-"
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def print_alarm_statuses(statuses: Iterable[AlarmStatus]) -> None:
    """Pretty-print alarm statuses to stdout."""

    statuses = list(statuses)
    if not statuses:
        print("No alarms found.")
        return

    header = f"{'Name':<40} {'Type':<9} {'Status':<17} {'Last Updated':<20} Reason"
    print(header)
    print("-" * len(header))
    for status in statuses:
        name = (status.name[:37] + "...") if len(status.name) > 40 else status.name
        print(
            f"{name:<40} {status.type:<9} {status.status:<17} "
            f"{_format_timestamp(status.updated_times):<20} {status.reason}"
        )


def export_alarm_statuses_to_json(statuses: Iterable[AlarmStatus], path: str) -> str:
    """Write *statuses* to *path* as a JSON list."""

    with open(path, "w", encoding="utf-8") as fh:
        json.dump([status.as_dict() for status in statuses], fh, indent=2)
    return path


def export_alarm_statuses_to_excel(statuses: Iterable[AlarmStatus], path: str) -> str:
    """Write *statuses* to an Excel workbook located at *path*."""

    headers = ("Name", "Type", "Status", "Last Updated", "Reason", "ARN")
    rows = (
        (
            status.name,
            status.type,
            status.status,
            _format_timestamp(status.updated_times),
            status.reason,
            status.arn,
        )
        for status in statuses
    )
    return _export_rows_to_excel(rows, headers, path, sheet_title="Alarms")


def _export_rows_to_excel(
    rows: Iterable[Sequence[object]],
    headers: Sequence[str],
    path: str,
    *,
    sheet_title: str,
) -> str:
    """Write ``rows`` with ``headers`` to an Excel sheet using :mod:`openpyxl`."""

    try:
        from openpyxl import Workbook
        from openpyxl.utils import get_column_letter
    except ImportError as exc:  # pragma: no cover - dependency missing during tests
        raise RuntimeError(
            "The 'openpyxl' package is required to export alarms to Excel. "
            "Install it with 'pip install openpyxl'."
        ) from exc

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title

    sheet.append(list(headers))
    column_widths = [len(header) for header in headers]

    for row in rows:
        values = list(row)
        sheet.append(values)
        for idx, value in enumerate(values):
            column_widths[idx] = max(column_widths[idx], len(str(value)))

    for idx, width in enumerate(column_widths, start=1):
        sheet.column_dimensions[get_column_letter(idx)].width = min(width + 2, 60)

    workbook.save(path)
    return path


__all__ = [
    "CloudWatchAlarms",
    "export_alarm_statuses_to_excel",
    "export_alarm_statuses_to_json",
    "get_alarms_with_tags",
    "print_alarm_statuses",
]
