"""Command line interface for the CloudWatch alarm status lookup."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError

from .core import (
    CloudWatchAlarms,
    export_alarm_statuses_to_excel,
    export_alarm_statuses_to_json,
    print_alarm_statuses,
)
from .errors import AlarmStatusError
from .logconfig import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        description="Show the state of CloudWatch alarms that carry a set of resource tags."
    )
    parser.add_argument("--profile", help="AWS CLI profile to use", default=None)
    parser.add_argument("--region", help="AWS region to query", default=None)
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Resource tag the alarms must carry (repeatable)",
    )
    parser.add_argument(
        "--tags-file",
        help="JSON file with an object of tag keys to values; --tag values take precedence",
    )
    parser.add_argument("--json", dest="json_path", help="Optional path to export alarms as JSON")
    parser.add_argument(
        "--excel",
        dest="excel_path",
        help="Optional path to export alarms as an Excel workbook (.xlsx)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log verbosity (logs go to stderr)",
    )
    parser.add_argument("--log-format", default="console", choices=["console", "json"])
    return parser.parse_args(argv)


def parse_tags(pairs: List[str]) -> Dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a tag mapping."""

    tags: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid tag '{pair}'. Expected KEY=VALUE.")
        tags[key] = value
    return tags


def load_tags_file(path: str) -> Dict[str, str]:
    """Read a JSON object of tag keys to values from *path*."""

    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in data.items()
    ):
        raise ValueError(f"Tags file {path} must contain a JSON object of strings.")
    return data


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point used by ``python -m alarm_status``."""

    args = parse_args(argv)
    setup_logging(args.log_level, args.log_format)

    try:
        tags = load_tags_file(args.tags_file) if args.tags_file else {}
        tags.update(parse_tags(args.tags))
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        session = boto3.Session(profile_name=args.profile, region_name=args.region)
        alarms = CloudWatchAlarms.from_session(session)
    except BotoCoreError as exc:
        # Unknown profile or no region configured.
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        statuses = alarms.get_alarms_with_tags(tags)
    except AlarmStatusError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_alarm_statuses(statuses)

    if args.json_path:
        try:
            export_alarm_statuses_to_json(statuses, args.json_path)
        except OSError as exc:
            print(f"Failed to export JSON report: {exc}", file=sys.stderr)
        else:
            print(f"Alarms exported to {args.json_path}")

    if args.excel_path:
        try:
            path = export_alarm_statuses_to_excel(statuses, args.excel_path)
        except RuntimeError as exc:
            print(f"Failed to export Excel report: {exc}", file=sys.stderr)
        else:
            print(f"Excel report written to {path}")

    return 0


__all__ = ["load_tags_file", "main", "parse_args", "parse_tags"]
