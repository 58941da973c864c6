"""
Display helpers — user counts and timestamps as the dashboard shows them.
Anything missing or unreadable shows as "Unknown" rather than raising.
"""

from datetime import datetime, timezone
from typing import Optional, Union

import pandas as pd
from dateutil import parser as date_parser

from extension_monitor.models import StoreRecord

UNKNOWN = "Unknown"

# Opera's store doesn't publish install counts
STORES_WITHOUT_USER_COUNTS = {"opera"}


def parse_user_count(users: Union[int, str]) -> Optional[int]:
    """1200000 or "1,200,000" -> 1200000. None if it isn't a number."""
    if isinstance(users, bool):
        return None
    if isinstance(users, (int, float)):
        return int(users)
    try:
        return int(str(users).replace(",", "").strip())
    except ValueError:
        return None


def format_user_count(users: Union[int, str]) -> str:
    """
    Compact user count.

    e.g., 10500000 -> "10.5M", 250400 -> "250K", 999 -> "999"
    Unparseable values are shown as given.
    """
    count = parse_user_count(users)
    if count is None:
        return str(users)
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{round(count / 1_000)}K"
    return str(count)


def display_users(record: StoreRecord) -> str:
    if record.store.lower() in STORES_WITHOUT_USER_COUNTS:
        return "-"
    return format_user_count(record.users)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime (naive input is taken as UTC).
    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    try:
        parsed = date_parser.isoparse(str(value))
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def format_date(value: Optional[str]) -> str:
    """'2025-03-14T09:30:00Z' -> '2025-03-14'"""
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNKNOWN
    return parsed.strftime("%Y-%m-%d")


def format_relative_time(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    How long ago something was checked.
    Under a minute -> "Just now", under an hour -> "N minutes ago",
    under a day -> "N hours ago", otherwise the plain date.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNKNOWN

    diff_seconds = (_now(now) - parsed).total_seconds()
    minutes = int(diff_seconds // 60)
    hours = int(diff_seconds // 3600)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    return format_date(value)


def format_days_ago(value: Optional[str], now: Optional[datetime] = None) -> str:
    """Whole days since a store last published an update: 'Today', '1 day ago', 'N days ago'."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNKNOWN

    days = int((_now(now) - parsed).total_seconds() // 86400)
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


def store_table(rows, now: Optional[datetime] = None) -> pd.DataFrame:
    """
    One row per store listing, in the column order the dashboard shows.
    `rows` is ExtensionReport.rows: (StoreRecord, RowStatus) pairs.
    """
    return pd.DataFrame(
        [
            {
                "Store": record.store.capitalize(),
                "Status": row.label,
                "Version": record.version,
                "Users": display_users(record),
                "Updated": format_days_ago(record.last_updated, now),
                "Link": record.url,
            }
            for record, row in rows
        ],
        columns=["Store", "Status", "Version", "Users", "Updated", "Link"],
    )
