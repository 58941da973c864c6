"""
Store listings, submitted versions and the classified views built from them.
All frozen: each refresh builds fresh objects from the feed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class StoreRecord:
    """One extension as listed in one store."""
    store: str                  # "chrome", "firefox", "edge", "opera", ...
    name: str                   # Name as the store reports it (spelling varies)
    version: str                # e.g., "6.12.0"
    last_updated: str           # ISO timestamp, may be empty
    users: Union[int, str]      # 1200000 or "1,200,000"
    url: str
    last_checked: str           # When this listing was scraped


@dataclass(frozen=True)
class SubmissionRecord:
    """Latest version submitted for review, as tracked by the release registry."""
    version: Optional[str] = None
    release_date: Optional[str] = None


@dataclass(frozen=True)
class StoreFeed:
    """A store's raw listings from the upstream feed."""
    store: str
    records: tuple[dict, ...]


@dataclass(frozen=True)
class RegistryFeed:
    """The submission registry section of the feed, keyed by extension slug."""
    entries: dict[str, SubmissionRecord] = field(default_factory=dict)

    def get(self, slug: str) -> Optional[SubmissionRecord]:
        return self.entries.get(slug)


# The feed is a mapping of store name to listings, plus one reserved registry key
FeedSection = Union[StoreFeed, RegistryFeed]


@dataclass(frozen=True)
class ExtensionGroup:
    """All store listings of one extension, after name variants are folded together."""
    name: str
    stores: tuple[StoreRecord, ...]
    latest_version: str
    is_consistent: bool
    submitted_version: Optional[str] = None
    release_date: Optional[str] = None


class Status(str, Enum):
    LIVE = "live"
    PENDING = "pending"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class GroupStatus:
    status: Status
    message: str


@dataclass(frozen=True)
class RowStatus:
    status: Status
    label: str                  # "✓ LIVE", "○ PENDING" or "⚠ MISMATCH"
    emphasis: str               # Text colour for the version cell


@dataclass(frozen=True)
class VersionBadge:
    """A distinct live version and how many stores serve it."""
    version: str
    count: int
    status: Optional[Status]    # None when there is nothing submitted to compare with


@dataclass(frozen=True)
class ExtensionReport:
    """A classified group, ready to render."""
    group: ExtensionGroup
    status: GroupStatus
    rows: tuple[tuple[StoreRecord, RowStatus], ...]
    badges: tuple[VersionBadge, ...]
    release_url: Optional[str]
    submitted_is_live: bool
