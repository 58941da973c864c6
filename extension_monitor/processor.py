"""
Feed Processor — turns the raw upstream feed into classified extension reports.

Takes the JSON feed (store name -> listings, plus the submission registry),
folds store listings into one group per extension, and decides for every
group and every store row whether it is live, pending approval, or out of sync.

Key design decisions:
    1. Pure functions only. No I/O or caching here; the fetcher and dashboard own those.
    2. Bad data degrades instead of raising. A broken listing is dropped,
       a broken store section is skipped, a broken version segment counts as 0.
    3. Group and row status use the same comparison primitive, so they can't disagree.
"""

from typing import Any, Optional

from extension_monitor.config import RELEASE_URL_BASE, SUBMISSION_REGISTRY_KEY
from extension_monitor.models import (
    ExtensionGroup,
    ExtensionReport,
    FeedSection,
    GroupStatus,
    RegistryFeed,
    RowStatus,
    Status,
    StoreFeed,
    StoreRecord,
    SubmissionRecord,
    VersionBadge,
)
from extension_monitor.versions import compare_versions, is_sequential_update

# Row label and version-cell colour per status (matches the dashboard palette)
ROW_STYLES = {
    Status.LIVE: ("✓ LIVE", "#6bbf7a"),
    Status.PENDING: ("○ PENDING", "#6fa8dc"),
    Status.MISMATCH: ("⚠ MISMATCH", "#e06c5f"),
}

# ============================================================
# PART 1: Reading the feed
# ============================================================

def _parse_submission(raw: Any) -> SubmissionRecord:
    """Registry entries are {"version": ..., "releaseDate": ...}; blanks mean 'nothing submitted'."""
    if not isinstance(raw, dict):
        return SubmissionRecord()
    version = raw.get("version")
    version = str(version).strip() if version is not None else ""
    return SubmissionRecord(
        version=version or None,
        release_date=raw.get("releaseDate") or None,
    )


def split_feed(raw_feed: Any) -> list[FeedSection]:
    """
    Sort the feed's top-level entries into store sections and the registry section.

    Anything that doesn't fit (a store whose value isn't a list, a registry that
    isn't a mapping, a feed that isn't a mapping at all) is skipped. Partial
    data beats no data.
    """
    if not isinstance(raw_feed, dict):
        return []

    sections: list[FeedSection] = []
    for key, value in raw_feed.items():
        if key == SUBMISSION_REGISTRY_KEY:
            if isinstance(value, dict):
                sections.append(RegistryFeed(
                    entries={slug: _parse_submission(entry) for slug, entry in value.items()}
                ))
            continue
        if isinstance(value, list):
            sections.append(StoreFeed(store=str(key), records=tuple(value)))
    return sections


def normalize_extension_name(extension_name: str) -> str:
    """
    Fold store-specific spellings into one canonical name.

    e.g., "AdBlock — best ad blocker" -> "AdBlock"
          "Adblock Plus - free ad blocker" -> "Adblock Plus"
    Anything else stays its own group. Matching is case-sensitive.
    """
    if "Adblock Plus" in extension_name:
        return "Adblock Plus"
    if "AdBlock" in extension_name:
        return "AdBlock"
    return extension_name


def extension_slug(name: str) -> str:
    """'Adblock Plus' -> 'adblockplus'. Used for registry lookups and release tags."""
    return "".join(name.lower().split())


def _find_submission(group_name: str, registry: RegistryFeed) -> Optional[SubmissionRecord]:
    slug = extension_slug(group_name)
    # "adblockplus" contains "adblock", so the longer match has to win first
    if "adblockplus" in slug:
        return registry.get("adblockplus")
    if "adblock" in slug:
        return registry.get("adblock")
    return None


def _to_store_record(store: str, raw: dict, name: str) -> StoreRecord:
    return StoreRecord(
        store=store,
        name=name,
        version=str(raw.get("version") or ""),
        last_updated=raw.get("lastUpdated") or "",
        users=raw.get("users") if raw.get("users") is not None else 0,
        url=raw.get("url") or "",
        last_checked=raw.get("lastChecked") or "",
    )


# ============================================================
# PART 2: Grouping
# ============================================================

def group_extensions(raw_feed: Any) -> list[ExtensionGroup]:
    """
    Merge every store's listings into one group per extension.

    Groups come out in the order their first listing was seen; listings keep
    feed order inside a group. Listings with neither an "extension" nor a
    "name" field are dropped.
    """
    sections = split_feed(raw_feed)
    registry = next((s for s in sections if isinstance(s, RegistryFeed)), RegistryFeed())

    grouped: dict[str, list[StoreRecord]] = {}
    for section in sections:
        if not isinstance(section, StoreFeed):
            continue
        for raw in section.records:
            if not isinstance(raw, dict):
                continue
            reported_name = raw.get("extension") or raw.get("name")
            if not reported_name:
                continue
            canonical = normalize_extension_name(str(reported_name))
            grouped.setdefault(canonical, []).append(
                _to_store_record(section.store, raw, str(reported_name))
            )

    groups = []
    for name, records in grouped.items():
        versions = [r.version for r in records]

        # Fold rather than sort: on ties the first-seen version wins
        latest = versions[0]
        for version in versions[1:]:
            if compare_versions(version, latest) > 0:
                latest = version

        submission = _find_submission(name, registry) or SubmissionRecord()
        groups.append(ExtensionGroup(
            name=name,
            stores=tuple(records),
            latest_version=latest,
            is_consistent=all(v == versions[0] for v in versions),
            submitted_version=submission.version,
            release_date=submission.release_date,
        ))

    return groups


# ============================================================
# PART 3: Classification
# ============================================================

def classify_version(version: str, submitted_version: Optional[str]) -> Optional[Status]:
    """
    Where does one live version stand against the submitted one?

        equal                   -> LIVE
        behind by one step      -> PENDING (review in progress)
        behind by more / ahead  -> MISMATCH
        nothing submitted       -> None
    """
    if not submitted_version:
        return None

    comparison = compare_versions(version, submitted_version)
    if comparison == 0:
        return Status.LIVE
    if comparison < 0 and is_sequential_update(version, submitted_version):
        return Status.PENDING
    return Status.MISMATCH


def classify_group(group: ExtensionGroup) -> GroupStatus:
    """One status for the whole extension."""
    if not group.submitted_version:
        return GroupStatus(Status.LIVE, "No submission data")

    statuses = [classify_version(r.version, group.submitted_version) for r in group.stores]

    if all(s == Status.LIVE for s in statuses):
        return GroupStatus(Status.LIVE, "All versions synchronized")
    if any(s == Status.MISMATCH for s in statuses):
        return GroupStatus(Status.MISMATCH, "Version mismatch detected")
    return GroupStatus(Status.PENDING, "Updates pending approval")


def classify_row(record: StoreRecord, group: ExtensionGroup) -> RowStatus:
    """Status of a single store listing. No submission data means nothing contradicts it: LIVE."""
    status = classify_version(record.version, group.submitted_version) or Status.LIVE
    label, emphasis = ROW_STYLES[status]
    return RowStatus(status=status, label=label, emphasis=emphasis)


# ============================================================
# PART 4: Report assembly
# ============================================================

def version_badges(group: ExtensionGroup) -> list[VersionBadge]:
    """Distinct live versions in first-seen order, with how many stores serve each."""
    counts: dict[str, int] = {}
    for record in group.stores:
        counts[record.version] = counts.get(record.version, 0) + 1

    return [
        VersionBadge(
            version=version,
            count=count,
            status=classify_version(version, group.submitted_version),
        )
        for version, count in counts.items()
    ]


def release_url(group: ExtensionGroup) -> Optional[str]:
    """Link to the registry release page, e.g. .../releases/adblockplus-4.10.0"""
    if not group.submitted_version:
        return None
    return f"{RELEASE_URL_BASE}/{extension_slug(group.name)}-{group.submitted_version}"


def build_report(group: ExtensionGroup) -> ExtensionReport:
    return ExtensionReport(
        group=group,
        status=classify_group(group),
        rows=tuple((record, classify_row(record, group)) for record in group.stores),
        badges=tuple(version_badges(group)),
        release_url=release_url(group),
        submitted_is_live=any(r.version == group.submitted_version for r in group.stores),
    )


def build_reports(raw_feed: Any) -> list[ExtensionReport]:
    """
    Main entry point: raw feed in, render-ready reports out.
    Same input, same output — safe to call on every refresh.
    """
    return [build_report(group) for group in group_extensions(raw_feed)]
