from extension_monitor.models import (
    ExtensionGroup,
    RegistryFeed,
    Status,
    StoreFeed,
    StoreRecord,
    SubmissionRecord,
)
from extension_monitor.processor import (
    build_reports,
    classify_group,
    classify_row,
    classify_version,
    extension_slug,
    group_extensions,
    normalize_extension_name,
    release_url,
    split_feed,
    version_badges,
)


def _record(store: str, version: str, name: str = "AdBlock") -> StoreRecord:
    return StoreRecord(
        store=store,
        name=name,
        version=version,
        last_updated="",
        users=0,
        url="",
        last_checked="",
    )


def _group(versions: list[str], submitted: str | None = None) -> ExtensionGroup:
    stores = tuple(_record(f"store{i}", v) for i, v in enumerate(versions))
    return ExtensionGroup(
        name="AdBlock",
        stores=stores,
        latest_version=versions[0],
        is_consistent=len(set(versions)) == 1,
        submitted_version=submitted,
    )


# ---- Name folding ----

def test_normalize_folds_adblock_variants() -> None:
    assert normalize_extension_name("AdBlock") == "AdBlock"
    assert normalize_extension_name("AdBlock — Block Ads") == "AdBlock"
    assert normalize_extension_name("AdBlock for Firefox") == "AdBlock"


def test_normalize_folds_adblock_plus_variants() -> None:
    assert normalize_extension_name("Adblock Plus") == "Adblock Plus"
    assert normalize_extension_name("Adblock Plus Beta") == "Adblock Plus"


def test_normalize_passes_other_names_through() -> None:
    assert normalize_extension_name("uBlock Origin") == "uBlock Origin"
    assert normalize_extension_name("adblock lite") == "adblock lite"


def test_extension_slug() -> None:
    assert extension_slug("Adblock Plus") == "adblockplus"
    assert extension_slug("AdBlock") == "adblock"


# ---- Feed splitting ----

def test_split_feed_separates_registry_from_stores(sample_feed: dict) -> None:
    sections = split_feed(sample_feed)

    stores = [s for s in sections if isinstance(s, StoreFeed)]
    registries = [s for s in sections if isinstance(s, RegistryFeed)]
    assert [s.store for s in stores] == ["chrome", "firefox", "opera"]
    assert len(registries) == 1
    assert registries[0].get("adblock") == SubmissionRecord("6.12.0", "2025-03-09")


def test_split_feed_skips_malformed_sections() -> None:
    sections = split_feed({"chrome": {"not": "a list"}, "edge": [], "gitlab": ["nope"]})

    assert sections == [StoreFeed(store="edge", records=())]


def test_split_feed_rejects_non_mapping() -> None:
    assert split_feed(["chrome"]) == []
    assert split_feed(None) == []


def test_blank_submitted_version_counts_as_missing() -> None:
    sections = split_feed({"gitlab": {"adblock": {"version": "  ", "releaseDate": "2025-01-01"}}})

    assert sections[0].get("adblock").version is None


# ---- Grouping ----

def test_group_extensions_partitions_by_canonical_name(sample_feed: dict) -> None:
    groups = group_extensions(sample_feed)

    assert [g.name for g in groups] == ["AdBlock", "Adblock Plus"]
    adblock, abp = groups
    assert [r.store for r in adblock.stores] == ["chrome", "firefox", "opera"]
    assert [r.store for r in abp.stores] == ["chrome", "firefox"]
    assert sum(len(g.stores) for g in groups) == 5


def test_group_extensions_keeps_reported_name(sample_feed: dict) -> None:
    adblock = group_extensions(sample_feed)[0]

    assert adblock.stores[1].name == "AdBlock for Firefox"


def test_group_extensions_drops_records_without_name(sample_feed: dict) -> None:
    groups = group_extensions(sample_feed)

    versions = [r.version for g in groups for r in g.stores]
    assert "1.0.0" not in versions


def test_group_extensions_derives_latest_and_consistency(sample_feed: dict) -> None:
    adblock, abp = group_extensions(sample_feed)

    assert adblock.latest_version == "6.12.0"
    assert adblock.is_consistent is False
    assert abp.latest_version == "4.10.0"
    assert abp.is_consistent is True


def test_latest_version_keeps_first_of_equal_versions() -> None:
    feed = {
        "chrome": [{"name": "AdBlock", "version": "2.0"}],
        "edge": [{"name": "AdBlock", "version": "2.0.0"}],
        "opera": [{"name": "AdBlock", "version": "1.9"}],
    }

    group = group_extensions(feed)[0]

    assert group.latest_version == "2.0"
    assert group.is_consistent is False


def test_group_extensions_attaches_submission(sample_feed: dict) -> None:
    adblock, abp = group_extensions(sample_feed)

    assert adblock.submitted_version == "6.12.0"
    assert adblock.release_date == "2025-03-09"
    assert abp.submitted_version == "4.10.0"
    assert abp.release_date == "2025-02-28"


def test_unrelated_extension_gets_no_submission() -> None:
    feed = {
        "chrome": [{"name": "uBlock Origin", "version": "1.0"}],
        "gitlab": {"adblock": {"version": "1.0"}},
    }

    group = group_extensions(feed)[0]

    assert group.name == "uBlock Origin"
    assert group.submitted_version is None


def test_group_extensions_skips_broken_store_but_keeps_the_rest() -> None:
    feed = {
        "chrome": "error: rate limited",
        "firefox": [None, 42, {"name": "AdBlock", "version": "5.0"}],
    }

    groups = group_extensions(feed)

    assert len(groups) == 1
    assert groups[0].stores[0].store == "firefox"


def test_group_extensions_on_garbage_input() -> None:
    assert group_extensions("not a feed") == []
    assert group_extensions({}) == []


# ---- Classification ----

def test_classify_version() -> None:
    assert classify_version("1.0", None) is None
    assert classify_version("1.0", "1.0.0") is Status.LIVE
    assert classify_version("1.0", "1.1") is Status.PENDING
    assert classify_version("1.0", "1.2") is Status.MISMATCH
    assert classify_version("1.1", "1.0") is Status.MISMATCH


def test_group_without_submission_is_live() -> None:
    status = classify_group(_group(["1.0", "0.3"]))

    assert status.status is Status.LIVE
    assert status.message == "No submission data"


def test_synchronized_group_is_live() -> None:
    group = _group(["1.0", "1.0", "1.0"], submitted="1.0")

    assert classify_group(group).status is Status.LIVE
    assert classify_group(group).message == "All versions synchronized"
    assert [classify_row(r, group).label for r in group.stores] == ["✓ LIVE"] * 3


def test_group_one_step_behind_is_pending() -> None:
    group = _group(["1.0", "1.1"], submitted="1.1")

    status = classify_group(group)

    assert status.status is Status.PENDING
    assert status.message == "Updates pending approval"
    rows = [classify_row(r, group).status for r in group.stores]
    assert rows == [Status.PENDING, Status.LIVE]


def test_group_skipping_a_release_is_mismatch() -> None:
    group = _group(["1.0", "1.2"], submitted="1.2")

    status = classify_group(group)

    assert status.status is Status.MISMATCH
    assert status.message == "Version mismatch detected"


def test_store_ahead_of_submission_is_mismatch() -> None:
    group = _group(["1.0"], submitted="0.9")

    assert classify_group(group).status is Status.MISMATCH
    row = classify_row(group.stores[0], group)
    assert row.status is Status.MISMATCH
    assert row.label == "⚠ MISMATCH"


def test_row_without_submission_is_live() -> None:
    group = _group(["0.1"])

    row = classify_row(group.stores[0], group)

    assert row.status is Status.LIVE
    assert row.label == "✓ LIVE"


def test_pending_row_label() -> None:
    group = _group(["2.4.9"], submitted="2.5.0")

    assert classify_row(group.stores[0], group).label == "○ PENDING"


# ---- Report assembly ----

def test_version_badges_count_stores_per_version() -> None:
    group = _group(["1.0", "1.1", "1.0"], submitted="1.1")

    badges = version_badges(group)

    assert [(b.version, b.count, b.status) for b in badges] == [
        ("1.0", 2, Status.PENDING),
        ("1.1", 1, Status.LIVE),
    ]


def test_version_badges_without_submission_are_neutral() -> None:
    badges = version_badges(_group(["3.0"]))

    assert badges[0].status is None


def test_release_url() -> None:
    group = ExtensionGroup(
        name="Adblock Plus",
        stores=(_record("chrome", "4.10.0", "Adblock Plus"),),
        latest_version="4.10.0",
        is_consistent=True,
        submitted_version="4.10.0",
    )

    assert release_url(group).endswith("/adblockplus-4.10.0")
    assert release_url(_group(["1.0"])) is None


def test_build_reports(sample_feed: dict) -> None:
    adblock, abp = build_reports(sample_feed)

    assert adblock.status.status is Status.PENDING
    assert [row.status for _, row in adblock.rows] == [Status.LIVE, Status.PENDING, Status.LIVE]
    assert adblock.submitted_is_live is True
    assert abp.status.status is Status.LIVE
    assert abp.status.message == "All versions synchronized"


def test_build_reports_is_deterministic(sample_feed: dict) -> None:
    assert build_reports(sample_feed) == build_reports(sample_feed)
