"""
Feed fetcher — pulls the latest store snapshot from the upstream JSON feed.

One GET per refresh. No retries: if upstream is down, the dashboard says so
and shows nothing rather than half-stale data.
"""

import logging
from typing import Any, Optional

import requests

from extension_monitor.config import EXTENSION_FEED_URL, FEED_TIMEOUT_SECONDS, FEED_USER_AGENT

logger = logging.getLogger(__name__)


class FeedUnavailableError(RuntimeError):
    """The feed could not be fetched or read. Nothing downstream should run."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def fetch_extension_feed(url: Optional[str] = None, timeout: Optional[float] = None) -> dict[str, Any]:
    """
    Download the raw feed.

    Args:
        url:     Feed location. Defaults to EXTENSION_FEED_URL.
        timeout: Seconds to wait. Defaults to FEED_TIMEOUT_SECONDS.

    Returns:
        The decoded JSON document, untouched. Shape checks happen in the processor.

    Raises:
        FeedUnavailableError on network errors, non-2xx responses or invalid JSON.
    """
    url = url or EXTENSION_FEED_URL
    timeout = timeout if timeout is not None else FEED_TIMEOUT_SECONDS

    logger.info("Fetching extension feed from %s", url)
    try:
        response = requests.get(
            url,
            headers={"User-Agent": FEED_USER_AGENT},
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error("Error fetching extension data: %s", e)
        raise FeedUnavailableError(f"Failed to fetch extension data: {e}") from e

    if not 200 <= response.status_code < 300:
        logger.error("Error fetching extension data: HTTP %s", response.status_code)
        raise FeedUnavailableError(
            f"HTTP error! status: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Extension feed is not valid JSON: %s", e)
        raise FeedUnavailableError(
            "Extension feed is not valid JSON",
            status_code=response.status_code,
        ) from e

    logger.info("Fetched feed with %d sections", len(data) if isinstance(data, dict) else 0)
    return data


# ---- Quick check ----
# This block only runs when you execute this file directly (not when imported)
if __name__ == "__main__":
    from extension_monitor.config import configure_logging
    from extension_monitor.processor import build_reports

    configure_logging()
    for report in build_reports(fetch_extension_feed()):
        group = report.group
        print("=" * 60)
        print(f"{group.name}: {report.status.status.value} ({report.status.message})")
        print(f"  Latest live: {group.latest_version}  Submitted: {group.submitted_version or '-'}")
        for record, row in report.rows:
            print(f"  {record.store:<10} {row.label:<12} {record.version}")
