import pytest


@pytest.fixture
def sample_feed() -> dict:
    """A feed shaped like the upstream document: stores plus the 'gitlab' registry."""
    return {
        "chrome": [
            {
                "extension": "AdBlock — best ad blocker",
                "version": "6.12.0",
                "lastUpdated": "2025-03-10T08:00:00Z",
                "users": "10,000,000",
                "url": "https://chromewebstore.google.com/detail/adblock",
                "lastChecked": "2025-03-14T09:00:00Z",
            },
            {
                "extension": "Adblock Plus - free ad blocker",
                "version": "4.10.0",
                "lastUpdated": "2025-03-01T08:00:00Z",
                "users": 41000000,
                "url": "https://chromewebstore.google.com/detail/adblock-plus",
                "lastChecked": "2025-03-14T09:00:00Z",
            },
        ],
        "firefox": [
            {
                "name": "AdBlock for Firefox",
                "version": "6.11.0",
                "lastUpdated": "2025-02-20T08:00:00Z",
                "users": 1200000,
                "url": "https://addons.mozilla.org/firefox/addon/adblock-for-firefox/",
                "lastChecked": "2025-03-14T09:05:00Z",
            },
            {
                "name": "Adblock Plus - free ad blocker",
                "version": "4.10.0",
                "lastUpdated": "2025-03-02T08:00:00Z",
                "users": "3,500,000",
                "url": "https://addons.mozilla.org/firefox/addon/adblock-plus/",
                "lastChecked": "2025-03-14T09:05:00Z",
            },
            {"version": "1.0.0", "users": 5},
        ],
        "opera": [
            {
                "extension": "AdBlock",
                "version": "6.12.0",
                "lastUpdated": "",
                "users": "",
                "url": "https://addons.opera.com/extensions/details/adblock/",
                "lastChecked": "2025-03-14T09:10:00Z",
            },
        ],
        "gitlab": {
            "adblock": {"version": "6.12.0", "releaseDate": "2025-03-09"},
            "adblockplus": {"version": "4.10.0", "releaseDate": "2025-02-28"},
        },
    }
