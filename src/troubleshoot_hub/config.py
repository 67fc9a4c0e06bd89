"""Configuration constants for troubleshoot-hub."""

from pathlib import Path

from troubleshoot_hub.models.node import DefaultLink

# Directory with the visit database. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/troubleshoot-hub").expanduser(),
    Path("~/.config/troubleshoot-hub").expanduser(),
]

DATABASE_FILENAME = "hub.db"

# Seconds of keyboard silence before a scheduled search runs.
SEARCH_DEBOUNCE_DELAY: float = 0.3

# Results shown in a search listing; the total is always reported.
MAX_DISPLAYED_RESULTS = 5

PATH_SEPARATOR = " > "

# Key of the persisted visit mapping in the metadata table.
STORAGE_KEY = "aws-troubleshooting-hub-page-visits"

MAX_QUICK_LINKS = 4

# Locations whose visits are tracked, with their display titles.
PAGE_MAPPING: dict[str, str] = {
    "/": "Home",
    "/dms": "DMS",
    "/database": "Database",
    "/analytics": "Analytics",
    "/bigdata": "Big Data",
    "/deployment": "Deployment",
    "/scd": "SCD",
    "/security": "Security",
    "/operations": "Operations",
    "/windows": "Windows",
    "/linux": "Linux",
    "/networking": "Networking",
    "/netmns": "NetMnS",
    "/svls": "SVLS",
    "/dmi": "DMI",
    "/elb": "ELB",
    "/coming-soon": "Coming Soon",
}

# Always-relevant links, ranked below any real visit when unvisited.
DEFAULT_LINKS: tuple[DefaultLink, ...] = (
    DefaultLink(path="/", title="Home", priority=10),
    DefaultLink(path="/dms", title="DMS", priority=9),
    DefaultLink(path="/svls", title="SVLS", priority=8),
    DefaultLink(path="/networking", title="Networking", priority=7),
)

EXTERNAL_SEARCH: dict[str, str] = {
    "repost": "https://repost.aws/",
    "guide": "https://guide.aws.dev/",
    "google": "https://www.google.com/search?q=",
}

DEFAULT_EXTERNAL_QUERY = "AWS serverless troubleshooting"

# Timeout in seconds for fetching remote content trees.
FETCH_TIMEOUT: float = 30.0


def resolve_data_directory() -> Path:
    """Return the first existing data directory, or the preferred one if none exist."""
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
