"""Links to external search engines for questions the knowledge base can't answer."""

from urllib.parse import quote

from troubleshoot_hub.config import DEFAULT_EXTERNAL_QUERY, EXTERNAL_SEARCH

# Characters left unescaped, matching browser encodeURIComponent().
_SAFE = "!'()*"


def _encode(query: str) -> str:
    return quote(query, safe=_SAFE).replace("%20", "+")


def build_external_search_url(platform: str, query: str = "") -> str:
    """Build a search URL for re:Post, guide.aws.dev or Google.

    An empty query falls back to a generic troubleshooting search.
    """
    search_query = query or DEFAULT_EXTERNAL_QUERY
    if platform == "repost":
        return f"{EXTERNAL_SEARCH['repost']}search/content?globalSearch={_encode(search_query)}"
    if platform == "guide":
        return f"{EXTERNAL_SEARCH['guide']}search/content?globalSearch={_encode(search_query)}"
    if platform == "google":
        return f"{EXTERNAL_SEARCH['google']}{_encode(search_query)}+AWS"
    msg = f"Unknown search platform: {platform!r} (expected one of {sorted(EXTERNAL_SEARCH)!r})"
    raise ValueError(msg)
