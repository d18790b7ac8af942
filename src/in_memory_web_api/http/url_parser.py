"""
=============================================================================
RESOURCE URL PARSER
=============================================================================

Splits a request URL into the parts the CRUD handler needs.

=============================================================================
URL ANATOMY
=============================================================================

    http://localhost/app/heroes.json/7
    ──────┬───────── ─┬─ ──┬─── ─┬── ┬
          │           │    │     │   │
     host + root     base  │  suffix id
                           │  (dropped)
                     collection name

    resource_url = "{url_root}{base}/{collection}/"   →  "app/heroes/"

=============================================================================
SAME HOST VS FOREIGN HOST
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │  url host == configured host                                         │
    │      drop len(root_path) characters from the path                   │
    │      url_root = ""                                                   │
    │                                                                      │
    │  url host != configured host  (e.g. http://api.example.com/...)     │
    │      the same-shaped API is assumed to live here too                │
    │      drop only the leading "/"                                      │
    │      url_root = "http://api.example.com/"                           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Relative URLs ("app/heroes") are resolved against http://{host}{root_path}
first, the way a browser resolves them against the page location, so
they always land on the same-host branch.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urljoin, urlsplit


@dataclass(frozen=True)
class ParsedUrl:
    """The structural parts of a request URL."""

    base: Optional[str]
    collection_name: Optional[str]
    id: Optional[str]
    resource_url: Optional[str]

    @property
    def has_collection(self) -> bool:
        return bool(self.collection_name)


def parse_url(url: str, host: str, root_path: str = "/") -> ParsedUrl:
    """
    Parse `url` relative to the configured host and root path.

    A path with fewer than two segments yields a ParsedUrl whose
    collection_name is None; this function never raises for odd paths.

    Args:
        url: Absolute or relative request URL
        host: Configured host (network location, port included)
        root_path: Configured path prefix of the API, e.g. "/" or "/api/"

    Returns:
        ParsedUrl with base, collection_name, raw id and resource_url
    """
    location = urlsplit(urljoin(f"http://{host}{root_path}", url))

    drop = len(root_path)
    url_root = ""
    if location.netloc != host:
        drop = 1
        url_root = f"{location.scheme}://{location.netloc}/"

    segments = location.path[drop:].split("/")
    if len(segments) < 2 or not segments[1]:
        return ParsedUrl(
            base=segments[0] or None,
            collection_name=None,
            id=None,
            resource_url=None,
        )

    base = segments[0]
    collection_name = segments[1].split(".")[0]
    raw_id = unquote(segments[2]) if len(segments) > 2 and segments[2] else None

    return ParsedUrl(
        base=base,
        collection_name=collection_name or None,
        id=raw_id,
        resource_url=f"{url_root}{base}/{collection_name}/",
    )
