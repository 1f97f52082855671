"""GitHub ``Link`` header parsing.

GitHub announces pagination boundaries in a header such as::

    <https://api.github.com/user/starred?page=2>; rel="next",
    <https://api.github.com/user/starred?page=5>; rel="last"
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

_LINK_PATTERN = re.compile(r'<([^>]*)>\s*;\s*rel="?([^",]+)"?')
_PAGE_PATTERN = re.compile(r"\bpage=(\d+)")


class LinkRelation(NamedTuple):
    """One entry of a response's link table."""

    url: str
    rel: str


@dataclass(frozen=True)
class PageMetadata:
    """Pagination boundaries of a response.

    ``next_page`` is None on the last page; ``total_pages`` is None when the
    total is unknown, in which case no fan-out is attempted.
    """

    next_page: int | None = None
    total_pages: int | None = None


def parse_link_header(header: str | None) -> list[LinkRelation]:
    """Parse a Link header into relations, in header order.

    Args:
        header: Raw Link header value (None or empty yields [])
    """
    if not header:
        return []
    return [LinkRelation(url, rel.strip()) for url, rel in _LINK_PATTERN.findall(header)]


def get_rel_page(links: Iterable[LinkRelation] | None, rel: str) -> int | None:
    """Page number carried by the ``rel`` relation of a link table.

    The table is scanned in any order. A missing table, a missing relation,
    or a URL without a ``page=`` parameter all yield None.
    """
    if not links:
        return None
    for link in links:
        if link.rel != rel:
            continue
        match = _PAGE_PATTERN.search(link.url)
        if match:
            return int(match.group(1))
    return None


def page_metadata(links: Iterable[LinkRelation] | None) -> PageMetadata:
    links = list(links or [])
    return PageMetadata(
        next_page=get_rel_page(links, "next"),
        total_pages=get_rel_page(links, "last"),
    )
