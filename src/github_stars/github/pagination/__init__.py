"""Pagination engine for GitHub list endpoints.

This module provides:
- Paginator: page 1 first, then concurrent fan-out over the remaining pages
- ProgressFuture / ProgressReport: awaitable result with veto-able progress
- Link header parsing and record projection helpers
"""

from .links import LinkRelation, PageMetadata, get_rel_page, page_metadata, parse_link_header
from .paginator import TOO_MANY_PAGES, Paginator
from .progress import ProgressFuture, ProgressHandler, ProgressReport, ProgressState
from .projection import FieldSpec, Record, normalize_fields, project, project_page

__all__ = [
    # Orchestration
    "Paginator",
    "TOO_MANY_PAGES",
    # Progress
    "ProgressFuture",
    "ProgressHandler",
    "ProgressReport",
    "ProgressState",
    # Links
    "LinkRelation",
    "PageMetadata",
    "get_rel_page",
    "page_metadata",
    "parse_link_header",
    # Projection
    "FieldSpec",
    "Record",
    "normalize_fields",
    "project",
    "project_page",
]
