"""Fetch every page of a GitHub list endpoint.

Page 1 is fetched first to learn the total page count from its Link
header. The remaining pages are then requested all at once and merged
as they arrive, with a progress report after every page.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from github_stars.config import PaginationConfig, get_settings
from github_stars.logging import bind_handler

from ..exceptions import PaginationAbortedError, UnexpectedPayloadError
from .links import page_metadata
from .progress import ProgressFuture, ProgressReport
from .projection import FieldSpec, Record, normalize_fields, project_page

if TYPE_CHECKING:
    from ..requester import RateLimitedRequester, ResponseEnvelope

TOO_MANY_PAGES = "Record contains too many pages. Ignoring request."


class Paginator:
    """Turns a single-page endpoint into a complete collection.

    Usage:
        paginator = Paginator(requester)
        handle = paginator.fetch_all("users/alice/starred", fields=["full_name"])
        handle.on_progress(lambda r: print(f"page {r.next_page}/{r.total_pages}"))
        starred = await handle

    The accumulated list is in page completion order, which for the
    fanned-out pages is not necessarily page-number order.
    """

    def __init__(
        self,
        requester: RateLimitedRequester,
        config: PaginationConfig | None = None,
    ) -> None:
        self._requester = requester
        self._per_page = (config or get_settings().pagination).per_page

    @property
    def per_page(self) -> int:
        return self._per_page

    def fetch_all(
        self,
        handler: str,
        fields: FieldSpec | None = None,
    ) -> ProgressFuture[list[Record]]:
        """Start downloading every page of ``handler``.

        Must be called from a running event loop. Attach progress handlers
        before yielding to the loop; returning True from one after page 1
        aborts with PaginationAbortedError before any other page is requested.

        Args:
            handler: Endpoint path, e.g. "repos/owner/name/stargazers"
            fields: Optional field names each record is reduced to

        Returns:
            Handle resolving to the full list of (projected) records
        """
        names = normalize_fields(fields)
        return ProgressFuture.run(lambda download: self._download(download, handler, names))

    async def _download(
        self,
        download: ProgressFuture[list[Record]],
        handler: str,
        fields: tuple[str, ...] | None,
    ) -> list[Record]:
        log = bind_handler(handler)
        result: list[Record] = []

        first = await self._get_page(handler, 1)
        if not isinstance(first.data, list):
            # Usually a missing repository or user
            raise UnexpectedPayloadError(first.data)

        meta = page_metadata(first.links)
        page_data = project_page(first.data, fields)
        result.extend(page_data)
        log.debug(
            "Page 1 loaded ({} records, next={}, last={})",
            len(page_data),
            meta.next_page,
            meta.total_pages,
        )

        stop = download.report_progress(
            ProgressReport(
                next_page=meta.next_page,
                total_pages=meta.total_pages,
                per_page=self._per_page,
                data=page_data,
            )
        )
        if stop:
            log.info("Stopped by caller after page 1 (last={})", meta.total_pages)
            raise PaginationAbortedError(TOO_MANY_PAGES)

        next_page, total = meta.next_page, meta.total_pages
        if next_page is None or total is None:
            return result

        remaining = total - next_page + 1

        async def fetch_remaining(page: int) -> None:
            nonlocal remaining
            response = await self._get_page(handler, page)
            if not isinstance(response.data, list):
                raise UnexpectedPayloadError(response.data)
            data = project_page(response.data, fields)
            result.extend(data)
            remaining -= 1
            log.debug("Page {} loaded ({} records, {} to go)", page, len(data), remaining)
            download.report_progress(
                ProgressReport(
                    next_page=total - remaining,
                    total_pages=total,
                    per_page=self._per_page,
                    data=data,
                )
            )

        tasks = [asyncio.create_task(fetch_remaining(page)) for page in range(next_page, total + 1)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        log.info("Loaded {} records from {} pages", len(result), total)
        return result

    async def _get_page(self, handler: str, page: int) -> ResponseEnvelope:
        params: dict[str, Any] = {"per_page": self._per_page, "page": page}
        return await self._requester.request(handler, params)
