# src/services/catalog_pipeline.py

"""Catalog pipeline: owns the loaded deals and derives filtered views."""

import logging
from collections.abc import Awaitable, Sequence
from typing import Protocol

from src.clients.deals_gateway import DealsGateway, TransportError
from src.config.settings import Settings
from src.filters.deal_view import derive_view
from src.models.criteria import SortKey, ViewCriteria
from src.models.deal import DealDetail, DealRecord

logger = logging.getLogger("deal_catalog.pipeline")

DETAIL_ERROR_MESSAGE = "Could not load game details"


class CatalogView(Protocol):
    """Rendering surface the pipeline drives."""

    def render_list(self, records: Sequence[DealRecord]) -> None: ...

    def render_empty(self) -> None: ...

    def render_error(self) -> None: ...

    def clear_status(self) -> None: ...

    def set_loading(self, loading: bool) -> None: ...

    def render_detail(self, detail: DealDetail) -> None: ...

    def show_alert(self, message: str) -> None: ...


class CatalogPipeline:
    """Holds the result set and view criteria for one catalog session.

    Loads and searches replace the result set wholesale; filter and sort
    changes re-derive the view from it without touching the network.
    Every load is tagged with a sequence token and only the latest issued
    token may apply its response.
    """

    def __init__(
        self,
        gateway: DealsGateway,
        view: CatalogView,
        max_games: int | None = None,
    ) -> None:
        self.gateway = gateway
        self.view = view
        self.settings = Settings()
        self.max_games = (
            self.settings.MAX_GAMES if max_games is None else max_games
        )
        self._result_set: tuple[DealRecord, ...] = ()
        self._criteria = ViewCriteria()
        self._load_seq = 0
        self._detail_seq = 0
        self._op_seq = 0
        self._in_flight: set[int] = set()

    # ── Read-only state ──────────────────────────────────

    @property
    def result_set(self) -> tuple[DealRecord, ...]:
        return self._result_set

    @property
    def criteria(self) -> ViewCriteria:
        return self._criteria

    @property
    def is_loading(self) -> bool:
        return bool(self._in_flight)

    # ── Loading indicator ────────────────────────────────

    def _begin_op(self) -> int:
        """Mark a network operation as started and show the indicator."""
        self._op_seq += 1
        self._in_flight.add(self._op_seq)
        self.view.set_loading(True)
        return self._op_seq

    def _end_op(self, op_id: int) -> None:
        """Hide the indicator once no operation is outstanding."""
        self._in_flight.discard(op_id)
        if not self._in_flight:
            self.view.set_loading(False)

    # ── Fetching ─────────────────────────────────────────

    async def _replace_results(
        self,
        description: str,
        request: Awaitable[list[DealRecord]],
    ) -> None:
        """Await a list request and apply it if it is still the latest."""
        self._load_seq += 1
        token = self._load_seq
        self.view.clear_status()
        op_id = self._begin_op()
        try:
            try:
                records = await request
            except TransportError as exc:
                if token != self._load_seq:
                    logger.info(
                        "Discarding stale failure for %s (token %d)",
                        description,
                        token,
                    )
                    return
                logger.error("%s failed: %s", description, exc)
                self.view.render_error()
                return

            if token != self._load_seq:
                logger.info(
                    "Discarding stale response for %s "
                    "(token %d, latest %d)",
                    description,
                    token,
                    self._load_seq,
                )
                return

            self._result_set = tuple(records[: self.max_games])
            self._criteria = ViewCriteria()
            logger.info(
                "%s loaded %d deals", description, len(self._result_set)
            )
            self._render(self._result_set)
        finally:
            self._end_op(op_id)

    async def load_initial(self) -> None:
        """Load current deals from the initial storefront."""
        store_id = self.settings.INITIAL_STORE_ID
        await self._replace_results(
            f"Initial load (store {store_id})",
            self.gateway.list_deals(store_id, self.max_games),
        )

    async def search(self, term: str) -> None:
        """Search by title; an empty term reloads the initial list."""
        term = term.strip()
        if not term:
            await self.load_initial()
            return
        await self._replace_results(
            f"Search '{term}'",
            self.gateway.search_by_title(term, self.max_games),
        )

    async def fetch_detail(self, game_id: str) -> DealDetail | None:
        """Fetch one game's detail and hand it to the view.

        Failures are shown as a blocking alert rather than the inline
        error banner used for lists.
        """
        self._detail_seq += 1
        token = self._detail_seq
        op_id = self._begin_op()
        try:
            try:
                detail = await self.gateway.get_detail(game_id)
            except TransportError as exc:
                logger.error(
                    "Detail lookup for %s failed: %s", game_id, exc
                )
                if token == self._detail_seq:
                    self.view.show_alert(DETAIL_ERROR_MESSAGE)
                return None

            if token != self._detail_seq:
                logger.info(
                    "Discarding stale detail for game %s", game_id
                )
                return None
            self.view.render_detail(detail)
            return detail
        finally:
            self._end_op(op_id)

    # ── Local re-derivation ──────────────────────────────

    def set_store_filter(self, store_id: str | None) -> list[DealRecord]:
        """Filter the loaded deals to one store (``None`` or ``""`` = all)."""
        self._criteria = ViewCriteria(
            store_filter=store_id or None,
            sort_key=self._criteria.sort_key,
        )
        return self._refresh()

    def set_sort(self, key: SortKey | str | None) -> list[DealRecord]:
        """Sort the loaded deals; ``None`` or ``""`` restores API order."""
        self._criteria = ViewCriteria(
            store_filter=self._criteria.store_filter,
            sort_key=SortKey.parse(key),
        )
        return self._refresh()

    def derived_view(self) -> list[DealRecord]:
        """The filtered, sorted projection of the current result set."""
        return derive_view(self._result_set, self._criteria)

    def _refresh(self) -> list[DealRecord]:
        view = self.derived_view()
        logger.debug(
            "Re-derived view with %s: %d deals", self._criteria, len(view)
        )
        self._render(view)
        return view

    def _render(self, records: Sequence[DealRecord]) -> None:
        if records:
            self.view.render_list(records)
        else:
            self.view.render_empty()
