# src/clients/deals_gateway.py

"""Async client for the three deals API endpoints the catalog uses."""

import json
import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.deal import DealDetail, DealRecord


class TransportError(Exception):
    """A request failed: non-2xx status, network failure or bad payload.

    Deliberately unclassified; ``status_code`` is informational only.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DealsGateway:
    """Fixed-shape GET requests against the deals API.

    One request per call, no retries and no timeout beyond the transport
    default.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: Any | None = None,
    ) -> None:
        self.logger = logging.getLogger("deal_catalog.gateway")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.session = session or curl_requests.AsyncSession(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    async def __aenter__(self) -> "DealsGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP session."""
        await self.session.close()

    async def _get_json(
        self, path: str, params: dict[str, str]
    ) -> Any:
        """GET ``path`` and decode the JSON body, or raise TransportError."""
        url = f"{self.base_url}/{path}"
        self.logger.debug("GET %s params=%s", url, params)
        try:
            resp = await self.session.get(
                url,
                params=params,
                headers=self.settings.DEFAULT_HEADERS,
            )
        except curl_requests.RequestsError as exc:
            self.logger.warning(
                "Request to %s failed: %s", url, exc, exc_info=True
            )
            raise TransportError(f"Request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "HTTP %d from %s", resp.status_code, url
            )
            raise TransportError(
                f"HTTP {resp.status_code} from {path}",
                status_code=resp.status_code,
            )

        try:
            return json.loads(resp.text)
        except ValueError as exc:
            self.logger.warning(
                "Undecodable JSON from %s: %s", url, exc
            )
            raise TransportError(
                f"Invalid JSON from {path}",
                status_code=resp.status_code,
            ) from exc

    def _parse_records(
        self, data: Any, limit: int
    ) -> list[DealRecord]:
        """Parse a list payload; anything that is not a list counts as empty."""
        if not isinstance(data, list):
            self.logger.warning(
                "Expected a list payload, got %s", type(data).__name__
            )
            return []
        return [
            DealRecord.from_api(item)
            for item in data[:limit]
            if isinstance(item, dict)
        ]

    async def list_deals(
        self, store_id: str, limit: int
    ) -> list[DealRecord]:
        """Current deals for one storefront, at most ``limit`` records."""
        data = await self._get_json(
            "deals",
            {"storeID": store_id, "pageSize": str(limit)},
        )
        records = self._parse_records(data, limit)
        self.logger.info(
            "Fetched %d deals for store %s", len(records), store_id
        )
        return records

    async def search_by_title(
        self, term: str, limit: int
    ) -> list[DealRecord]:
        """Games whose title matches ``term``; matching is server-side."""
        data = await self._get_json(
            "games",
            {"title": term, "limit": str(limit)},
        )
        records = self._parse_records(data, limit)
        self.logger.info(
            "Search '%s' returned %d games", term, len(records)
        )
        return records

    async def get_detail(self, game_id: str) -> DealDetail:
        """Extended detail for a single game."""
        data = await self._get_json("games", {"id": game_id})
        if not isinstance(data, dict):
            raise TransportError(
                f"Unexpected detail payload for game {game_id}"
            )
        detail = DealDetail.from_api(game_id, data)
        self.logger.info(
            "Fetched detail for game %s (%d offers)",
            game_id,
            len(detail.deals),
        )
        return detail
