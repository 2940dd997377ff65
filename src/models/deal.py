# src/models/deal.py

"""Deal data models parsed from the deals API."""

from dataclasses import dataclass, field
from typing import Any

from src.config.settings import Settings

_POPULAR_BLURB = (
    "Popular game with positive Steam reviews and active offers."
)
_BASIC_BLURB = "Title with basic information available and a featured offer."


def _to_float(value: Any) -> float:
    """Convert an API numeric string to float, defaulting to 0.0."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _optional_id(value: Any) -> str | None:
    """Normalise identifiers where ``None``, ``""`` and ``"0"`` mean absent."""
    text = str(value).strip() if value is not None else ""
    return text if text and text != "0" else None


@dataclass(frozen=True)
class DealRecord:
    """A single discounted listing for one game on one storefront."""

    game_id: str
    title: str
    thumb: str = ""
    store_id: str = ""
    sale_price: float = 0.0
    normal_price: float = 0.0
    savings: float = 0.0
    steam_rating_percent: float | None = None
    deal_id: str = ""
    steam_app_id: str | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "DealRecord":
        """Build a record from a ``/deals`` item or a ``/games?title=`` item.

        Title search results carry ``external`` and ``cheapest`` instead of
        ``title`` and ``salePrice`` and have no store or list price.
        """
        sale_price = _to_float(
            payload.get("salePrice", payload.get("cheapest"))
        )
        normal_raw = payload.get("normalPrice")
        rating = _optional_id(payload.get("steamRatingPercent"))
        return cls(
            game_id=str(payload.get("gameID", "") or ""),
            title=str(
                payload.get("title") or payload.get("external") or ""
            ),
            thumb=str(payload.get("thumb", "") or ""),
            store_id=str(payload.get("storeID", "") or ""),
            sale_price=sale_price,
            normal_price=(
                _to_float(normal_raw)
                if normal_raw is not None
                else sale_price
            ),
            savings=_to_float(payload.get("savings", 0)),
            steam_rating_percent=(
                _to_float(rating) if rating is not None else None
            ),
            deal_id=str(
                payload.get("dealID")
                or payload.get("cheapestDealID")
                or ""
            ),
            steam_app_id=_optional_id(payload.get("steamAppID")),
        )

    @property
    def discount_percent(self) -> int:
        """Savings rounded to a whole percentage for the discount badge."""
        return round(self.savings)

    @property
    def has_discount(self) -> bool:
        return self.discount_percent > 0

    @property
    def rating_label(self) -> str:
        if self.steam_rating_percent is None:
            return "N/A"
        return f"{self.steam_rating_percent:.0f}%"

    @property
    def blurb(self) -> str:
        """Short card description, keyed on whether a Steam rating exists."""
        if self.steam_rating_percent:
            return _POPULAR_BLURB
        return _BASIC_BLURB

    @property
    def store_label(self) -> str:
        return Settings.store_label(self.store_id)


@dataclass(frozen=True)
class DealInfo:
    """The ``info`` block of a single-game lookup."""

    title: str
    thumb: str = ""
    steam_app_id: str | None = None


@dataclass(frozen=True)
class DealOffer:
    """One store-specific offer inside a single-game lookup."""

    store_id: str
    retail_price: float
    price: float
    deal_id: str = ""
    savings: float = 0.0


@dataclass(frozen=True)
class DealDetail:
    """Extended detail for one game, shown in the detail modal."""

    game_id: str
    info: DealInfo
    deals: list[DealOffer] = field(
        default_factory=lambda: list[DealOffer]()
    )

    @classmethod
    def from_api(
        cls, game_id: str, payload: dict[str, Any]
    ) -> "DealDetail":
        """Build a detail from a ``/games?id=`` response body."""
        info: dict[str, Any] = payload.get("info") or {}
        raw_deals: list[dict[str, Any]] = payload.get("deals") or []
        return cls(
            game_id=game_id,
            info=DealInfo(
                title=str(info.get("title", "") or ""),
                thumb=str(info.get("thumb", "") or ""),
                steam_app_id=_optional_id(info.get("steamAppID")),
            ),
            deals=[
                DealOffer(
                    store_id=str(d.get("storeID", "") or ""),
                    retail_price=_to_float(d.get("retailPrice")),
                    price=_to_float(d.get("price")),
                    deal_id=str(d.get("dealID", "") or ""),
                    savings=_to_float(d.get("savings", 0)),
                )
                for d in raw_deals
                if isinstance(d, dict)
            ],
        )

    @property
    def best_offer(self) -> DealOffer | None:
        """The first listed offer; the only one the detail view shows."""
        return self.deals[0] if self.deals else None

    @property
    def steam_url(self) -> str | None:
        if self.info.steam_app_id is None:
            return None
        return Settings.STEAM_APP_URL.format(
            app_id=self.info.steam_app_id
        )
