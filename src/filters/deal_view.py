# src/filters/deal_view.py

"""Store filtering and sorting of the loaded deals, without re-fetching."""

import logging
import unicodedata
from collections.abc import Callable, Sequence
from typing import Any

from src.models.criteria import SortKey, ViewCriteria
from src.models.deal import DealRecord

logger = logging.getLogger("deal_catalog.filters")


def title_sort_key(title: str | None) -> tuple[str, str]:
    """Locale-style collation key: accent- and case-insensitive first.

    The raw title breaks ties so "apex" and "Apex" still order
    deterministically.
    """
    text = title or ""
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(
        ch for ch in decomposed if not unicodedata.combining(ch)
    ).casefold()
    return folded, text


# key function and reverse flag per sort key
_SORTS: dict[SortKey, tuple[Callable[[DealRecord], Any], bool]] = {
    SortKey.SALE_PRICE_ASC: (lambda d: d.sale_price, False),
    SortKey.SALE_PRICE_DESC: (lambda d: d.sale_price, True),
    SortKey.NORMAL_PRICE_ASC: (lambda d: d.normal_price, False),
    SortKey.NORMAL_PRICE_DESC: (lambda d: d.normal_price, True),
    SortKey.SAVINGS_DESC: (lambda d: d.savings, True),
    SortKey.TITLE_ASC: (lambda d: title_sort_key(d.title), False),
}


def filter_by_store(
    records: Sequence[DealRecord],
    store_id: str | None,
) -> list[DealRecord]:
    """Keep records sold by ``store_id``; ``None`` keeps everything."""
    if store_id is None:
        return list(records)
    kept = [r for r in records if r.store_id == store_id]
    logger.debug(
        "Store filter %s kept %d of %d deals",
        store_id,
        len(kept),
        len(records),
    )
    return kept


def sort_deals(
    records: Sequence[DealRecord],
    sort_key: SortKey | None,
) -> list[DealRecord]:
    """Stable sort; ``None`` preserves the API's order.

    ``sorted(..., reverse=True)`` keeps equal elements in their original
    order, so descending sorts are stable too.
    """
    if sort_key is None:
        return list(records)
    key_func, descending = _SORTS[sort_key]
    return sorted(records, key=key_func, reverse=descending)


def derive_view(
    records: Sequence[DealRecord],
    criteria: ViewCriteria,
) -> list[DealRecord]:
    """Project the result set through the store filter, then the sort.

    Always returns a new list; ``records`` is never mutated.
    """
    filtered = filter_by_store(records, criteria.store_filter)
    return sort_deals(filtered, criteria.sort_key)
