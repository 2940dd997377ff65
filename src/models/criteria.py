# src/models/criteria.py

"""Transient filter and sort criteria applied to the loaded deals."""

from dataclasses import dataclass
from enum import Enum


class SortKey(str, Enum):
    """Orderings the catalog view can apply."""

    SALE_PRICE_ASC = "salePriceAsc"
    SALE_PRICE_DESC = "salePriceDesc"
    NORMAL_PRICE_ASC = "normalPriceAsc"
    NORMAL_PRICE_DESC = "normalPriceDesc"
    SAVINGS_DESC = "savingsDesc"
    TITLE_ASC = "titleAsc"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]

    @classmethod
    def parse(cls, value: "str | SortKey | None") -> "SortKey | None":
        """Map a raw select value to a key; empty means no sort.

        Raises ``ValueError`` for unknown keys.
        """
        if value is None or value == "":
            return None
        return cls(value)


_SORT_LABELS: dict[SortKey, str] = {
    SortKey.SALE_PRICE_ASC: "Sale price: low to high",
    SortKey.SALE_PRICE_DESC: "Sale price: high to low",
    SortKey.NORMAL_PRICE_ASC: "Normal price: low to high",
    SortKey.NORMAL_PRICE_DESC: "Normal price: high to low",
    SortKey.SAVINGS_DESC: "Biggest discount",
    SortKey.TITLE_ASC: "Title A-Z",
}


@dataclass(frozen=True)
class ViewCriteria:
    """Active store filter and sort key; never persisted."""

    store_filter: str | None = None
    sort_key: SortKey | None = None

    @property
    def is_empty(self) -> bool:
        return self.store_filter is None and self.sort_key is None
