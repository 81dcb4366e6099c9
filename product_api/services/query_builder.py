import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from product_api.products.models import Product

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class SortKey(str, Enum):
    NONE = "none"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


@dataclass(frozen=True)
class ProductQuery:
    """Normalized filter/sort/pagination for one list request."""

    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort: SortKey = SortKey.NONE
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    invalid: tuple[str, ...] = field(default=())

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def is_empty_window(self) -> bool:
        # negative page or limit: nothing can be returned
        return self.skip < 0 or self.page_size < 0

    def mongo_filter(self) -> dict:
        query: dict = {}
        if self.category is not None:
            query["category"] = self.category

        price: dict = {}
        if self.min_price is not None:
            price["$gte"] = self.min_price
        if self.max_price is not None:
            price["$lte"] = self.max_price
        if price:
            query["price"] = price

        return query

    def mongo_sort(self) -> list[tuple[str, int]]:
        if self.sort is SortKey.PRICE_ASC:
            return [("price", 1)]
        if self.sort is SortKey.PRICE_DESC:
            return [("price", -1)]
        return []

    def matches(self, product: Product) -> bool:
        if self.category is not None and product.category != self.category:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        return True

    def apply(self, products: list[Product]) -> list[Product]:
        """Filter, sort and slice an in-memory sequence the way the database would."""
        if self.is_empty_window:
            return []

        out = [p for p in products if self.matches(p)]
        if self.sort is not SortKey.NONE:
            out.sort(key=lambda p: p.price, reverse=self.sort is SortKey.PRICE_DESC)

        return out[self.skip:self.skip + self.page_size]


def _parse_price(raw: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _parse_int(raw: str) -> int | None:
    # leading integer only: "2.5" -> 2, "5abc" -> 5, "abc" -> None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group())


def build_product_query(params: Mapping[str, str], max_page_size: int | None = None) -> ProductQuery:
    """
    Turn raw query-string parameters into a ProductQuery.

    Never raises. Malformed numbers fall back to "absent" (prices) or to
    the default (page, limit), and their names end up in `invalid`.
    A zero page or limit also falls back to the default.
    """
    invalid: list[str] = []

    category = params.get("category") or None

    bounds: dict[str, float | None] = {}
    for name in ("minPrice", "maxPrice"):
        raw = params.get(name)
        bounds[name] = None
        if raw:
            bounds[name] = _parse_price(raw)
            if bounds[name] is None:
                invalid.append(name)

    sort_by = params.get("sortBy")
    if sort_by == SortKey.PRICE_ASC.value:
        sort = SortKey.PRICE_ASC
    elif sort_by == SortKey.PRICE_DESC.value:
        sort = SortKey.PRICE_DESC
    else:
        sort = SortKey.NONE

    window: dict[str, int] = {}
    for name, default in (("page", DEFAULT_PAGE), ("limit", DEFAULT_PAGE_SIZE)):
        raw = params.get(name)
        value = _parse_int(raw) if raw else None
        if raw and value is None:
            invalid.append(name)
        window[name] = value or default

    page_size = window["limit"]
    if max_page_size is not None and page_size > max_page_size:
        page_size = max_page_size

    if invalid:
        logger.warning(f"Ignoring invalid list parameters: {', '.join(invalid)}")

    return ProductQuery(
        category=category,
        min_price=bounds["minPrice"],
        max_price=bounds["maxPrice"],
        sort=sort,
        page=window["page"],
        page_size=page_size,
        invalid=tuple(invalid),
    )
