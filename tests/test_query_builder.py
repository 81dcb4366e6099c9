from datetime import datetime, timezone

from product_api.products.models import Product
from product_api.services.query_builder import ProductQuery, SortKey, build_product_query


def _product(price, category="books"):
    return Product(
        id=f"{int(price * 100):024x}",
        name="n",
        description="d",
        price=price,
        category=category,
        createdAt=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_defaults_when_no_params():
    q = build_product_query({})
    assert q == ProductQuery()
    assert q.page == 1
    assert q.page_size == 10
    assert q.skip == 0
    assert q.mongo_filter() == {}
    assert q.mongo_sort() == []


def test_category_is_kept_verbatim():
    q = build_product_query({"category": " Books "})
    assert q.category == " Books "
    assert q.mongo_filter() == {"category": " Books "}


def test_empty_category_is_absent():
    assert build_product_query({"category": ""}).category is None


def test_price_bounds():
    q = build_product_query({"minPrice": "10", "maxPrice": "20.5"})
    assert q.min_price == 10.0
    assert q.max_price == 20.5
    assert q.mongo_filter() == {"price": {"$gte": 10.0, "$lte": 20.5}}


def test_single_price_bound():
    assert build_product_query({"maxPrice": "5"}).mongo_filter() == {"price": {"$lte": 5.0}}


def test_invalid_price_is_ignored_and_reported():
    q = build_product_query({"minPrice": "cheap", "maxPrice": "nan", "category": "x"})
    assert q.min_price is None
    assert q.max_price is None
    assert q.invalid == ("minPrice", "maxPrice")
    assert q.mongo_filter() == {"category": "x"}


def test_negative_price_is_ignored():
    q = build_product_query({"minPrice": "-3"})
    assert q.min_price is None
    assert q.invalid == ("minPrice",)


def test_sort_keys():
    assert build_product_query({"sortBy": "price_asc"}).mongo_sort() == [("price", 1)]
    assert build_product_query({"sortBy": "price_desc"}).mongo_sort() == [("price", -1)]
    assert build_product_query({"sortBy": "name"}).sort is SortKey.NONE


def test_pagination_skip():
    q = build_product_query({"page": "3", "limit": "5"})
    assert q.page == 3
    assert q.page_size == 5
    assert q.skip == 10


def test_non_numeric_page_and_limit_fall_back():
    q = build_product_query({"page": "two", "limit": "lots"})
    assert (q.page, q.page_size) == (1, 10)
    assert q.invalid == ("page", "limit")


def test_zero_page_and_limit_use_defaults():
    q = build_product_query({"page": "0", "limit": "0"})
    assert (q.page, q.page_size) == (1, 10)
    assert q.invalid == ()


def test_negative_page_gives_empty_window():
    q = build_product_query({"page": "-1"})
    assert q.skip == -20
    assert q.is_empty_window
    assert q.apply([_product(1.0)]) == []


def test_limit_is_unbounded_unless_capped():
    assert build_product_query({"limit": "5000"}).page_size == 5000
    assert build_product_query({"limit": "5000"}, max_page_size=100).page_size == 100


def test_apply_filters_sorts_and_slices():
    products = [_product(p) for p in (5.0, 1.0, 9.0, 3.0, 7.0)]
    products.append(_product(2.0, category="toys"))

    q = build_product_query({"category": "books", "minPrice": "2", "maxPrice": "8", "sortBy": "price_desc"})
    assert [p.price for p in q.apply(products)] == [7.0, 5.0, 3.0]

    q = build_product_query({"sortBy": "price_asc", "page": "2", "limit": "2"})
    assert [p.price for p in q.apply(products)] == [3.0, 5.0]


def test_bounds_are_inclusive():
    q = build_product_query({"minPrice": "3", "maxPrice": "3"})
    assert q.matches(_product(3.0))
    assert not q.matches(_product(3.01))


def test_page_and_limit_use_leading_integer():
    q = build_product_query({"page": "2.5", "limit": "5.9"})
    assert (q.page, q.page_size) == (2, 5)
    assert q.invalid == ()

    q = build_product_query({"page": "3abc", "limit": "5abc"})
    assert (q.page, q.page_size) == (3, 5)
    assert q.invalid == ()
