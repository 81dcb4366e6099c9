from product_api.products.validation import validate_product

VALID = {"name": "Mug", "description": "Ceramic mug", "price": 8.5, "category": "kitchen"}


def _fields(result):
    return {e.field for e in result.errors}


def test_valid_product_gets_defaults():
    result = validate_product(VALID)
    assert result.ok
    assert result.value == {**VALID, "inStock": True, "tags": []}


def test_missing_required_fields():
    result = validate_product({"price": 3})
    assert not result.ok
    assert _fields(result) == {"name", "description", "category"}
    assert result.message().startswith("Product validation failed: ")


def test_price_must_be_positive():
    for price in (0, -1, -0.01):
        result = validate_product({**VALID, "price": price})
        assert _fields(result) == {"price"}


def test_empty_strings_are_rejected():
    result = validate_product({**VALID, "name": "", "category": ""})
    assert _fields(result) == {"name", "category"}


def test_bad_tag_type_points_at_the_item():
    result = validate_product({**VALID, "tags": ["ok", {"no": 1}]})
    assert _fields(result) == {"tags.1"}


def test_storage_fields_are_dropped():
    result = validate_product({**VALID, "id": "abc", "createdAt": "2020-01-01", "extra": 1})
    assert result.ok
    assert "id" not in result.value
    assert "createdAt" not in result.value
    assert "extra" not in result.value


def test_non_object_body():
    result = validate_product(["not", "an", "object"])
    assert _fields(result) == {"body"}


def test_partial_keeps_only_given_fields():
    result = validate_product({"inStock": False}, partial=True)
    assert result.ok
    assert result.value == {"inStock": False}


def test_partial_empty_body_is_ok():
    result = validate_product({}, partial=True)
    assert result.ok
    assert result.value == {}


def test_partial_still_checks_given_fields():
    assert _fields(validate_product({"price": 0}, partial=True)) == {"price"}
    assert _fields(validate_product({"name": None}, partial=True)) == {"name"}
