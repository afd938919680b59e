from decimal import Decimal
from itertools import combinations

import pytest

from catalog_api.dao.product_query_builder import BASE_STATEMENT, build_product_filter_query
from catalog_api.schemas.product_schemas import ProductFilters

FILTER_ORDER = ("category_id", "shop_id", "name", "min_price", "max_price")

SAMPLE_VALUES = {
    "category_id": 3,
    "shop_id": "shop-1",
    "name": "mug",
    "min_price": Decimal("1.50"),
    "max_price": Decimal("20"),
}

ALL_SUBSETS = [
    subset
    for size in range(len(FILTER_ORDER) + 1)
    for subset in combinations(FILTER_ORDER, size)
]


def test_no_filters_returns_base_statement():
    query = build_product_filter_query()

    assert query.statement == BASE_STATEMENT
    assert query.params == ()
    assert query.bind_params == {}


def test_all_filters_in_fixed_order():
    query = build_product_filter_query(SAMPLE_VALUES)

    assert query.statement == (
        "SELECT * FROM products"
        " WHERE category_id = :category_id"
        " AND shop_id = :shop_id"
        " AND LOWER(name) LIKE LOWER(:name)"
        " AND price >= :min_price"
        " AND price <= :max_price"
    )
    assert query.params == (3, "shop-1", "%mug%", Decimal("1.50"), Decimal("20"))


@pytest.mark.parametrize("subset", ALL_SUBSETS, ids=lambda s: "+".join(s) or "none")
def test_every_subset_emits_one_predicate_per_filter(subset):
    # Insertion order of the input must not matter
    filters = {field: SAMPLE_VALUES[field] for field in reversed(subset)}

    query = build_product_filter_query(filters)

    assert query.predicate_count == len(subset)
    assert query.param_names == subset
    assert query.statement.count(" WHERE ") == (1 if subset else 0)
    assert query.statement.count(" AND ") == max(len(subset) - 1, 0)


def test_name_is_wrapped_for_partial_match():
    query = build_product_filter_query({"name": "Blue"})

    assert query.bind_params == {"name": "%Blue%"}


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_values_are_absent(value):
    query = build_product_filter_query({field: value for field in FILTER_ORDER})

    assert query.statement == BASE_STATEMENT
    assert query.params == ()


def test_zero_is_a_real_filter_value():
    query = build_product_filter_query({"category_id": 0, "max_price": Decimal("0")})

    assert query.statement == (
        "SELECT * FROM products WHERE category_id = :category_id AND price <= :max_price"
    )
    assert query.bind_params == {"category_id": 0, "max_price": Decimal("0")}


def test_zero_from_query_model_is_kept():
    query = build_product_filter_query(ProductFilters(category_id="0", max_price="0"))

    assert query.param_names == ("category_id", "max_price")
    assert query.params == (0, Decimal("0"))


def test_single_price_bound_has_no_sentinel():
    query = build_product_filter_query({"min_price": Decimal("5")})

    assert query.statement == "SELECT * FROM products WHERE price >= :min_price"
    assert query.bind_params == {"min_price": Decimal("5")}


def test_values_are_bound_not_interpolated():
    hostile = "x'; DROP TABLE products; --"

    query = build_product_filter_query({"shop_id": hostile, "name": hostile})

    assert hostile not in query.statement
    assert query.params == (hostile, f"%{hostile}%")


def test_accepts_filter_model():
    filters = ProductFilters(shop_id=" ", name="mug", max_price="12.5")

    query = build_product_filter_query(filters)

    assert query.param_names == ("name", "max_price")
    assert query.params == ("%mug%", Decimal("12.5"))


def test_same_filters_produce_identical_statements():
    first = build_product_filter_query({"name": "a", "category_id": 1})
    second = build_product_filter_query({"category_id": 1, "name": "a"})

    assert first == second
