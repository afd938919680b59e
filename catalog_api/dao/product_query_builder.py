"""
Builds the filtered product listing query.

Each filter that is present contributes one predicate and one bound
parameter. Predicates are always emitted in the same order (category, shop,
name, min price, max price) no matter which subset is supplied, so equal
filter sets always produce identical statement text.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel

BASE_STATEMENT = "SELECT * FROM products"

PRICE_PARAMS = ("min_price", "max_price")


def _contains(value: Any) -> str:
    return f"%{value}%"


# (filter field, predicate template, value transform), in emission order
FILTER_PREDICATES: Tuple[Tuple[str, str, Optional[Callable[[Any], Any]]], ...] = (
    ("category_id", "category_id = :category_id", None),
    ("shop_id", "shop_id = :shop_id", None),
    ("name", "LOWER(name) LIKE LOWER(:name)", _contains),
    ("min_price", "price >= :min_price", None),
    ("max_price", "price <= :max_price", None),
)


@dataclass(frozen=True)
class ProductFilterQuery:
    statement: str
    param_names: Tuple[str, ...]
    params: Tuple[Any, ...]

    @property
    def bind_params(self) -> Dict[str, Any]:
        return dict(zip(self.param_names, self.params))

    @property
    def predicate_count(self) -> int:
        return len(self.param_names)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _as_mapping(filters: Union[BaseModel, Mapping[str, Any], None]) -> Mapping[str, Any]:
    if filters is None:
        return {}
    if isinstance(filters, BaseModel):
        return filters.model_dump()
    return filters


def build_product_filter_query(
    filters: Union[BaseModel, Mapping[str, Any], None] = None,
) -> ProductFilterQuery:
    """
    Translate optional filters into one parameterized SELECT.

    None and blank strings are treated as absent; numeric zero is a real
    bound. A missing price bound emits no predicate rather than a sentinel value.
    """
    values = _as_mapping(filters)

    predicates: List[str] = []
    names: List[str] = []
    params: List[Any] = []
    for field, template, transform in FILTER_PREDICATES:
        value = values.get(field)
        if not _is_present(value):
            continue
        predicates.append(template)
        names.append(field)
        params.append(transform(value) if transform else value)

    statement = BASE_STATEMENT
    if predicates:
        statement = f"{BASE_STATEMENT} WHERE {' AND '.join(predicates)}"

    return ProductFilterQuery(statement=statement, param_names=tuple(names), params=tuple(params))
