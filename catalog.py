# Catalog queries over an already-loaded product list; inputs are never mutated
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from database import parse_timestamp
from errors import InvalidRequest
from schemas import ProductQuery, QuoteItemIn

logger = logging.getLogger(__name__)


def _number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _created_at(product: Dict[str, Any]) -> datetime:
    return parse_timestamp(product.get("createdAt"))


# sort value -> (key, descending)
SORTS: Dict[str, tuple] = {
    "price-asc": (lambda p: _number(p.get("price")), False),
    "price-desc": (lambda p: _number(p.get("price")), True),
    "newest": (_created_at, True),
    "rating": (lambda p: _number(p.get("rating")), True),
    "popularity": (lambda p: _number(p.get("reviewCount")), True),
}


def visible_only(products: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop products explicitly hidden from the storefront. Missing `visible` means visible."""
    return [p for p in products if p.get("visible") is not False]


def _contains(values: Any, wanted: str) -> bool:
    return isinstance(values, (list, tuple)) and wanted in values


def _matches_text(product: Dict[str, Any], needle: str) -> bool:
    name = str(product.get("name") or "").lower()
    description = str(product.get("description") or "").lower()
    return needle in name or needle in description


def _predicates(criteria: ProductQuery) -> List[Callable[[Dict[str, Any]], bool]]:
    checks: List[Callable[[Dict[str, Any]], bool]] = []
    if criteria.category is not None:
        checks.append(lambda p: p.get("category") == criteria.category)
    if criteria.hair_type is not None:
        checks.append(lambda p: _contains(p.get("hairType"), criteria.hair_type))
    if criteria.special is not None:
        checks.append(lambda p: _contains(p.get("special"), criteria.special))
    if criteria.min_price is not None:
        checks.append(lambda p: _number(p.get("price")) >= criteria.min_price)
    if criteria.max_price is not None:
        checks.append(lambda p: _number(p.get("price")) <= criteria.max_price)
    if criteria.search is not None:
        needle = criteria.search.lower()
        checks.append(lambda p: _matches_text(p, needle))
    return checks


def filter_products(products: Iterable[Dict[str, Any]], criteria: Optional[ProductQuery] = None) -> List[Dict[str, Any]]:
    """Return the products satisfying every supplied criterion, ordered by `criteria.sort`."""
    criteria = criteria or ProductQuery()
    checks = _predicates(criteria)
    result = [p for p in products if all(check(p) for check in checks)]

    if criteria.sort is None:
        return result
    if criteria.sort not in SORTS:
        logger.debug("Ignoring unknown sort %r", criteria.sort)
        return result
    key, descending = SORTS[criteria.sort]
    # sorted() is stable for reverse=True too, so ties keep catalog order
    return sorted(result, key=key, reverse=descending)


def parse_query(raw: Dict[str, Any]) -> ProductQuery:
    """Build criteria from query-string values, ignoring numbers that don't parse."""
    criteria = ProductQuery.model_validate(raw)
    for field, alias in (("min_price", "minPrice"), ("max_price", "maxPrice")):
        supplied = raw.get(alias) not in (None, "")
        if supplied and getattr(criteria, field) is None:
            logger.debug("Ignoring malformed %s=%r", alias, raw.get(alias))
    return criteria


def find_product(products: Iterable[Dict[str, Any]], product_id: str) -> Optional[Dict[str, Any]]:
    for p in products:
        if str(p.get("id")) == product_id:
            return p
    return None


def _unit_price(product: Dict[str, Any], variant: Optional[str]) -> float:
    if variant:
        for v in product.get("variants") or []:
            if isinstance(v, dict) and v.get("name") == variant:
                return _number(v.get("price"))
    return _number(product.get("price"))


def quote_cart(products: List[Dict[str, Any]], business: Dict[str, Any], items: List[QuoteItemIn]) -> Dict[str, Any]:
    """Price a client-held cart from catalog prices; shipping is free from the threshold up."""
    if not items:
        raise InvalidRequest("Cart is empty")
    catalog = visible_only(products)
    lines = []
    subtotal = 0.0
    for item in items:
        product = find_product(catalog, item.product_id)
        if product is None:
            raise InvalidRequest(f"Invalid product {item.product_id}")
        price = _unit_price(product, item.variant)
        line_total = price * item.quantity
        subtotal += line_total
        lines.append({
            "productId": item.product_id,
            "name": product.get("name", ""),
            "variant": item.variant or "",
            "price": price,
            "quantity": item.quantity,
            "subtotal": round(line_total, 2),
        })

    threshold = _number(business.get("freeShippingThreshold", 50))
    shipping = 0.0 if subtotal >= threshold else _number(business.get("shippingCost", 0))
    return {
        "items": lines,
        "subtotal": round(subtotal, 2),
        "shipping": round(shipping, 2),
        "total": round(subtotal + shipping, 2),
        "freeShippingRemaining": round(max(0.0, threshold - subtotal), 2),
    }
