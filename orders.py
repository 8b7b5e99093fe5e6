import logging
import time
from typing import Any, Dict, List, Optional

from database import new_id, parse_timestamp, utc_now
from errors import InvalidRequest
from schemas import ORDER_STATUSES, OrderIn, OrderUpdateIn

logger = logging.getLogger(__name__)

DEFAULT_SHIPPING = "À confirmer"


def order_number(prefix: str = "SOL") -> str:
    # Last 8 digits of the epoch in ms: unique enough for a small shop, not guaranteed
    return f"{prefix}-{str(int(time.time() * 1000))[-8:]}"


def build_order(payload: OrderIn, prefix: str = "SOL") -> Dict[str, Any]:
    """Validate a submitted order and return the record to persist."""
    customer = payload.customer
    if customer is None or not (customer.email or "").strip():
        raise InvalidRequest("Customer email is required")
    if not (customer.phone or "").strip():
        raise InvalidRequest("Customer phone is required")
    if not payload.items:
        raise InvalidRequest("Order must contain at least one item")

    now = utc_now()
    return {
        "id": new_id(),
        "orderNumber": order_number(prefix),
        "customer": {
            "firstName": customer.first_name or "",
            "lastName": customer.last_name or "",
            "email": customer.email,
            "phone": customer.phone,
            "address": customer.address or "",
            "preferredContact": customer.preferred_contact or "email",
            "newsletter": bool(customer.newsletter),
        },
        "items": [
            {
                "productId": item.product_id,
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
                "variant": item.variant or "",
                "subtotal": item.price * item.quantity,
            }
            for item in payload.items
        ],
        "notes": payload.notes or "",
        "subtotal": payload.subtotal or 0,
        "shipping": payload.shipping if payload.shipping not in (None, "") else DEFAULT_SHIPPING,
        "total": payload.total or 0,
        "status": "new",
        "internalNotes": "",
        "createdAt": now,
        "updatedAt": now,
    }


def list_orders(orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """All orders, newest first."""
    return sorted(orders, key=lambda o: parse_timestamp(o.get("createdAt")), reverse=True)


def update_order(orders: List[Dict[str, Any]], order_id: str, changes: OrderUpdateIn) -> Optional[Dict[str, Any]]:
    """None for an unknown id."""
    order = next((o for o in orders if str(o.get("id")) == order_id), None)
    if order is None:
        return None
    if changes.status:
        if changes.status not in ORDER_STATUSES:
            raise InvalidRequest(f"Invalid status: {changes.status}")
        order["status"] = changes.status
    if changes.internal_notes is not None:
        order["internalNotes"] = changes.internal_notes
    order["updatedAt"] = utc_now()
    logger.info("Order %s updated (status=%s)", order.get("orderNumber"), order.get("status"))
    return order
