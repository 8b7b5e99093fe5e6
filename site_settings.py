"""
The site settings record: currency, business rules, contact details and
the admin credentials.
"""
import logging
from typing import Any, Dict

from schemas import SettingsPatch

logger = logging.getLogger(__name__)

FALLBACK_CURRENCY = {"symbol": "€", "code": "EUR"}


def public_view(settings: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "currency": settings.get("currency") or {},
        "contact": settings.get("contact") or {},
        "business": settings.get("business") or {},
    }


def admin_view(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Everything except the admin password."""
    admin = settings.get("admin") or {}
    return {**public_view(settings), "admin": {"username": admin.get("username", "")}}


def _keep_unless_given(current: Dict[str, Any], patch: Dict[str, Any], keys) -> Dict[str, Any]:
    return {key: patch.get(key) or current.get(key) or "" for key in keys}


def merge_settings(settings: Dict[str, Any], patch: SettingsPatch) -> Dict[str, Any]:
    """
    Apply a per-section patch in place and return the settings.

    Text fields left empty keep their stored value; shipping amounts are
    replaced whenever they are supplied. The admin username cannot be
    changed here, only the password.
    """
    if patch.currency is not None:
        settings["currency"] = _keep_unless_given(
            settings.get("currency") or {}, patch.currency.model_dump(), ("symbol", "code", "name")
        )

    if patch.contact is not None:
        settings["contact"] = _keep_unless_given(
            settings.get("contact") or {}, patch.contact.model_dump(), ("phone", "email", "whatsapp", "address")
        )

    if patch.business is not None:
        current = settings.get("business") or {}
        business = patch.business
        settings["business"] = {
            "name": business.name or current.get("name") or "",
            "freeShippingThreshold": (
                business.free_shipping_threshold
                if business.free_shipping_threshold is not None
                else current.get("freeShippingThreshold", 50)
            ),
            "shippingCost": (
                business.shipping_cost if business.shipping_cost is not None else current.get("shippingCost", 5.99)
            ),
        }

    if patch.admin is not None and patch.admin.password:
        settings.setdefault("admin", {})["password"] = patch.admin.password
        logger.info("Admin password changed")

    return settings
