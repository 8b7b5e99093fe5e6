# Admin product mutations on dicts from the products document
import time
from typing import Any, Dict, List, Optional, Union

from database import new_id, utc_now
from schemas import ProductIn

PLACEHOLDER_IMAGE = "images/placeholder.jpg"


def _dump(payload: ProductIn) -> Dict[str, Any]:
    return payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


def new_product(payload: ProductIn) -> Dict[str, Any]:
    fields = _dump(payload)
    now = utc_now()
    product = {
        "id": new_id(),
        "name": fields.get("name") or "New Product",
        "description": fields.get("description", ""),
        "longDescription": fields.get("longDescription", ""),
        "price": fields.get("price", 0),
        "category": fields.get("category") or "shampoo",
        "hairType": fields.get("hairType", []),
        "special": fields.get("special", []),
        "sku": fields.get("sku") or f"SKU-{int(time.time() * 1000)}",
        "rating": 0,
        "reviewCount": 0,
        "images": fields.get("images") or [PLACEHOLDER_IMAGE],
        "variants": fields.get("variants", []),
        "benefits": fields.get("benefits", []),
        "ingredients": fields.get("ingredients", ""),
        "certifications": fields.get("certifications", []),
        "stock": fields.get("stock", 0),
        "visible": fields.get("visible", True),
        "createdAt": now,
        "updatedAt": now,
    }
    return product


def merge_product(existing: Dict[str, Any], payload: ProductIn) -> Dict[str, Any]:
    """Partial update: only fields present in the request replace stored values."""
    updated = {**existing, **_dump(payload)}
    updated["id"] = existing["id"]
    if "createdAt" in existing:
        updated["createdAt"] = existing["createdAt"]
    updated["updatedAt"] = utc_now()
    return updated


def index_of(products: List[Dict[str, Any]], product_id: str) -> Optional[int]:
    for i, p in enumerate(products):
        if str(p.get("id")) == product_id:
            return i
    return None


def _view_for(image_views: Union[dict, list], index: int) -> str:
    if isinstance(image_views, list):
        view = image_views[index] if index < len(image_views) else None
    else:
        view = image_views.get(str(index), image_views.get(index))
    return view or "vue1"


def apply_image_views(product: Dict[str, Any], image_views: Union[dict, list]) -> Dict[str, Any]:
    """Rewrite images as {path, view} objects, reading the view for image i from image_views[i]."""
    images = product.get("images")
    if isinstance(images, list):
        product["images"] = [
            {
                "path": img if isinstance(img, str) else img.get("path", ""),
                "view": _view_for(image_views, i),
            }
            for i, img in enumerate(images)
        ]
    product["updatedAt"] = utc_now()
    return product
