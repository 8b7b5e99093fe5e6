import logging
import os
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import authenticate, require_admin
from catalog import filter_products, find_product, parse_query, quote_cart, visible_only
from database import Database, get_db, settings
from errors import InvalidRequest, StoreError
from orders import build_order, list_orders, update_order
from products import apply_image_views, index_of, merge_product, new_product
from schemas import (
    AdminProductListOut,
    AdminSettingsOut,
    ImageViewsIn,
    LoginIn,
    LoginOut,
    MessageOut,
    OrderIn,
    OrderListOut,
    OrderOut,
    OrderUpdateIn,
    ProductIn,
    ProductListOut,
    ProductMutationOut,
    ProductOut,
    PublicSettingsOut,
    QuoteIn,
    QuoteOut,
    SettingsPatch,
)
from site_settings import FALLBACK_CURRENCY, admin_view, merge_settings, public_view

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="SOLEA Storefront API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Error handling ----------

@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": exc.public_message})


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(status_code=400, content={"detail": "; ".join(problems)})


# ---------- Utils ----------

async def currency_of(db: Database) -> dict:
    try:
        site = await db.settings.load()
    except StoreError as exc:
        logger.warning("Falling back to default currency: %s", exc)
        return dict(FALLBACK_CURRENCY)
    return site.get("currency") or dict(FALLBACK_CURRENCY)


# ---------- Health & Test ----------

@app.get("/")
async def root():
    return {"message": "SOLEA Storefront Backend Running"}


@app.get("/test")
async def test(db: Database = Depends(get_db)):
    documents = await db.status()
    return {
        "backend": "✅ Running",
        "data_dir": str(db.data_dir),
        "data_dir_env": "✅ Set" if os.getenv("DATA_DIR") else "❌ Not Set",
        "documents": documents,
    }


# ---------- Public catalog ----------

@app.get("/api/products", response_model=ProductListOut)
async def list_products(
    category: Optional[str] = Query(None),
    hair_type: Optional[str] = Query(None, alias="hairType"),
    special: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    db: Database = Depends(get_db),
):
    data = await db.products.load()
    criteria = parse_query({
        "category": category,
        "hairType": hair_type,
        "special": special,
        "minPrice": min_price,
        "maxPrice": max_price,
        "search": search,
        "sort": sort,
    })
    products = filter_products(visible_only(data.get("products", [])), criteria)
    return {"products": products, "currency": await currency_of(db), "total": len(products)}


@app.get("/api/products/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, db: Database = Depends(get_db)):
    data = await db.products.load()
    product = find_product(data.get("products", []), product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"product": product, "currency": await currency_of(db)}


@app.get("/api/settings", response_model=PublicSettingsOut)
async def get_public_settings(db: Database = Depends(get_db)):
    return public_view(await db.settings.load())


@app.post("/api/cart/quote", response_model=QuoteOut)
async def cart_quote(payload: QuoteIn, db: Database = Depends(get_db)):
    data = await db.products.load()
    site = await db.settings.load()
    quote = quote_cart(data.get("products", []), site.get("business") or {}, payload.items)
    return {**quote, "currency": site.get("currency") or dict(FALLBACK_CURRENCY)}


# ---------- Orders ----------

@app.post("/api/orders", response_model=OrderOut, status_code=201)
async def create_order(payload: OrderIn, db: Database = Depends(get_db)):
    order = build_order(payload, prefix=settings.ORDER_PREFIX)
    async with db.orders.edit() as data:
        data.setdefault("orders", []).append(order)
    logger.info("Order %s received (%d items)", order["orderNumber"], len(order["items"]))
    return {"order": order, "message": "Order submitted successfully"}


# ---------- Admin: auth ----------

@app.post("/api/admin/login", response_model=LoginOut)
async def admin_login(payload: LoginIn, db: Database = Depends(get_db)):
    if not payload.username or not payload.password:
        raise HTTPException(status_code=400, detail="Username and password are required")
    site = await db.settings.load()
    if not authenticate(site, payload.username, payload.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"success": True, "message": "Login successful", "username": payload.username}


# ---------- Admin: products ----------

@app.get("/api/admin/products", response_model=AdminProductListOut, dependencies=[Depends(require_admin)])
async def admin_list_products(db: Database = Depends(get_db)):
    data = await db.products.load()
    return {"products": data.get("products", [])}


@app.post(
    "/api/admin/products",
    response_model=ProductMutationOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def admin_create_product(payload: ProductIn, db: Database = Depends(get_db)):
    product = new_product(payload)
    async with db.products.edit() as data:
        data.setdefault("products", []).append(product)
    logger.info("Product %s created", product["id"])
    return {"product": product, "message": "Product created successfully"}


@app.put("/api/admin/products/{product_id}", response_model=ProductMutationOut, dependencies=[Depends(require_admin)])
async def admin_update_product(product_id: str, payload: ProductIn, db: Database = Depends(get_db)):
    async with db.products.edit() as data:
        products = data.setdefault("products", [])
        i = index_of(products, product_id)
        if i is None:
            raise HTTPException(status_code=404, detail="Product not found")
        products[i] = merge_product(products[i], payload)
        updated = products[i]
    logger.info("Product %s updated", product_id)
    return {"product": updated, "message": "Product updated successfully"}


@app.delete("/api/admin/products/{product_id}", response_model=ProductMutationOut, dependencies=[Depends(require_admin)])
async def admin_delete_product(product_id: str, db: Database = Depends(get_db)):
    async with db.products.edit() as data:
        products = data.setdefault("products", [])
        i = index_of(products, product_id)
        if i is None:
            raise HTTPException(status_code=404, detail="Product not found")
        deleted = products.pop(i)
    logger.info("Product %s deleted", product_id)
    return {"product": deleted, "message": "Product deleted successfully"}


@app.put(
    "/api/admin/products/{product_id}/image-views",
    response_model=MessageOut,
    dependencies=[Depends(require_admin)],
)
async def admin_image_views(product_id: str, payload: ImageViewsIn, db: Database = Depends(get_db)):
    async with db.products.edit() as data:
        products = data.setdefault("products", [])
        i = index_of(products, product_id)
        if i is None:
            raise HTTPException(status_code=404, detail="Product not found")
        apply_image_views(products[i], payload.image_views)
    return {"message": "Image views updated successfully"}


# ---------- Admin: orders ----------

@app.get("/api/admin/orders", response_model=OrderListOut, dependencies=[Depends(require_admin)])
async def admin_list_orders(db: Database = Depends(get_db)):
    data = await db.orders.load()
    return {"orders": list_orders(data.get("orders", []))}


@app.put("/api/admin/orders/{order_id}", response_model=OrderOut, dependencies=[Depends(require_admin)])
async def admin_update_order(order_id: str, payload: OrderUpdateIn, db: Database = Depends(get_db)):
    async with db.orders.edit() as data:
        order = update_order(data.setdefault("orders", []), order_id, payload)
        if order is None:
            raise HTTPException(status_code=404, detail="Order not found")
    return {"order": order, "message": "Order updated successfully"}


# ---------- Admin: settings ----------

@app.get("/api/admin/settings", response_model=AdminSettingsOut, dependencies=[Depends(require_admin)])
async def admin_get_settings(db: Database = Depends(get_db)):
    return admin_view(await db.settings.load())


@app.put("/api/admin/settings", response_model=MessageOut, dependencies=[Depends(require_admin)])
async def admin_update_settings(payload: SettingsPatch, db: Database = Depends(get_db)):
    async with db.settings.edit() as site:
        merge_settings(site, payload)
    logger.info("Settings updated")
    return {"message": "Settings updated successfully"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", settings.PORT)))
