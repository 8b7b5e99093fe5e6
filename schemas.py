"""
Request and response schemas for the SOLEA storefront API.

Stored documents use camelCase keys (the admin dashboard and storefront
read them as-is), so every model here serialises by camelCase alias while
Python code uses snake_case attribute names.
"""
import math
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ORDER_STATUSES = ("new", "processing", "completed", "cancelled")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------
# Products
# ---------------------------
class Variant(CamelModel):
    name: str
    price: float = Field(ge=0)


class ProductImage(CamelModel):
    path: str
    view: str = "vue1"


class Product(CamelModel):
    # Stored records are returned as the file holds them, so nothing here is strict
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[Union[str, int]] = None
    name: Optional[str] = ""
    description: Optional[str] = ""
    long_description: Optional[str] = ""
    price: Optional[float] = 0
    category: Optional[str] = ""
    hair_type: Optional[List[Any]] = Field(default_factory=list)
    special: Optional[List[Any]] = Field(default_factory=list)
    sku: Optional[str] = ""
    rating: Optional[float] = 0
    review_count: Optional[Union[int, float]] = 0
    images: Optional[List[Union[str, ProductImage, dict]]] = Field(default_factory=list)
    variants: Optional[List[Union[Variant, dict]]] = Field(default_factory=list)
    benefits: Optional[List[Any]] = Field(default_factory=list)
    ingredients: Optional[str] = ""
    certifications: Optional[List[Any]] = Field(default_factory=list)
    stock: Optional[Union[int, float]] = 0
    visible: Optional[bool] = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProductIn(CamelModel):
    """Admin create/update body. Unset fields keep their default (create) or prior value (update)."""

    name: Optional[str] = None
    description: Optional[str] = None
    long_description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    hair_type: Optional[List[str]] = None
    special: Optional[List[str]] = None
    sku: Optional[str] = None
    images: Optional[List[Union[str, ProductImage]]] = None
    variants: Optional[List[Variant]] = None
    benefits: Optional[List[str]] = None
    ingredients: Optional[str] = None
    certifications: Optional[List[str]] = None
    stock: Optional[int] = None
    visible: Optional[bool] = None


class ImageViewsIn(CamelModel):
    image_views: Union[dict, list]


class ProductQuery(CamelModel):
    """Catalog criteria. Empty or malformed values mean 'no constraint'."""

    category: Optional[str] = None
    hair_type: Optional[str] = None
    special: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None
    sort: Optional[str] = None

    @field_validator("category", "hair_type", "special", "search", "sort", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        if isinstance(value, str) and not value:
            return None
        return value

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _lenient_number(cls, value):
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None


class Currency(CamelModel):
    code: str = "EUR"
    symbol: str = "€"
    name: Optional[str] = None


class ProductListOut(BaseModel):
    products: List[Product]
    currency: Currency
    total: int


class ProductOut(BaseModel):
    product: Product
    currency: Currency


class AdminProductListOut(BaseModel):
    products: List[Product]


class ProductMutationOut(BaseModel):
    product: Product
    message: str


# ---------------------------
# Orders
# ---------------------------
class CustomerIn(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    preferred_contact: Optional[str] = None
    newsletter: Optional[bool] = None


class OrderItemIn(CamelModel):
    product_id: Optional[str] = None
    name: Optional[str] = None
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(ge=1)
    variant: Optional[str] = None


class OrderIn(CamelModel):
    customer: Optional[CustomerIn] = None
    items: Optional[List[OrderItemIn]] = None
    notes: Optional[str] = None
    subtotal: Optional[float] = Field(None, allow_inf_nan=False)
    shipping: Optional[Union[float, str]] = None
    total: Optional[float] = Field(None, allow_inf_nan=False)


class Customer(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = ""
    preferred_contact: Optional[str] = "email"
    newsletter: Optional[bool] = False


class OrderItem(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    product_id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[Union[int, float]] = None
    variant: Optional[str] = ""
    subtotal: Optional[float] = None


class Order(CamelModel):
    # Legacy orders may predate the current rules; they are listed as stored
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[Union[str, int]] = None
    order_number: Optional[str] = None
    customer: Optional[Customer] = None
    items: Optional[List[OrderItem]] = Field(default_factory=list)
    notes: Optional[str] = ""
    subtotal: Optional[float] = 0
    shipping: Optional[Union[float, str]] = "À confirmer"
    total: Optional[float] = 0
    status: Optional[str] = "new"
    internal_notes: Optional[str] = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class OrderUpdateIn(CamelModel):
    status: Optional[str] = None
    internal_notes: Optional[str] = None


class OrderOut(BaseModel):
    order: Order
    message: str


class OrderListOut(BaseModel):
    orders: List[Order]


# ---------------------------
# Cart quote
# ---------------------------
class QuoteItemIn(CamelModel):
    product_id: str
    quantity: int = Field(1, ge=1)
    variant: Optional[str] = None


class QuoteIn(CamelModel):
    items: List[QuoteItemIn]


class QuoteLine(CamelModel):
    product_id: str
    name: str
    variant: str = ""
    price: float
    quantity: int
    subtotal: float


class QuoteOut(CamelModel):
    items: List[QuoteLine]
    subtotal: float
    shipping: float
    total: float
    free_shipping_remaining: float
    currency: Currency


# ---------------------------
# Settings
# ---------------------------
class Business(CamelModel):
    name: str = ""
    free_shipping_threshold: float = 50
    shipping_cost: float = 5.99


class Contact(CamelModel):
    phone: str = ""
    email: str = ""
    whatsapp: str = ""
    address: str = ""


class AdminName(CamelModel):
    username: str


class PublicSettingsOut(CamelModel):
    currency: Currency
    contact: Contact
    business: Business


class AdminSettingsOut(PublicSettingsOut):
    admin: AdminName


class CurrencyPatch(CamelModel):
    code: Optional[str] = None
    symbol: Optional[str] = None
    name: Optional[str] = None


class ContactPatch(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = None


class BusinessPatch(CamelModel):
    name: Optional[str] = None
    free_shipping_threshold: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    shipping_cost: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class AdminPatch(CamelModel):
    password: Optional[str] = None


class SettingsPatch(CamelModel):
    currency: Optional[CurrencyPatch] = None
    contact: Optional[ContactPatch] = None
    business: Optional[BusinessPatch] = None
    admin: Optional[AdminPatch] = None


# ---------------------------
# Auth & misc
# ---------------------------
class LoginIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginOut(BaseModel):
    success: bool
    message: str
    username: str


class MessageOut(BaseModel):
    message: str
