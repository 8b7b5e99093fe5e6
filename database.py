from __future__ import annotations
import asyncio
import json
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Optional

from bson import ObjectId
from pydantic_settings import BaseSettings

from errors import StoreParseError, StoreReadError, StoreWriteError
from seed import DEFAULT_SETTINGS, SEED_PRODUCTS

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    DATA_DIR: str = os.getenv("DATA_DIR", "data")
    SEED_CATALOG: bool = True
    ORDER_PREFIX: str = "SOL"
    LOG_LEVEL: str = "INFO"
    PORT: int = 8000


settings = Settings()


def new_id() -> str:
    return str(ObjectId())


def utc_now() -> str:
    # Same shape as JavaScript's toISOString(), which the admin UI parses
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(raw: Any) -> datetime:
    """Parse an ISO-8601 stamp; missing or malformed stamps count as the oldest possible date."""
    if not isinstance(raw, str) or not raw:
        return _OLDEST
    try:
        stamp = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return _OLDEST
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


class JSONStore:
    """
    One JSON document on disk. Every load reads the whole file and every
    save replaces it. Read-modify-write cycles go through edit(), which
    holds the store lock for the duration of the cycle.
    """

    def __init__(self, path: Path, kind: str):
        self.path = Path(path)
        self.kind = kind
        self._lock = asyncio.Lock()

    def exists(self) -> bool:
        return self.path.is_file()

    def _read(self) -> Any:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Error reading %s: %s", self.path, exc)
            raise StoreReadError(self.kind, str(exc)) from exc
        try:
            document = json.loads(raw)
        except ValueError as exc:
            logger.error("Error parsing %s: %s", self.path, exc)
            raise StoreParseError(self.kind, str(exc)) from exc
        if not isinstance(document, dict):
            logger.error("Error parsing %s: root is %s, not an object", self.path, type(document).__name__)
            raise StoreParseError(self.kind, "document root is not an object")
        return document

    def _write(self, document: Any) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(document, fh, indent=2, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error writing to %s: %s", self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreWriteError(self.kind, str(exc)) from exc

    async def load(self) -> Any:
        return await asyncio.to_thread(self._read)

    async def save(self, document: Any) -> None:
        await asyncio.to_thread(self._write, document)

    @asynccontextmanager
    async def edit(self) -> AsyncIterator[Any]:
        """Load under the store lock, yield for mutation, save on clean exit."""
        async with self._lock:
            document = await self.load()
            yield document
            await self.save(document)


class Database:
    """The three documents the storefront persists."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.products = JSONStore(self.data_dir / "products.json", "products")
        self.orders = JSONStore(self.data_dir / "orders.json", "orders")
        self.settings = JSONStore(self.data_dir / "settings.json", "settings")

    def stores(self) -> list[JSONStore]:
        return [self.products, self.orders, self.settings]

    async def bootstrap(self, seed_products: Optional[list[dict[str, Any]]] = None) -> None:
        """Write a default document for every store whose file is missing."""
        defaults = {
            "products": {"products": _stamp_seed(seed_products or [])},
            "orders": {"orders": []},
            "settings": json.loads(json.dumps(DEFAULT_SETTINGS)),
        }
        for store in self.stores():
            if not store.exists():
                logger.info("Creating %s", store.path)
                await store.save(defaults[store.kind])

    async def status(self) -> dict[str, str]:
        report = {}
        for store in self.stores():
            try:
                await store.load()
                report[store.kind] = "✅ Readable"
            except StoreParseError:
                report[store.kind] = "⚠️ Corrupt JSON"
            except StoreReadError:
                report[store.kind] = "❌ Missing"
        return report


def _stamp_seed(products: list[dict[str, Any]]) -> list[dict[str, Any]]:
    now = utc_now()
    return [{**p, "createdAt": p.get("createdAt", now), "updatedAt": p.get("updatedAt", now)} for p in products]


_db: Optional[Database] = None


async def get_db() -> Database:
    global _db
    if _db is None:
        _db = Database(settings.DATA_DIR)
        await _db.bootstrap(SEED_PRODUCTS if settings.SEED_CATALOG else [])
    return _db
