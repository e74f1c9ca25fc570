import json
import logging
import os
from datetime import datetime
from typing import Any
from urllib.request import Request as UrlRequest, urlopen

from sqlalchemy import text
from sqlalchemy.orm import Session

from models.transactions import Transaction
from services.transaction_repository import count_transactions

logger = logging.getLogger(__name__)

DEFAULT_SEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


def seed_enabled() -> bool:
    return os.getenv("SEED_ON_STARTUP", "1").strip().lower() in {"1", "true", "yes", "on"}


def fetch_products(url: str | None = None) -> list[dict[str, Any]]:
    seed_url = url or os.getenv("SEED_DATA_URL", DEFAULT_SEED_URL)
    timeout_seconds = int(os.getenv("SEED_TIMEOUT_SECONDS", "30"))

    req = UrlRequest(seed_url, headers={"Accept": "application/json"}, method="GET")
    with urlopen(req, timeout=timeout_seconds) as resp:
        payload = json.loads(resp.read().decode("utf-8"))

    if not isinstance(payload, list):
        raise ValueError("Seed payload must be a JSON array of products.")
    return payload


def _parse_date(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _to_transaction(product: dict[str, Any]) -> Transaction:
    row = Transaction(
        title=product["title"],
        price=float(product["price"]),
        description=product.get("description"),
        category=product["category"],
        image=product.get("image"),
        sold=bool(product.get("sold", False)),
    )
    if product.get("id") is not None:
        row.id = int(product["id"])
    date_of_sale = _parse_date(product.get("dateOfSale"))
    if date_of_sale is not None:
        row.date_of_sale = date_of_sale
    return row


def upsert_products(
    db: Session,
    products: list[dict[str, Any]],
    batch_size: int | None = None,
) -> int:
    """
    Insert-or-update products in batches, keyed on the product id.
    Running it twice over the same payload leaves a single row per id.
    Products without an id are inserted last, after the id sequence has
    been moved past the imported ids.
    """
    size = batch_size or int(os.getenv("SEED_BATCH_SIZE", "100"))
    keyed = [p for p in products if p.get("id") is not None]
    unkeyed = [p for p in products if p.get("id") is None]

    written = 0
    for group in (keyed, unkeyed):
        for start in range(0, len(group), size):
            batch = group[start : start + size]
            for product in batch:
                db.merge(_to_transaction(product))
            db.commit()
            written += len(batch)
            logger.info("SEED: upserted batch rows=%s total=%s", len(batch), written)
        if group is keyed and keyed:
            sync_id_sequence(db)
    return written


def sync_id_sequence(db: Session) -> bool:
    """
    Move the PostgreSQL id sequence past MAX(id) after explicit ids were
    written. SQLite derives new rowids from MAX(rowid) and needs nothing.
    """
    if db.get_bind().dialect.name != "postgresql":
        return False

    db.execute(
        text(
            """
            SELECT setval(
                pg_get_serial_sequence('transactions', 'id'),
                COALESCE(MAX(id), 1),
                MAX(id) IS NOT NULL
            )
            FROM transactions
            """
        )
    )
    db.commit()
    return True


def initialize_transactions(db: Session, url: str | None = None, force: bool = False) -> int:
    existing = count_transactions(db)
    if existing and not force:
        logger.info("Database already contains data rows=%s", existing)
        return 0

    products = fetch_products(url)
    written = upsert_products(db, products)
    logger.info("Database initialized successfully rows=%s", written)
    return written
