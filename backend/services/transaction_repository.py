import math

import pandas as pd
from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Query, Session

from models.transactions import Transaction

DEFAULT_PER_PAGE = 10

_AGGREGATE_COLUMNS = {
    "price": Transaction.price,
    "sold": Transaction.sold,
    "category": Transaction.category,
}


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def apply_month_filter(query: Query, month: str | None) -> Query:
    """
    Keep rows whose formatted dateOfSale contains "-{month}-".
    Matches the month in any year; the caller is expected to zero-pad.
    """
    if _is_blank(month):
        return query
    return query.filter(
        cast(Transaction.date_of_sale, String).icontains(f"-{month.strip()}-", autoescape=True)
    )


def apply_search_filter(query: Query, search: str | None) -> Query:
    if _is_blank(search):
        return query
    return query.filter(
        or_(
            Transaction.title.icontains(search, autoescape=True),
            Transaction.description.icontains(search, autoescape=True),
            cast(Transaction.price, String).icontains(search, autoescape=True),
        )
    )


def list_transactions(
    db: Session,
    month: str | None = None,
    search: str | None = None,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
) -> dict:
    query = db.query(Transaction)
    query = apply_month_filter(query, month)
    query = apply_search_filter(query, search)

    total = query.order_by(None).count()
    offset = (page - 1) * per_page
    rows = (
        query.order_by(Transaction.date_of_sale.desc(), Transaction.id.desc())
        .offset(offset)
        .limit(per_page)
        .all()
    )

    return {
        "data": rows,
        "total": total,
        "page": page,
        "total_pages": math.ceil(total / per_page),
    }


def get_dataframe(db: Session, columns: list[str], month: str | None = None) -> pd.DataFrame:
    """
    Load the requested columns of every row matching the month filter.
    Rows come back in id order so grouped output keeps first-seen order.
    """
    selected = [_AGGREGATE_COLUMNS[name] for name in columns]
    query = apply_month_filter(db.query(*selected), month).order_by(Transaction.id)
    rows = query.all()
    return pd.DataFrame([tuple(row) for row in rows], columns=columns)


def count_transactions(db: Session) -> int:
    return db.query(Transaction.id).count()
