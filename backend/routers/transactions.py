# routers/transactions.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from db.deps import get_db
from models.responses import TransactionPage
from services.transaction_repository import DEFAULT_PER_PAGE, list_transactions

router = APIRouter(prefix="/api", tags=["transactions"])


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


@router.get("/transactions", response_model=TransactionPage)
def get_transactions(
    month: str | None = Query(None),
    search: str | None = Query(None),
    page: str | None = Query(None),
    per_page: str | None = Query(None, alias="perPage"),
    db: Session = Depends(get_db),
):
    return list_transactions(
        db=db,
        month=month,
        search=search,
        page=_positive_int(page, 1),
        per_page=_positive_int(per_page, DEFAULT_PER_PAGE),
    )
