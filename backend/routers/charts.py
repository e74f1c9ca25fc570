# routers/charts.py

import asyncio
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from db.deps import get_db, get_session_factory
from models.responses import CombinedData, Statistics
from services.transaction_analytics import (
    category_histogram,
    compute_statistics,
    price_range_histogram,
)
from services.transaction_repository import get_dataframe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["charts"])


def statistics_for(db: Session, month: str | None) -> dict:
    return compute_statistics(get_dataframe(db, ["price", "sold"], month))


def bar_chart_for(db: Session, month: str | None) -> dict[str, int]:
    return price_range_histogram(get_dataframe(db, ["price"], month))


def pie_chart_for(db: Session, month: str | None) -> dict[str, int]:
    return category_histogram(get_dataframe(db, ["category"], month))


@router.get("/statistics", response_model=Statistics)
def get_statistics(
    month: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return statistics_for(db, month)


@router.get("/bar-chart", response_model=dict[str, int])
def get_bar_chart(
    month: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return bar_chart_for(db, month)


@router.get("/pie-chart", response_model=dict[str, int])
def get_pie_chart(
    month: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return pie_chart_for(db, month)


def _run_with_session(session_factory: sessionmaker, compute, month: str | None):
    db = session_factory()
    try:
        return compute(db, month)
    finally:
        db.close()


@router.get("/combined-data", response_model=CombinedData)
async def get_combined_data(
    month: str | None = Query(None),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    # sessions are not shareable across threads; each computation opens its own
    statistics, bar_chart, pie_chart = await asyncio.gather(
        run_in_threadpool(_run_with_session, session_factory, statistics_for, month),
        run_in_threadpool(_run_with_session, session_factory, bar_chart_for, month),
        run_in_threadpool(_run_with_session, session_factory, pie_chart_for, month),
    )
    logger.info("COMBINED: month=%s categories=%s", month, len(pie_chart))
    return {
        "statistics": statistics,
        "bar_chart": bar_chart,
        "pie_chart": pie_chart,
    }
