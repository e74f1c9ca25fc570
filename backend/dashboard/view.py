from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dashboard.client import DashboardSnapshot
from dashboard.state import DashboardState, month_name

NO_TRANSACTIONS = "No transactions found"
SPINNER = "Loading..."
SOLD_BADGE = "Sold"
UNSOLD_BADGE = "Not Sold"


def format_currency(amount: Any) -> str:
    """USD with grouping and two decimals, e.g. -$1,234.50."""
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        value = 0.0
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def sold_badge(sold: Any) -> str:
    return SOLD_BADGE if bool(sold) else UNSOLD_BADGE


def _format_date(raw: Any) -> str:
    if not raw:
        return ""
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return str(raw)


@dataclass(frozen=True)
class TableRow:
    id: int | None
    title: str
    description: str
    price: str
    category: str
    sold: str
    date_of_sale: str
    image: str | None = None


@dataclass(frozen=True)
class Pagination:
    page: int
    total_pages: int
    has_previous: bool
    has_next: bool


@dataclass(frozen=True)
class DashboardView:
    month_label: str
    search_query: str
    loading: bool
    rows: list[TableRow] = field(default_factory=list)
    placeholder: str | None = None
    cards: dict[str, str] = field(default_factory=dict)
    bar_series: list[tuple[str, int]] = field(default_factory=list)
    pie_series: list[tuple[str, int]] = field(default_factory=list)
    pagination: Pagination = Pagination(page=1, total_pages=0, has_previous=False, has_next=False)


def _row(item: dict[str, Any]) -> TableRow:
    return TableRow(
        id=item.get("id"),
        title=str(item.get("title") or ""),
        description=str(item.get("description") or ""),
        price=format_currency(item.get("price")),
        category=str(item.get("category") or ""),
        sold=sold_badge(item.get("sold")),
        date_of_sale=_format_date(item.get("dateOfSale")),
        image=item.get("image"),
    )


def build_view(
    state: DashboardState,
    snapshot: DashboardSnapshot | None,
    loading: bool = False,
) -> DashboardView:
    page = state.current_page
    total_pages = snapshot.total_pages if snapshot is not None else 0
    pagination = Pagination(
        page=page,
        total_pages=total_pages,
        has_previous=page > 1,
        has_next=page < total_pages,
    )

    if snapshot is None:
        return DashboardView(
            month_label=month_name(state.selected_month),
            search_query=state.search_query,
            loading=loading,
            placeholder=SPINNER if loading else NO_TRANSACTIONS,
            pagination=pagination,
        )

    rows = [_row(item) for item in snapshot.transactions]
    if loading:
        placeholder = SPINNER
    elif not rows:
        placeholder = NO_TRANSACTIONS
    else:
        placeholder = None

    stats = snapshot.statistics
    cards = {
        "Total Sale Amount": format_currency(stats.get("totalSaleAmount")),
        "Total Sold Items": str(int(stats.get("totalSoldItems") or 0)),
        "Total Unsold Items": str(int(stats.get("totalUnsoldItems") or 0)),
    }

    return DashboardView(
        month_label=month_name(state.selected_month),
        search_query=state.search_query,
        loading=loading,
        rows=[] if loading else rows,
        placeholder=placeholder,
        cards=cards,
        bar_series=[(label, int(count)) for label, count in snapshot.bar_chart.items()],
        pie_series=[(name, int(count)) for name, count in snapshot.pie_chart.items()],
        pagination=pagination,
    )


def render_text(view: DashboardView) -> str:
    lines = [f"Product Transactions Dashboard - {view.month_label}"]
    if view.search_query:
        lines.append(f"Search: {view.search_query}")
    lines.append("")

    for label, value in view.cards.items():
        lines.append(f"{label}: {value}")
    if view.cards:
        lines.append("")

    if view.placeholder is not None:
        lines.append(f"  {view.placeholder}")
    for row in view.rows:
        lines.append(
            f"  {row.id!s:>4}  {row.title[:40]:<40}  {row.price:>12}  {row.category:<20}  {row.sold:<8}  {row.date_of_sale}"
        )

    p = view.pagination
    prev_label = "< Prev" if p.has_previous else "  ----"
    next_label = "Next >" if p.has_next else "----  "
    lines.append("")
    lines.append(f"{prev_label}   Page {p.page} of {p.total_pages}   {next_label}")

    if view.bar_series:
        lines.append("")
        lines.append("Price ranges:")
        for label, count in view.bar_series:
            lines.append(f"  {label:>10}  {'#' * count} {count}")

    if view.pie_series:
        lines.append("")
        lines.append("Categories:")
        for name, count in view.pie_series:
            lines.append(f"  {name:<20}  {count}")

    return "\n".join(lines)
