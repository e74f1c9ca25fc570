from dataclasses import dataclass, replace

MONTHS = [
    ("01", "January"),
    ("02", "February"),
    ("03", "March"),
    ("04", "April"),
    ("05", "May"),
    ("06", "June"),
    ("07", "July"),
    ("08", "August"),
    ("09", "September"),
    ("10", "October"),
    ("11", "November"),
    ("12", "December"),
]

DEFAULT_MONTH = "03"


@dataclass(frozen=True)
class DashboardState:
    selected_month: str = DEFAULT_MONTH
    search_query: str = ""
    current_page: int = 1

    def with_month(self, month: str) -> "DashboardState":
        return replace(self, selected_month=month, current_page=1)

    def with_search(self, query: str) -> "DashboardState":
        return replace(self, search_query=query, current_page=1)

    def with_page(self, page: int) -> "DashboardState":
        return replace(self, current_page=max(1, page))

    def transaction_params(self, per_page: int | None = None) -> dict:
        params = {"month": self.selected_month, "page": self.current_page}
        if self.search_query:
            params["search"] = self.search_query
        if per_page is not None:
            params["perPage"] = per_page
        return params


def month_name(month: str) -> str:
    for value, name in MONTHS:
        if value == month:
            return name
    return month
