import argparse
import logging

from dashboard import DashboardClient, DashboardState, build_view, render_text
from dashboard.state import DEFAULT_MONTH


def main():
    parser = argparse.ArgumentParser(description="Print the transactions dashboard for one month.")
    parser.add_argument("--month", default=DEFAULT_MONTH, help="Two-digit month, e.g. 03")
    parser.add_argument("--search", default="", help="Free-text search")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--api-url", default=None, help="Query service base URL (defaults to DASHBOARD_API_URL)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    state = DashboardState().with_month(args.month).with_search(args.search).with_page(args.page)

    with DashboardClient(base_url=args.api_url) as client:
        snapshot = client.load(state)

    print(render_text(build_view(state, snapshot)))


if __name__ == "__main__":
    main()
