import numpy as np
import pandas as pd

# ---------- PRICE RANGES ----------

# (label, inclusive upper bound); the last range is open-ended
PRICE_RANGES: tuple[tuple[str, float | None], ...] = (
    ("0-100", 100),
    ("101-200", 200),
    ("201-300", 300),
    ("301-400", 400),
    ("401-500", 500),
    ("501-600", 600),
    ("601-700", 700),
    ("701-800", 800),
    ("801-900", 900),
    ("901-above", None),
)

PRICE_RANGE_LABELS = [label for label, _ in PRICE_RANGES]


def _price_bins() -> list[float]:
    upper = [np.inf if bound is None else float(bound) for _, bound in PRICE_RANGES]
    return [-np.inf] + upper


def _prices(df: pd.DataFrame) -> pd.Series:
    if df is None or df.empty or "price" not in df.columns:
        return pd.Series(dtype=float)
    return pd.to_numeric(df["price"], errors="coerce").fillna(0)


# ---------- STATISTICS ----------

def compute_statistics(df: pd.DataFrame) -> dict:
    if df is None or df.empty:
        return {
            "total_sale_amount": 0.0,
            "total_sold_items": 0,
            "total_unsold_items": 0,
        }

    sold = df["sold"].fillna(False).astype(bool)
    prices = _prices(df)

    return {
        "total_sale_amount": round(float(prices[sold].sum()), 2),
        "total_sold_items": int(sold.sum()),
        "total_unsold_items": int((~sold).sum()),
    }


# ---------- HISTOGRAMS ----------

def price_range_histogram(df: pd.DataFrame) -> dict[str, int]:
    prices = _prices(df)
    if prices.empty:
        return {label: 0 for label in PRICE_RANGE_LABELS}

    buckets = pd.cut(prices, bins=_price_bins(), labels=PRICE_RANGE_LABELS, right=True)
    counts = buckets.value_counts().reindex(PRICE_RANGE_LABELS, fill_value=0)
    return {label: int(counts[label]) for label in PRICE_RANGE_LABELS}


def category_histogram(df: pd.DataFrame) -> dict[str, int]:
    if df is None or df.empty or "category" not in df.columns:
        return {}

    counts = df.groupby("category", sort=False).size()
    return {str(category): int(count) for category, count in counts.items()}
