"""Data transformation for the market table: filtering, sorting and display formatting."""
from typing import Dict, List, Optional

import pandas as pd

from src.constants import TABLE_COLUMNS
from src.data.models import Coin
from src.utils import format_currency, format_percent

COLUMN_IDS = [column_id for column_id, _ in TABLE_COLUMNS]
CURRENCY_COLUMNS = ("current_price", "market_cap", "total_volume")


def filter_coins(coins: List[Coin], query: Optional[str]) -> List[Coin]:
    """
    Keep coins whose name or symbol contains the query, case-insensitively.

    An empty query keeps everything.
    """
    if not query:
        return list(coins)
    needle = query.strip().lower()
    if not needle:
        return list(coins)
    return [c for c in coins if needle in c.name.lower() or needle in c.symbol.lower()]


def coins_to_frame(coins: List[Coin]) -> pd.DataFrame:
    """Numeric DataFrame with one row per coin, ordered by rank."""
    if not coins:
        return pd.DataFrame(columns=["id", "image"] + COLUMN_IDS)
    df = pd.DataFrame([c.to_dict() for c in coins])
    return df.sort_values("market_cap_rank", kind="stable").reset_index(drop=True)


def sort_frame(df: pd.DataFrame, sort_by: Optional[List[Dict]]) -> pd.DataFrame:
    """
    Sort by the columns of a Dash DataTable `sort_by` property.

    Args:
        df: Frame from coins_to_frame
        sort_by: [{"column_id": ..., "direction": "asc" | "desc"}, ...]

    Returns:
        Sorted frame; rank order when sort_by is empty
    """
    if df.empty:
        return df
    columns = [s["column_id"] for s in (sort_by or []) if s.get("column_id") in df.columns]
    if not columns:
        return df.sort_values("market_cap_rank", kind="stable").reset_index(drop=True)
    ascending = [s.get("direction", "asc") == "asc" for s in sort_by if s.get("column_id") in df.columns]
    return df.sort_values(columns, ascending=ascending, kind="stable").reset_index(drop=True)


def frame_to_records(df: pd.DataFrame) -> List[Dict]:
    """Table rows with currency and percentage columns formatted for display."""
    records = []
    for row in df.to_dict("records"):
        record = {
            "id": row["id"],
            "market_cap_rank": int(row["market_cap_rank"]),
            "name": row["name"],
            "symbol": str(row["symbol"]).upper(),
            "price_change_percentage_24h": format_percent(row["price_change_percentage_24h"]),
        }
        for column in CURRENCY_COLUMNS:
            record[column] = format_currency(row[column])
        records.append(record)
    return records
