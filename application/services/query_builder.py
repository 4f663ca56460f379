# application/services/query_builder.py
from __future__ import annotations
from datetime import datetime, timedelta

def build_query(base_query: str, watermark: str | None, now: datetime) -> str:
    """
    Si ya hay marca guardada se añade "after:<ayer>" (YYYY/MM/DD).
    El límite siempre es relativo a 'now', nunca al valor de la marca.
    """
    if not watermark:
        return base_query
    since = (now - timedelta(days=1)).strftime("%Y/%m/%d")
    return f"{base_query} after:{since}"
