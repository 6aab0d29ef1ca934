"""Feed builders shared by the test modules."""

from __future__ import annotations

from datetime import datetime

from src.domain.entities.quote import QuoteRecord

# 08:00 → 16:00 in 80-minute steps; max ask 30.5, min bid 29.8
SCENARIO_TWO_QUOTES = [
    ("2020-01-02 08:00:00", 30.0, 29.8),
    ("2020-01-02 09:20:00", 30.1, 29.9),
    ("2020-01-02 10:40:00", 30.2, 30.0),
    ("2020-01-02 12:00:00", 30.5, 30.2),
    ("2020-01-02 13:20:00", 30.3, 30.1),
    ("2020-01-02 14:40:00", 30.4, 30.0),
    ("2020-01-02 16:00:00", 30.1, 29.9),
]


def raw_quote(code: str, when: str, ask: float, bid: float) -> dict:
    return {
        "CCY": code,
        "UPDATETIME": when,
        "ASKLISTRATE": ask,
        "BIDLISTRATE": bid,
        "CCYNAME": "ignored",
    }


def quote(code: str, when: str, ask: float, bid: float) -> QuoteRecord:
    return QuoteRecord(
        currency_code=code,
        timestamp=datetime.strptime(when, "%Y-%m-%d %H:%M:%S"),
        ask_rate=ask,
        bid_rate=bid,
    )
