"""Plain-text financial summaries used as AI insight inputs"""

from decimal import Decimal
from typing import Iterable

from fintrack.domain.models import Asset, Debt, Transaction

ASSET_TYPE_NAMES = {
    "bank": "Bank Account",
    "stock": "Stocks",
    "crypto": "Crypto",
    "property": "Property",
    "mutualfund": "Mutual Fund",
}


def format_money(amount: Decimal, currency: str = "USD") -> str:
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{Decimal(amount):,.2f}"


def summarize_assets(assets: Iterable[Asset], currency: str = "USD") -> str:
    """e.g. "Savings Account (Bank Account): $15,000.00, Tech Stocks (Stocks): $25,000.00" """
    parts = [
        f"{a.name} ({ASSET_TYPE_NAMES.get(a.type, a.type)}): {format_money(a.value, currency)}"
        for a in assets
    ]
    return ", ".join(parts) if parts else "No assets recorded."


def summarize_debts(debts: Iterable[Debt], currency: str = "USD") -> str:
    """Remaining balances only; an empty string means no debts."""
    parts = []
    for d in debts:
        if d.remaining <= 0:
            continue
        text = f"{d.name}: {format_money(d.remaining, currency)} remaining"
        if d.interest_rate is not None:
            text += f" at {d.interest_rate}% APR"
        parts.append(text)
    return ", ".join(parts)


def summarize_transactions(transactions: Iterable[Transaction], currency: str = "USD", limit: int = 100) -> str:
    """One line per transaction, newest first"""
    ordered = sorted(transactions, key=lambda t: t.date, reverse=True)[:limit]
    if not ordered:
        return "No transactions recorded."
    return "\n".join(
        f"{t.date.isoformat()} {t.type} {t.category}: {format_money(t.amount, currency)} - {t.description}"
        for t in ordered
    )
