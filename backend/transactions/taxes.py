# transactions/taxes.py
"""
Taxes on expenses.

Expense amounts are tax-inclusive; tax lines (`expense.data["taxes"]`) carry
the rate as a fraction. The tax withheld is recorded on the expense's
transaction as a negative `tax_amount`, or null when the expense has no tax.
"""

from collections import defaultdict
from typing import Iterable, Optional

from transactions.rounding import round_half_up, to_decimal
from transactions.types import TaxInfo


def compute_expense_taxes(expense) -> Optional[int]:
    """
    Back-calculate the tax included in `expense.amount`.

    Returns None when the expense has no tax lines, otherwise a value <= 0
    (e.g. 1200 with a 20% tax gives -200).
    """
    taxes = expense.taxes
    if not taxes:
        return None

    rates_sum = sum((to_decimal(tax.get("rate") or 0) for tax in taxes), to_decimal(0))
    amount_without_taxes = to_decimal(expense.amount) / (1 + rates_sum)
    return -round_half_up(expense.amount - amount_without_taxes)


def build_tax_info(expense) -> Optional[TaxInfo]:
    """The tax metadata stored in transaction data: only the first tax line is kept."""
    taxes = expense.taxes
    if not taxes:
        return None
    return TaxInfo.from_tax_line(taxes[0])


def get_taxes_summary(transactions: Iterable) -> Optional[dict]:
    """
    Summarize taxes by tax id.

    Returns:
        {tax_id: {"collected": int, "paid": int}} in host currency, where
        `collected` sums CREDIT rows and `paid` sums DEBIT rows,
        or None when no transaction carries a tax.
    """
    transactions_with_taxes = [t for t in transactions if t.tax_amount]
    if not transactions_with_taxes:
        return None

    grouped = defaultdict(list)
    for transaction in transactions_with_taxes:
        tax_id = ((transaction.data or {}).get("tax") or {}).get("id")
        grouped[tax_id].append(transaction)

    summary = {}
    for tax_id, group in grouped.items():
        collected = sum(
            _tax_amount_in_host_currency(t) for t in group if t.type == "CREDIT"
        )
        paid = sum(
            _tax_amount_in_host_currency(t) for t in group if t.type == "DEBIT"
        )
        summary[tax_id] = {"collected": abs(collected), "paid": paid}
    return summary


def _tax_amount_in_host_currency(transaction) -> int:
    rate = transaction.host_currency_fx_rate or 1
    return round_half_up(transaction.tax_amount * to_decimal(rate))
