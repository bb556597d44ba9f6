# transactions/amounts.py
"""
Currency conversion of a paid expense.

An expense involves up to three currencies: the expense's, the collective's
and the host's. Payout providers report what they charged in host currency;
`compute_expense_amounts` expresses the expense amount and every fee in all
three currencies.

Supported combinations:
- The collective uses its host's currency (the expense may be in any currency)
- The expense uses the collective's currency (the host may differ)

Anything else raises UnsupportedCurrencyCombination.
"""

from decimal import Decimal

from transactions.exceptions import UnsupportedCurrencyCombination
from transactions.rounding import round_half_up, to_decimal
from transactions.types import CurrencyAmounts, ExpenseAmounts, Fees, FxRates


def resolve_fx_rates(expense_currency: str, collective_currency: str, host_currency: str, expense_to_host_fx_rate) -> FxRates:
    """Derive the collective -> host and expense -> collective rates."""
    expense_to_host = to_decimal(expense_to_host_fx_rate)

    if collective_currency == host_currency:
        return FxRates(
            expense_to_host=expense_to_host,
            collective_to_host=Decimal(1),
            expense_to_collective=expense_to_host,
        )
    if expense_currency == collective_currency:
        return FxRates(
            expense_to_host=expense_to_host,
            collective_to_host=expense_to_host,
            expense_to_collective=Decimal(1),
        )
    raise UnsupportedCurrencyCombination(
        "Multi-currency expenses are not supported for collectives that have a "
        f"different currency than their hosts (expense {expense_currency}, "
        f"collective {collective_currency}, host {host_currency})"
    )


def _fee_amounts(fee_in_host_currency: int, fx_rates: FxRates) -> CurrencyAmounts:
    return CurrencyAmounts(
        in_host_currency=fee_in_host_currency,
        in_collective_currency=round_half_up(fee_in_host_currency / fx_rates.collective_to_host),
        in_expense_currency=round_half_up(fee_in_host_currency / fx_rates.expense_to_host),
    )


def compute_expense_amounts(expense, host_currency: str, expense_to_host_fx_rate, fees=None) -> ExpenseAmounts:
    """
    Compute the expense amount and fees in expense, collective and host currency.

    Args:
        expense: Expense with `amount`, `currency` and a loaded `collective`
        host_currency: Currency of the host paying the expense
        expense_to_host_fx_rate: Positive rate converting expense currency to host currency
        fees: Fees (or mapping of fee fields) in host currency, defaulting to zero

    Returns:
        ExpenseAmounts

    Raises:
        UnsupportedCurrencyCombination: If expense, collective and host currencies all differ
    """
    fees = Fees.coerce(fees)
    fx_rates = resolve_fx_rates(
        expense.currency,
        expense.collective.currency,
        host_currency,
        expense_to_host_fx_rate,
    )

    return ExpenseAmounts(
        fx_rates=fx_rates,
        amount=CurrencyAmounts(
            in_host_currency=round_half_up(expense.amount * fx_rates.expense_to_host),
            in_collective_currency=round_half_up(expense.amount * fx_rates.expense_to_collective),
            in_expense_currency=expense.amount,
        ),
        payment_processor_fee=_fee_amounts(fees.payment_processor_fee_in_host_currency, fx_rates),
        host_fee=_fee_amounts(fees.host_fee_in_host_currency, fx_rates),
        platform_fee=_fee_amounts(fees.platform_fee_in_host_currency, fx_rates),
    )
