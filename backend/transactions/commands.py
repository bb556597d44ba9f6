# transactions/commands.py
"""
Command layer for recording paid expenses in the ledger.

Two entry points, one per way an expense gets paid:
- create_transactions_from_paid_expense: paid through a payout provider,
  which reports its fees in host currency
- create_transactions_for_manually_paid_expense: paid outside the platform,
  the host admin reports the total paid in host currency

Pattern:
1. Validate arguments
2. Resolve the collective and the FX rate
3. Build a TransactionRecord (build_* functions, no writes)
4. Hand it to Transaction.objects.create_double_entry, the only write

Nothing is retried; every error surfaces to the caller and no partial
transaction is ever written.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from django.utils import timezone

from expenses.models import Expense
from transactions.amounts import compute_expense_amounts
from transactions.currency import get_fx_rate
from transactions.exceptions import InvalidArgument, UnsupportedCurrencyCombination
from transactions.models import Transaction
from transactions.rounding import round_half_up, to_decimal, to_negative
from transactions.taxes import build_tax_info, compute_expense_taxes
from transactions.types import Fees, FxRateSource, TransactionData, TransactionRecord

logger = logging.getLogger(__name__)


def _expense_record_fields(host, expense) -> dict:
    """Fields shared by every expense transaction, whatever the payment path."""
    return {
        "type": Transaction.Type.DEBIT,
        "kind": Transaction.Kind.EXPENSE,
        # Transactions are always recorded in the collective currency
        "currency": expense.collective.currency,
        "host_currency": host.currency,
        "description": expense.description,
        "tax_amount": compute_expense_taxes(expense),
        # TODO: record the user who triggered the payment rather than the expense creator
        "created_by_user_id": expense.user_id,
        "collective_id": expense.collective_id,
        "from_collective_id": expense.from_collective_id,
        "host_id": host.pk,
        "expense_id": expense.pk,
        "payout_method_id": expense.payout_method_id,
    }


def resolve_expense_to_host_fx_rate(expense, host, fx_rate) -> Decimal:
    """
    Use the explicit rate as-is, or fetch the live expense -> host rate.

    Raises:
        FxRateUnavailable: Propagated from the rate lookup
    """
    source = FxRateSource.coerce(fx_rate)
    if not source.is_live:
        return source.rate
    return get_fx_rate(expense.currency, host.currency, timezone.now())


# =============================================================================
# Paid through a payout provider
# =============================================================================

def build_paid_expense_record(
    host,
    expense,
    fees=None,
    *,
    expense_to_host_fx_rate,
    transaction_data=None,
    payment_method=None,
) -> TransactionRecord:
    """
    Build the DEBIT record for an expense paid through a payout provider.

    `expense_to_host_fx_rate` must already be resolved to a number here.
    When the payee pays the fees, the payment processor fee is taken out of
    what the payee receives, so it is added back to the collective's outflow.

    Raises:
        UnsupportedCurrencyCombination: If expense, collective and host currencies all differ
    """
    fees = Fees.coerce(fees)
    rate = to_decimal(expense_to_host_fx_rate)
    amounts = compute_expense_amounts(expense, host.currency, rate, fees)

    record = TransactionRecord(
        **_expense_record_fields(host, expense),
        amount=-amounts.amount.in_collective_currency,
        amount_in_host_currency=-amounts.amount.in_host_currency,
        net_amount_in_collective_currency=-(
            amounts.amount.in_collective_currency
            + amounts.payment_processor_fee.in_collective_currency
            + amounts.host_fee.in_collective_currency
            + amounts.platform_fee.in_collective_currency
        ),
        host_currency_fx_rate=amounts.fx_rates.collective_to_host,
        payment_processor_fee_in_host_currency=to_negative(fees.payment_processor_fee_in_host_currency),
        host_fee_in_host_currency=to_negative(fees.host_fee_in_host_currency),
        platform_fee_in_host_currency=to_negative(fees.platform_fee_in_host_currency),
        payment_method_id=payment_method.pk if payment_method is not None else None,
        data=TransactionData(
            expense_to_host_fx_rate=rate,
            tax=build_tax_info(expense),
            extra=dict(transaction_data or {}),
        ),
    )

    if expense.fees_payer == Expense.FeesPayer.PAYEE:
        processor_fee = amounts.payment_processor_fee
        record = replace(
            record,
            amount=record.amount + processor_fee.in_collective_currency,
            amount_in_host_currency=record.amount_in_host_currency + processor_fee.in_host_currency,
            net_amount_in_collective_currency=(
                record.net_amount_in_collective_currency + processor_fee.in_collective_currency
            ),
            data=record.data.with_fees_payer(Expense.FeesPayer.PAYEE),
        )

    return record


def create_transactions_from_paid_expense(
    host,
    expense,
    fees=None,
    *,
    expense_to_host_fx_rate,
    transaction_data=None,
    payment_method=None,
) -> Transaction:
    """
    Record an expense paid through a payout provider.

    Args:
        host: Host collective that paid the expense
        expense: The paid expense; its collective is loaded if needed
        fees: Fees (or mapping of fee fields) in host currency, default all zero
        expense_to_host_fx_rate: A positive rate, FxRateSource, or "auto" to
            fetch the live rate for expense currency -> host currency
        transaction_data: Extra metadata stored in transaction.data
        payment_method: Deprecated, only links PayPal adaptive payments

    Returns:
        The DEBIT transaction of the created double entry

    Raises:
        InvalidArgument: If an explicit FX rate is not positive
        FxRateUnavailable: If the live FX rate cannot be fetched
        UnsupportedCurrencyCombination: If expense, collective and host currencies all differ
    """
    rate = resolve_expense_to_host_fx_rate(expense, host, expense_to_host_fx_rate)
    record = build_paid_expense_record(
        host,
        expense,
        fees,
        expense_to_host_fx_rate=rate,
        transaction_data=transaction_data,
        payment_method=payment_method,
    )

    logger.info(
        "Recording paid expense",
        extra={
            "expense_id": expense.pk,
            "host_id": host.pk,
            "amount": record.amount,
            "currency": record.currency,
            "expense_to_host_fx_rate": str(rate),
            "fees_payer": expense.fees_payer,
        },
    )
    return Transaction.objects.create_double_entry(record)


# =============================================================================
# Paid manually by the host
# =============================================================================

def build_manually_paid_expense_record(
    host,
    expense,
    payment_processor_fee_in_host_currency: int,
    total_amount_paid_in_host_currency: int,
    transaction_data=None,
) -> TransactionRecord:
    """
    Build the DEBIT record for an expense the host paid outside the platform.

    When the payee pays the fees, the host admin already entered the amount
    net of fees, so amounts are used as given and only the payer is tagged.
    When the host and collective currencies differ, the FX rate is the ratio
    of what was paid to the expense amount.

    Raises:
        InvalidArgument: On a negative fee or a non-positive total
        UnsupportedCurrencyCombination: If the host currency differs from the
            collective's and the expense is not in the collective's currency
    """
    fee = payment_processor_fee_in_host_currency
    total = total_amount_paid_in_host_currency
    if fee < 0:
        raise InvalidArgument("Payment processor fee must be positive")
    if total <= 0:
        raise InvalidArgument("Total amount paid must be positive")

    collective = expense.collective
    gross_amount = to_negative(total - fee)
    amount = gross_amount
    net_amount_in_collective_currency = to_negative(total)
    host_currency_fx_rate = Decimal(1)

    if host.currency != collective.currency:
        if expense.currency != collective.currency:
            raise UnsupportedCurrencyCombination(
                "Expense currency must be the same as collective currency "
                f"(expense {expense.currency}, collective {collective.currency}, host {host.currency})"
            )
        host_currency_fx_rate = round_half_up(abs(to_decimal(gross_amount) / expense.amount), 5)
        if host_currency_fx_rate == 0:
            raise InvalidArgument("Payment processor fee must be lower than the total amount paid")
        amount = round_half_up(amount / host_currency_fx_rate)
        net_amount_in_collective_currency = round_half_up(net_amount_in_collective_currency / host_currency_fx_rate)

    data = TransactionData(
        tax=build_tax_info(expense),
        is_manual=True,
        extra=dict(transaction_data or {}),
    )
    if expense.fees_payer == Expense.FeesPayer.PAYEE:
        data = data.with_fees_payer(Expense.FeesPayer.PAYEE)

    return TransactionRecord(
        **_expense_record_fields(host, expense),
        amount=amount,
        amount_in_host_currency=gross_amount,
        net_amount_in_collective_currency=net_amount_in_collective_currency,
        host_currency_fx_rate=host_currency_fx_rate,
        payment_processor_fee_in_host_currency=to_negative(fee),
        host_fee_in_host_currency=0,
        platform_fee_in_host_currency=0,
        data=data,
    )


def create_transactions_for_manually_paid_expense(
    host,
    expense,
    payment_processor_fee_in_host_currency: int,
    total_amount_paid_in_host_currency: int,
    transaction_data=None,
) -> Transaction:
    """
    Record an expense the host paid manually.

    Args:
        host: Host collective that paid the expense
        expense: The paid expense
        payment_processor_fee_in_host_currency: Fee paid on top, >= 0
        total_amount_paid_in_host_currency: Everything that left the host, > 0
        transaction_data: Extra metadata stored in transaction.data

    Returns:
        The DEBIT transaction of the created double entry
    """
    record = build_manually_paid_expense_record(
        host,
        expense,
        payment_processor_fee_in_host_currency,
        total_amount_paid_in_host_currency,
        transaction_data,
    )

    logger.info(
        "Recording manually paid expense",
        extra={
            "expense_id": expense.pk,
            "host_id": host.pk,
            "amount": record.amount,
            "currency": record.currency,
            "host_currency_fx_rate": str(record.host_currency_fx_rate),
            "fees_payer": expense.fees_payer,
        },
    )
    return Transaction.objects.create_double_entry(record)
