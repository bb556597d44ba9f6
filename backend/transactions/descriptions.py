# transactions/descriptions.py
"""
Human-readable transaction descriptions.

Examples:
    Monthly contribution from Alice (Backer)
    Expense from Open Source Co - Server hosting
    Refund of "Contribution from Bob"
    Platform Tip owed by Alice
"""

from django.utils.text import Truncator

from expenses.models import Expense
from orders.models import Subscription, Tier
from transactions.models import Transaction

FINANCIAL_CONTRIBUTION_PREFIX = "Financial contribution to"
TIER_NAME_MAX_LENGTH = 128

KIND_STRINGS = {kind.value: kind.label for kind in Transaction.Kind}


def _name(collective) -> str:
    return collective.name.strip()


def _base_and_suffixes(transaction):
    """Return (base, tier_string, extra_string) from the transaction kind."""
    base = KIND_STRINGS.get(transaction.kind, "Transaction")
    tier_string = ""
    extra_string = ""
    order = transaction.order if transaction.order_id else None

    if transaction.kind == Transaction.Kind.CONTRIBUTION:
        tier = order.tier if order is not None and order.tier_id else None
        if tier is not None:
            tier_name = Truncator(tier.name).chars(TIER_NAME_MAX_LENGTH, truncate="...")
            tier_string = f" ({tier_name})"
        subscription = order.subscription if order is not None and order.subscription_id else None
        interval = subscription.interval if subscription is not None else None
        if interval == Subscription.Interval.MONTH:
            base = "Monthly contribution"
        elif interval == Subscription.Interval.YEAR:
            base = "Yearly contribution"
        elif tier is not None and tier.type == Tier.Type.TICKET:
            base = "Registration"

    elif transaction.kind == Transaction.Kind.ADDED_FUNDS:
        if order is not None and order.description and FINANCIAL_CONTRIBUTION_PREFIX not in order.description:
            extra_string = f" - {order.description}"
        elif transaction.description and FINANCIAL_CONTRIBUTION_PREFIX not in transaction.description:
            extra_string = f" - {transaction.description}"

    elif transaction.kind == Transaction.Kind.EXPENSE:
        expense = transaction.expense if transaction.expense_id else None
        if expense is not None:
            if expense.type == Expense.Type.CHARGE:
                base = "Virtual Card charge"
            else:
                extra_string = f" - {expense.description}"

    return base, tier_string, extra_string


def _direction(transaction, full: bool):
    """Return (debt_string, from_string, to_string)."""
    account = _name(transaction.collective)
    opposite_account = _name(transaction.from_collective)
    is_credit = transaction.type == Transaction.Type.CREDIT
    debt_string = from_string = to_string = ""

    if transaction.is_debt:
        debt_string = " owed"
        if is_credit:
            if full:
                to_string = f" by {account}"
            from_string = f" to {opposite_account}"
        else:
            from_string = f" by {opposite_account}"
            if full:
                to_string = f" to {account}"
    elif transaction.kind == Transaction.Kind.EXPENSE:
        if is_credit:
            if full:
                from_string = f" from {account}"
            to_string = f" to {opposite_account}"
        else:
            from_string = f" from {opposite_account}"
            if full:
                to_string = f" to {account}"
    else:
        if is_credit:
            from_string = f" from {opposite_account}"
            if full:
                to_string = f" to {account}"
        else:
            if full:
                from_string = f" from {account}"
            to_string = f" to {opposite_account}"

    return debt_string, from_string, to_string


def generate_description(transaction, *, full: bool = False) -> str:
    """
    Describe a transaction from the point of view of its collective.

    Args:
        transaction: A Transaction; related rows are read through its relations
        full: Also name the transaction's own collective

    Returns:
        The description string
    """
    if transaction.is_refund and transaction.refund_transaction_id:
        refunded = transaction.refund_transaction
        if refunded is not None:
            return f'Refund of "{generate_description(refunded, full=full)}"'

    base, tier_string, extra_string = _base_and_suffixes(transaction)
    debt_string, from_string, to_string = _direction(transaction, full)
    return f"{base}{debt_string}{from_string}{to_string}{tier_string}{extra_string}"
