# transactions/models.py
"""
Ledger models.

Transactions are append-only: every economic event is written once as a
pair of rows (one DEBIT, one CREDIT) sharing a `transaction_group`, through
`Transaction.objects.create_double_entry`. Rows are never updated afterwards.
"""

import logging
import uuid

from django.conf import settings
from django.db import models, transaction as db_transaction
from django.utils import timezone

from collectives.models import Collective
from expenses.models import Expense, PayoutMethod
from orders.models import Order
from transactions.rounding import round_half_up
from transactions.types import TransactionRecord

logger = logging.getLogger(__name__)


class TransactionManager(models.Manager):

    def create_double_entry(self, record) -> "Transaction":
        """
        Write `record` and its mirror row atomically.

        The mirror swaps the collective and from_collective, flips the type
        and exchanges gross and net amounts. Returns the row for `record`.

        Raises:
            ValueError: If the record has no counterpart account.
        """
        if isinstance(record, TransactionRecord):
            kwargs = record.to_model_kwargs()
        else:
            kwargs = dict(record)

        if not kwargs.get("from_collective_id"):
            raise ValueError("A double entry requires a from_collective to mirror the transaction into.")

        kwargs.setdefault("transaction_group", uuid.uuid4())
        opposite_kwargs = self._opposite_kwargs(kwargs)

        with db_transaction.atomic(using=self.db):
            primary = self.create(**kwargs)
            opposite = self.create(**opposite_kwargs)

        logger.info(
            "Double entry recorded",
            extra={
                "transaction_group": str(primary.transaction_group),
                "kind": primary.kind,
                "debit_id": primary.pk if primary.type == Transaction.Type.DEBIT else opposite.pk,
                "credit_id": opposite.pk if primary.type == Transaction.Type.DEBIT else primary.pk,
            },
        )
        return primary

    @staticmethod
    def _opposite_kwargs(kwargs: dict) -> dict:
        rate = kwargs.get("host_currency_fx_rate") or 1
        net = kwargs["net_amount_in_collective_currency"]
        opposite = dict(kwargs)
        opposite.update(
            type=(
                Transaction.Type.CREDIT
                if kwargs["type"] == Transaction.Type.DEBIT
                else Transaction.Type.DEBIT
            ),
            collective_id=kwargs["from_collective_id"],
            from_collective_id=kwargs["collective_id"],
            host_id=None,
            amount=-net,
            net_amount_in_collective_currency=-kwargs["amount"],
            amount_in_host_currency=-round_half_up(net * rate),
        )
        return opposite


class Transaction(models.Model):
    """
    One side of a double entry.

    Amounts are integers in minor units. `amount` and
    `net_amount_in_collective_currency` are in `currency` (the collective's
    currency); `amount_in_host_currency` and the fees are in `host_currency`.
    `host_currency_fx_rate` converts collective currency to host currency.
    """

    class Type(models.TextChoices):
        CREDIT = "CREDIT", "Credit"
        DEBIT = "DEBIT", "Debit"

    class Kind(models.TextChoices):
        ADDED_FUNDS = "ADDED_FUNDS", "Added Funds"
        BALANCE_TRANSFER = "BALANCE_TRANSFER", "Balance Transfer"
        CONTRIBUTION = "CONTRIBUTION", "Contribution"
        EXPENSE = "EXPENSE", "Expense"
        HOST_FEE = "HOST_FEE", "Host Fee"
        HOST_FEE_SHARE = "HOST_FEE_SHARE", "Host Fee Share"
        HOST_FEE_SHARE_DEBT = "HOST_FEE_SHARE_DEBT", "Host Fee Share Debt"
        PAYMENT_PROCESSOR_COVER = "PAYMENT_PROCESSOR_COVER", "Cover of Payment Processor Fee"
        PLATFORM_TIP = "PLATFORM_TIP", "Platform Tip"
        PLATFORM_TIP_DEBT = "PLATFORM_TIP_DEBT", "Platform Tip Debt"
        PREPAID_PAYMENT_METHOD = "PREPAID_PAYMENT_METHOD", "Prepaid Payment Method"

    objects = TransactionManager()

    public_id = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
    )
    transaction_group = models.UUIDField(
        db_index=True,
        help_text="Shared by both rows of a double entry",
    )
    type = models.CharField(max_length=6, choices=Type.choices)
    kind = models.CharField(max_length=30, choices=Kind.choices)
    description = models.CharField(max_length=255, blank=True, default="")

    # Collective currency
    amount = models.BigIntegerField()
    currency = models.CharField(max_length=3)
    net_amount_in_collective_currency = models.BigIntegerField()

    # Host currency
    amount_in_host_currency = models.BigIntegerField(null=True, blank=True)
    host_currency = models.CharField(max_length=3, blank=True, default="")
    host_currency_fx_rate = models.DecimalField(
        max_digits=20,
        decimal_places=10,
        default=1,
        help_text="Rate to convert collective currency to host currency",
    )
    payment_processor_fee_in_host_currency = models.BigIntegerField(default=0)
    host_fee_in_host_currency = models.BigIntegerField(default=0)
    platform_fee_in_host_currency = models.BigIntegerField(default=0)

    tax_amount = models.BigIntegerField(
        null=True,
        blank=True,
        help_text="Tax withheld, in collective currency. Null when not taxed.",
    )

    collective = models.ForeignKey(
        Collective,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    from_collective = models.ForeignKey(
        Collective,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="outgoing_transactions",
    )
    host = models.ForeignKey(
        Collective,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="host_transactions",
    )
    expense = models.ForeignKey(
        Expense,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    order = models.ForeignKey(
        Order,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    payout_method = models.ForeignKey(
        PayoutMethod,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="transactions",
    )
    # Legacy link to the payment method of a PayPal adaptive payment.
    payment_method_id = models.PositiveIntegerField(null=True, blank=True)
    created_by_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="created_transactions",
    )

    is_refund = models.BooleanField(default=False)
    refund_transaction = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="refunds",
    )
    is_debt = models.BooleanField(default=False)

    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["collective", "created_at"], name="tx_collective_created_idx"),
        ]

    def __str__(self):
        return f"{self.type} {self.kind} {self.amount} {self.currency}"

    def save(self, *args, **kwargs):
        # Prevent updates (immutability)
        if not self._state.adding:
            raise ValueError(
                "Transactions are immutable once recorded. "
                "Record a new double entry instead of editing this one."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Transactions are immutable and cannot be deleted.")

    @property
    def net_amount_in_host_currency(self) -> int:
        return round_half_up(self.net_amount_in_collective_currency * (self.host_currency_fx_rate or 1))

    def get_opposite(self):
        """The other row of this double entry."""
        return (
            Transaction.objects.filter(transaction_group=self.transaction_group)
            .exclude(pk=self.pk)
            .first()
        )
