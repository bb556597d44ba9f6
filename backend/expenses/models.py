# expenses/models.py
"""
Expense models.

Models:
- PayoutMethod: Where a payee wants to receive money
- Expense: A payment request, in its own currency, against a collective
"""

import uuid

from django.conf import settings
from django.db import models

from collectives.models import Collective


class PayoutMethod(models.Model):
    class Type(models.TextChoices):
        PAYPAL = "PAYPAL", "PayPal"
        BANK_ACCOUNT = "BANK_ACCOUNT", "Bank account"
        ACCOUNT_BALANCE = "ACCOUNT_BALANCE", "Account balance"
        OTHER = "OTHER", "Other"

    collective = models.ForeignKey(
        Collective,
        on_delete=models.CASCADE,
        related_name="payout_methods",
    )
    type = models.CharField(max_length=20, choices=Type.choices)
    name = models.CharField(max_length=255, blank=True, default="")
    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.get_type_display()} for {self.collective_id}"


class Expense(models.Model):
    """
    A payment request submitted by a payee (`from_collective`) to a collective.

    `amount` is in minor units of `currency`, which may differ from both the
    collective's and the host's currency. Tax lines live in `data["taxes"]`
    as `{"type": "VAT", "rate": 0.21, ...}` with the rate as a fraction.
    """

    class Type(models.TextChoices):
        INVOICE = "INVOICE", "Invoice"
        RECEIPT = "RECEIPT", "Receipt"
        GRANT = "GRANT", "Grant"
        CHARGE = "CHARGE", "Virtual card charge"
        SETTLEMENT = "SETTLEMENT", "Settlement"
        UNCLASSIFIED = "UNCLASSIFIED", "Unclassified"

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        PROCESSING = "PROCESSING", "Processing"
        PAID = "PAID", "Paid"
        REJECTED = "REJECTED", "Rejected"

    class FeesPayer(models.TextChoices):
        COLLECTIVE = "COLLECTIVE", "Collective"
        PAYEE = "PAYEE", "Payee"

    public_id = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
    )
    collective = models.ForeignKey(
        Collective,
        on_delete=models.PROTECT,
        related_name="expenses",
    )
    from_collective = models.ForeignKey(
        Collective,
        on_delete=models.PROTECT,
        related_name="submitted_expenses",
        help_text="Payee",
    )
    payout_method = models.ForeignKey(
        PayoutMethod,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="expenses",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="created_expenses",
    )
    type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.INVOICE,
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    description = models.CharField(max_length=255, blank=True, default="")
    amount = models.BigIntegerField(help_text="Minor units of the expense currency")
    currency = models.CharField(max_length=3, default="USD")
    fees_payer = models.CharField(
        max_length=20,
        choices=FeesPayer.choices,
        default=FeesPayer.COLLECTIVE,
    )
    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Expense #{self.pk} {self.amount} {self.currency}"

    @property
    def taxes(self) -> list:
        """Recorded tax lines, empty when the expense is not taxed."""
        return list((self.data or {}).get("taxes") or [])
