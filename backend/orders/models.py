# orders/models.py
"""
Contribution models.

Only the fields read when describing contribution transactions are kept:
- Tier: What a contributor picked (membership level, event ticket, ...)
- Subscription: Recurrence of a contribution
- Order: One contribution from a contributor to a collective
"""

from django.db import models

from collectives.models import Collective


class Tier(models.Model):
    class Type(models.TextChoices):
        TIER = "TIER", "Tier"
        MEMBERSHIP = "MEMBERSHIP", "Membership"
        DONATION = "DONATION", "Donation"
        TICKET = "TICKET", "Ticket"
        SERVICE = "SERVICE", "Service"
        PRODUCT = "PRODUCT", "Product"

    collective = models.ForeignKey(
        Collective,
        on_delete=models.CASCADE,
        related_name="tiers",
    )
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.TIER)
    amount = models.BigIntegerField(null=True, blank=True)
    currency = models.CharField(max_length=3, default="USD")

    def __str__(self):
        return self.name


class Subscription(models.Model):
    class Interval(models.TextChoices):
        MONTH = "month", "Monthly"
        YEAR = "year", "Yearly"

    interval = models.CharField(max_length=8, choices=Interval.choices, blank=True, default="")
    amount = models.BigIntegerField()
    currency = models.CharField(max_length=3, default="USD")
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return f"{self.amount} {self.currency}/{self.interval}"


class Order(models.Model):
    collective = models.ForeignKey(
        Collective,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    from_collective = models.ForeignKey(
        Collective,
        on_delete=models.PROTECT,
        related_name="submitted_orders",
    )
    tier = models.ForeignKey(
        Tier,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="orders",
    )
    subscription = models.ForeignKey(
        Subscription,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="orders",
    )
    description = models.CharField(max_length=255, blank=True, default="")
    total_amount = models.BigIntegerField()
    currency = models.CharField(max_length=3, default="USD")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Order #{self.pk}"
