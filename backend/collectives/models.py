# collectives/models.py
import uuid

from django.db import models


class Collective(models.Model):
    """
    An account on the platform.

    The same table holds collectives, their fiscal hosts and the payees
    of expenses. `currency` is the currency the account keeps its books in;
    a collective may or may not share its host's currency.
    """

    class Type(models.TextChoices):
        COLLECTIVE = "COLLECTIVE", "Collective"
        ORGANIZATION = "ORGANIZATION", "Organization"
        USER = "USER", "User"
        FUND = "FUND", "Fund"
        EVENT = "EVENT", "Event"
        PROJECT = "PROJECT", "Project"

    public_id = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
    )
    slug = models.SlugField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.COLLECTIVE,
    )
    currency = models.CharField(
        max_length=3,
        default="USD",
        help_text="ISO 4217 code the collective keeps its books in",
    )
    host = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="hosted_collectives",
        help_text="Fiscal host holding funds on behalf of this collective",
    )
    is_host = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} ({self.currency})"
