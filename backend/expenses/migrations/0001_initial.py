import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("collectives", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PayoutMethod",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("PAYPAL", "PayPal"), ("BANK_ACCOUNT", "Bank account"), ("ACCOUNT_BALANCE", "Account balance"), ("OTHER", "Other")], max_length=20)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("data", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("collective", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payout_methods", to="collectives.collective")),
            ],
        ),
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("public_id", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("type", models.CharField(choices=[("INVOICE", "Invoice"), ("RECEIPT", "Receipt"), ("GRANT", "Grant"), ("CHARGE", "Virtual card charge"), ("SETTLEMENT", "Settlement"), ("UNCLASSIFIED", "Unclassified")], default="INVOICE", max_length=20)),
                ("status", models.CharField(choices=[("PENDING", "Pending"), ("APPROVED", "Approved"), ("PROCESSING", "Processing"), ("PAID", "Paid"), ("REJECTED", "Rejected")], default="PENDING", max_length=20)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("amount", models.BigIntegerField(help_text="Minor units of the expense currency")),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("fees_payer", models.CharField(choices=[("COLLECTIVE", "Collective"), ("PAYEE", "Payee")], default="COLLECTIVE", max_length=20)),
                ("data", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("collective", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="expenses", to="collectives.collective")),
                ("from_collective", models.ForeignKey(help_text="Payee", on_delete=django.db.models.deletion.PROTECT, related_name="submitted_expenses", to="collectives.collective")),
                ("payout_method", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="expenses", to="expenses.payoutmethod")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_expenses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
