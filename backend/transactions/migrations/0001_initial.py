import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("collectives", "0001_initial"),
        ("expenses", "0001_initial"),
        ("orders", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Transaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("public_id", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("transaction_group", models.UUIDField(db_index=True, help_text="Shared by both rows of a double entry")),
                ("type", models.CharField(choices=[("CREDIT", "Credit"), ("DEBIT", "Debit")], max_length=6)),
                ("kind", models.CharField(choices=[("ADDED_FUNDS", "Added Funds"), ("BALANCE_TRANSFER", "Balance Transfer"), ("CONTRIBUTION", "Contribution"), ("EXPENSE", "Expense"), ("HOST_FEE", "Host Fee"), ("HOST_FEE_SHARE", "Host Fee Share"), ("HOST_FEE_SHARE_DEBT", "Host Fee Share Debt"), ("PAYMENT_PROCESSOR_COVER", "Cover of Payment Processor Fee"), ("PLATFORM_TIP", "Platform Tip"), ("PLATFORM_TIP_DEBT", "Platform Tip Debt"), ("PREPAID_PAYMENT_METHOD", "Prepaid Payment Method")], max_length=30)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("amount", models.BigIntegerField()),
                ("currency", models.CharField(max_length=3)),
                ("net_amount_in_collective_currency", models.BigIntegerField()),
                ("amount_in_host_currency", models.BigIntegerField(blank=True, null=True)),
                ("host_currency", models.CharField(blank=True, default="", max_length=3)),
                ("host_currency_fx_rate", models.DecimalField(decimal_places=10, default=1, help_text="Rate to convert collective currency to host currency", max_digits=20)),
                ("payment_processor_fee_in_host_currency", models.BigIntegerField(default=0)),
                ("host_fee_in_host_currency", models.BigIntegerField(default=0)),
                ("platform_fee_in_host_currency", models.BigIntegerField(default=0)),
                ("tax_amount", models.BigIntegerField(blank=True, help_text="Tax withheld, in collective currency. Null when not taxed.", null=True)),
                ("payment_method_id", models.PositiveIntegerField(blank=True, null=True)),
                ("is_refund", models.BooleanField(default=False)),
                ("is_debt", models.BooleanField(default=False)),
                ("data", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("collective", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="transactions", to="collectives.collective")),
                ("created_by_user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_transactions", to=settings.AUTH_USER_MODEL)),
                ("expense", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="transactions", to="expenses.expense")),
                ("from_collective", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="outgoing_transactions", to="collectives.collective")),
                ("host", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="host_transactions", to="collectives.collective")),
                ("order", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="transactions", to="orders.order")),
                ("payout_method", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="transactions", to="expenses.payoutmethod")),
                ("refund_transaction", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="refunds", to="transactions.transaction")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["collective", "created_at"], name="tx_collective_created_idx")],
            },
        ),
    ]
