import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("collectives", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Subscription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("interval", models.CharField(blank=True, choices=[("month", "Monthly"), ("year", "Yearly")], default="", max_length=8)),
                ("amount", models.BigIntegerField()),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
            ],
        ),
        migrations.CreateModel(
            name="Tier",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("type", models.CharField(choices=[("TIER", "Tier"), ("MEMBERSHIP", "Membership"), ("DONATION", "Donation"), ("TICKET", "Ticket"), ("SERVICE", "Service"), ("PRODUCT", "Product")], default="TIER", max_length=20)),
                ("amount", models.BigIntegerField(blank=True, null=True)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("collective", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="tiers", to="collectives.collective")),
            ],
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("total_amount", models.BigIntegerField()),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("collective", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="orders", to="collectives.collective")),
                ("from_collective", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="submitted_orders", to="collectives.collective")),
                ("subscription", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="orders", to="orders.subscription")),
                ("tier", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="orders", to="orders.tier")),
            ],
        ),
    ]
