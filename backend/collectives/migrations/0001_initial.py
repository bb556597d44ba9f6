import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Collective",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("public_id", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("type", models.CharField(choices=[("COLLECTIVE", "Collective"), ("ORGANIZATION", "Organization"), ("USER", "User"), ("FUND", "Fund"), ("EVENT", "Event"), ("PROJECT", "Project")], default="COLLECTIVE", max_length=20)),
                ("currency", models.CharField(default="USD", help_text="ISO 4217 code the collective keeps its books in", max_length=3)),
                ("is_host", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("host", models.ForeignKey(blank=True, help_text="Fiscal host holding funds on behalf of this collective", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="hosted_collectives", to="collectives.collective")),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
    ]
