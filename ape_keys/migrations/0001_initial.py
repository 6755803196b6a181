from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import ape_keys.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ApeKey",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=ape_keys.models.generate_ape_key_id,
                        editable=False,
                        max_length=24,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=20)),
                ("enabled", models.BooleanField(default=True)),
                ("key_hash", models.CharField(max_length=128)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("modified_at", models.DateTimeField(auto_now=True)),
                (
                    "last_used_at",
                    models.DateTimeField(blank=True, null=True),
                ),
                ("use_count", models.PositiveIntegerField(default=0)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ape_keys",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="apekey",
            index=models.Index(
                fields=["user", "created_at"],
                name="ape_keys_user_created_idx",
            ),
        ),
    ]
