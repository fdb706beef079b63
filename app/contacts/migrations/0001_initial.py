# Generated manually - Initial contacts schema

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Contact",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "display_name",
                    models.CharField(
                        help_text="Custom name shown to the owner for this user",
                        max_length=100,
                    ),
                ),
                (
                    "contact_user",
                    models.ForeignKey(
                        help_text="User this contact entry refers to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        help_text="User who owns this contact entry",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="contacts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "contacts_contact",
                "ordering": ["display_name", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("owner", "contact_user"),
                        name="unique_contact_per_owner",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("owner", models.F("contact_user")), _negated=True
                        ),
                        name="contact_owner_not_self",
                    ),
                ],
            },
        ),
    ]
