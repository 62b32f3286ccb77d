from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("actor_email", models.EmailField(blank=True, max_length=254)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("ORDER_SAVED", "Order saved"),
                            ("ORDER_STATE_CHANGED", "Order state changed"),
                            ("USER_SAVED", "User saved"),
                            ("USER_DELETED", "User deleted"),
                            ("PICKUP_LOCATION_SAVED", "Pickup location saved"),
                            ("PICKUP_LOCATION_DELETED", "Pickup location deleted"),
                        ],
                        max_length=64,
                    ),
                ),
                ("target_app", models.CharField(blank=True, max_length=64)),
                ("target_model", models.CharField(blank=True, max_length=64)),
                ("target_id", models.CharField(blank=True, max_length=64)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("ip", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True)),
                (
                    "actor",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="audit_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["action", "created_at"], name="audit_audit_action_4f1c8e_idx")],
            },
        ),
    ]
