from django.db import models
from django.utils import timezone
from accounts.models import User


class AuditAction(models.TextChoices):
    ORDER_SAVED = "ORDER_SAVED", "Order saved"
    ORDER_STATE_CHANGED = "ORDER_STATE_CHANGED", "Order state changed"
    USER_SAVED = "USER_SAVED", "User saved"
    USER_DELETED = "USER_DELETED", "User deleted"
    PICKUP_LOCATION_SAVED = "PICKUP_LOCATION_SAVED", "Pickup location saved"
    PICKUP_LOCATION_DELETED = "PICKUP_LOCATION_DELETED", "Pickup location deleted"


class AuditLog(models.Model):
    """One row per staff write. ``actor_email`` survives the actor being deleted."""
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    actor = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name="audit_logs")
    actor_email = models.EmailField(blank=True)
    action = models.CharField(max_length=64, choices=AuditAction.choices)
    target_app = models.CharField(max_length=64, blank=True)
    target_model = models.CharField(max_length=64, blank=True)
    target_id = models.CharField(max_length=64, blank=True)
    payload = models.JSONField(default=dict, blank=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["action", "created_at"], name="audit_audit_action_4f1c8e_idx")]

    def __str__(self):
        return f"{self.created_at:%Y-%m-%d %H:%M} {self.action} by {self.actor_email or 'anonymous'}"
