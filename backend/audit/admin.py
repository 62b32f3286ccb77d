from django.contrib import admin
from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "action", "actor_email", "target_model", "target_id", "ip")
    list_filter = ("action", "target_model")
    search_fields = ("actor_email", "target_id")
    date_hierarchy = "created_at"

    # the log is append-only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
