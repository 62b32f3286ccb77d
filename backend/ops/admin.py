from django.contrib import admin
from .models import Heartbeat

@admin.register(Heartbeat)
class HeartbeatAdmin(admin.ModelAdmin):
    list_display = ("key", "seen_at")
    ordering = ("key",)
    readonly_fields = ("seen_at",)
