import logging

log = logging.getLogger(__name__)


def client_ip(request):
    """First hop of X-Forwarded-For when behind the proxy, else REMOTE_ADDR."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR")


def audit_log(user, action, target=None, payload=None, request=None):
    from .models import AuditLog
    actor = user if user is not None and user.is_authenticated else None
    entry = AuditLog.objects.create(
        actor=actor,
        actor_email=actor.email if actor else "",
        action=action,
        target_app=target._meta.app_label if target is not None else "",
        target_model=target._meta.model_name if target is not None else "",
        target_id=str(target.pk) if target is not None else "",
        payload=payload or {},
        ip=client_ip(request) if request else None,
        user_agent=request.META.get("HTTP_USER_AGENT", "") if request else "",
    )
    log.info("audit %s %s:%s by %s", action, entry.target_model, entry.target_id, entry.actor_email or "-")
    return entry
