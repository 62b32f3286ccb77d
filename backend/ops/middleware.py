import json, time, logging, os
from django.utils.deprecation import MiddlewareMixin
from django.utils.timezone import now

log = logging.getLogger("request")
REDACT = os.getenv("REDACT_PII_IN_LOGS", "1") == "1"
LOG_REQUESTS = os.getenv("LOG_REQUESTS", "1") == "1"

REDACT_KEYS = {"password", "customer_phone_number", "phone_number", "email"}

def _scrub(keys):
    if not REDACT:
        return list(keys)
    return [k if k.lower() not in REDACT_KEYS else "***redacted***" for k in keys]

class RequestLogMiddleware(MiddlewareMixin):
    def process_request(self, request):
        if not LOG_REQUESTS: return
        request._ts = time.time()

    def process_response(self, request, response):
        if not LOG_REQUESTS: return response
        try:
            dur = time.time() - getattr(request, "_ts", time.time())
            u = getattr(request, "user", None)
            authed = bool(u and u.is_authenticated)
            payload = {
                "ts": now().isoformat(),
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "duration_ms": int(dur*1000),
                "user": (u.pk if authed else None),
                "role": (u.role if authed else None),
                "ip": request.META.get("REMOTE_ADDR"),
                "ua": request.META.get("HTTP_USER_AGENT", ""),
            }
            # Only log POST bodies minimally
            if request.method in ("POST", "PUT", "PATCH"):
                payload["body_keys"] = _scrub(getattr(request, "POST", {}).keys())
            log.info(json.dumps(payload))
        except Exception:
            log.exception("request log failed for %s", request.path)
        return response
