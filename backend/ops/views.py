from django.db import connection
from django.http import JsonResponse

from .models import BEAT, Heartbeat

# beat ticks every minute; three missed ticks means it is down
BEAT_MAX_AGE_SECONDS = 180


def healthz(request):
    with connection.cursor() as cur:
        cur.execute("SELECT 1")
    return JsonResponse({"ok": True, "celery_beat_ok": Heartbeat.is_fresh(BEAT, BEAT_MAX_AGE_SECONDS)})
