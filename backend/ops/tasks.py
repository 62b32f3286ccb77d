import logging

from celery import shared_task

from .models import BEAT, Heartbeat

log = logging.getLogger(__name__)


@shared_task
def beat_heartbeat():
    """Scheduled every minute by celery beat; /healthz/ reads the timestamp."""
    beat = Heartbeat.touch(BEAT)
    log.debug("beat heartbeat at %s", beat.seen_at)
    return "ok"
