from django.db import models
from django.utils import timezone

BEAT = "beat"


class Heartbeat(models.Model):
    """Last time a periodic component checked in, one row per key."""
    key = models.CharField(max_length=32, unique=True)
    seen_at = models.DateTimeField(default=timezone.now, db_index=True)

    def __str__(self):
        return f"{self.key} @ {self.seen_at}"

    @classmethod
    def touch(cls, key=BEAT):
        beat, _ = cls.objects.update_or_create(key=key, defaults={"seen_at": timezone.now()})
        return beat

    @classmethod
    def is_fresh(cls, key, max_age_seconds):
        beat = cls.objects.filter(key=key).first()
        if beat is None:
            return False
        return (timezone.now() - beat.seen_at).total_seconds() < max_age_seconds
