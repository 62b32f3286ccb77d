from django.db import models
from django.utils import timezone

from .exceptions import OptimisticLockError


class VersionedModel(models.Model):
    """
    Adds a version column that is bumped on every save of an existing row.

    Saving an instance whose version no longer matches the stored row raises
    OptimisticLockError and writes nothing. Callers are expected to save inside
    transaction.atomic so the bump rolls back with the rest of their work.
    """
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self._state.adding or self.pk is None:
            return super().save(*args, **kwargs)

        expected = self.version
        bumped = (type(self)._base_manager
                  .filter(pk=self.pk, version=expected)
                  .update(version=expected + 1))
        if not bumped:
            raise OptimisticLockError(self)
        self.version = expected + 1

        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"version", "updated_at"}
        return super().save(*args, **kwargs)
