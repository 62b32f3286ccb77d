from django.db import models

from common.models import VersionedModel


class PickupLocation(VersionedModel):
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name
