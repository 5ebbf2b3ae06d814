from django.db import models
from units.models import Unit


class ExternalCalendar(models.Model):
    """An iCal feed from another channel, subscribed to for one unit."""

    unit = models.ForeignKey(
        Unit, on_delete=models.CASCADE, related_name="external_calendars"
    )
    name = models.CharField(max_length=255)
    url = models.URLField(max_length=1000)
    last_synced = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "external_calendars"
        ordering = ["unit_id", "name"]

    def __str__(self):
        return f"{self.name} ({self.unit.name})"
