from django.db import models
from django.contrib.auth.models import User
from contacts.models import Contact


class Campaign(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="campaigns")
    message = models.TextField()
    attachment_size_bytes = models.PositiveIntegerField(default=0)
    scheduled_at = models.DateTimeField()
    recipients = models.ManyToManyField(Contact, related_name="campaigns", blank=True)
    recipient_count = models.PositiveIntegerField(default=0)
    total_cost = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "campaigns"
        ordering = ["-scheduled_at"]

    def __str__(self):
        return f"Campaign #{self.id} → {self.recipient_count} recipient(s) at {self.scheduled_at}"
