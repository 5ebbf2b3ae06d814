from django.db import models
from django.contrib.auth.models import User
from units.models import Unit


class PricingOverride(models.Model):
    """
    A named fixed nightly price for a set of units over ``[start_date, end_date]``
    (both days included). When several overrides cover the same unit and night,
    the most recently created one (highest id) wins.
    """

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="pricing_overrides"
    )
    name = models.CharField(max_length=255)
    start_date = models.DateField()
    end_date = models.DateField()
    units = models.ManyToManyField(Unit, related_name="pricing_overrides")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Nightly price while the override applies",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "pricing_overrides"
        ordering = ["-id"]

    def __str__(self):
        return f"{self.name} ({self.start_date} → {self.end_date}): {self.price}"

    @property
    def unit_ids(self):
        return {unit.id for unit in self.units.all()}

    def covers(self, unit_id, day):
        return self.start_date <= day <= self.end_date and unit_id in self.unit_ids
