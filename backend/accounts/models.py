from django.conf import settings
from django.db import models
from django.contrib.auth.models import User

from .formatting import CURRENCIES, CURRENCY_NAMES


class AccountSettings(models.Model):
    Currency = models.TextChoices(
        "Currency", [(code, CURRENCY_NAMES[code]) for code in CURRENCIES]
    )

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="account_settings")
    business_name = models.CharField(max_length=255, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    currency = models.CharField(max_length=3, choices=Currency.choices, default=settings.DEFAULT_CURRENCY)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "account_settings"

    def __str__(self):
        return self.business_name or f"Account settings of {self.user}"

    @classmethod
    def for_user(cls, user):
        account, _ = cls.objects.get_or_create(
            user=user, defaults={"email": user.email or ""}
        )
        return account
