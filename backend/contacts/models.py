from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinValueValidator, MaxValueValidator


class Contact(models.Model):
    class Payment(models.TextChoices):
        PAID = "Paid", "Paid"
        PENDING = "Pending", "Pending"

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="contacts")

    # Basic Information
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=30, blank=True, default="")
    email = models.EmailField(blank=True, default="", db_index=True)

    # Maintained by booking and review flows
    review = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(5)],
        help_text="Rounded mean of the contact's review ratings (0 when none)",
    )
    payment = models.CharField(
        max_length=10, choices=Payment.choices, default=Payment.PENDING
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "contacts"
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} <{self.email}>" if self.email else self.name


class Review(models.Model):
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviews",
    )
    contact = models.ForeignKey(
        Contact,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviews",
    )
    unit = models.ForeignKey(
        "units.Unit", on_delete=models.CASCADE, related_name="reviews"
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    feedback = models.TextField(blank=True, default="")
    date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "reviews"
        ordering = ["-date", "-id"]

    def __str__(self):
        return f"Review #{self.id} ({self.rating}/5)"
