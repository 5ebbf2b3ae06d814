import django_filters
from .models import Booking


class BookingFilter(django_filters.FilterSet):
    check_in_from = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_to = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["unit", "contact", "status", "kind", "check_in_from", "check_in_to"]
