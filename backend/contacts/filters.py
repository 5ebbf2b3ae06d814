import django_filters
from .models import Contact


class ContactFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    phone = django_filters.CharFilter(field_name="phone", lookup_expr="contains")
    email = django_filters.CharFilter(field_name="email", lookup_expr="icontains")

    class Meta:
        model = Contact
        fields = ["name", "phone", "email"]
