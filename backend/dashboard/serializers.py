# dashboard/serializers.py
from rest_framework import serializers
from bookings.serializers import BookingSerializer


class StatsQuerySerializer(serializers.Serializer):
    # Both days included
    date_from = serializers.DateField()
    date_to = serializers.DateField()


class MonthlyPointSerializer(serializers.Serializer):
    name = serializers.CharField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    bookings = serializers.IntegerField()


class StatsSerializer(serializers.Serializer):
    total_bookings = serializers.IntegerField()
    total_units = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    occupancy_rate = serializers.FloatField()
    occupancy_display = serializers.CharField()
    total_revenue_display = serializers.CharField()


class DashboardSerializer(serializers.Serializer):
    date_from = serializers.DateField()
    date_to = serializers.DateField()
    stats = StatsSerializer()
    monthly = MonthlyPointSerializer(many=True)
    recent_bookings = BookingSerializer(many=True)
