from django.conf import settings


def export_url(unit):
    """Public iCal URL other channels can subscribe to for ``unit``."""
    base = settings.CALENDAR_EXPORT_BASE_URL.rstrip("/")
    return f"{base}/unit-{unit.id}.ics"


def is_ics_url(url):
    return bool(url) and url.strip().lower().endswith(".ics")
