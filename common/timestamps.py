"""
common.timestamps
~~~~~~~~~~~~~~~~~
Handler-side timestamps.  The store never sets ``created_at``/``updated_at``
itself; every write stamps them with one value taken per request.
"""
from django.utils import timezone


def now_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return timezone.now().isoformat()
