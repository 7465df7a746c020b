import time

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone

_STARTED_AT = time.monotonic()


def health(request):
    return JsonResponse({
        "status": "OK",
        "timestamp": timezone.now().isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "environment": "development" if settings.DEBUG else "production",
    })
