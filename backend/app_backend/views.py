import os
import redis
from django.utils import timezone
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status
from channels.layers import get_channel_layer

from rides.models import Ride
from rides.tasks import run_matching_cycle_task


def _check_database():
    Ride.objects.filter(chair__isnull=True).exists()


def _check_redis():
    redis.Redis(
        host=os.getenv("REDIS_HOST", "localhost"),
        port=int(os.getenv("REDIS_PORT", 6379)),
        db=0,
        socket_timeout=3
    ).ping()


def _check_channels():
    if get_channel_layer() is None:
        raise RuntimeError("no channel layer")


def _check_celery():
    if run_matching_cycle_task.name not in run_matching_cycle_task.app.tasks:
        raise RuntimeError("matching task not registered")


HEALTH_CHECKS = {
    "database": _check_database,
    "redis": _check_redis,
    "channels": _check_channels,
    "celery": _check_celery,
}


@api_view(["GET"])
def health_check(request):
    """Health check endpoint for monitoring system status"""

    health_status = {
        "status": "healthy",
        "timestamp": timezone.now().isoformat(),
        "services": {}
    }

    for name, check in HEALTH_CHECKS.items():
        try:
            check()
            health_status["services"][name] = "healthy"
        except Exception as e:
            health_status["services"][name] = f"unhealthy: {e}"
            health_status["status"] = "unhealthy"

    status_code = (
        status.HTTP_200_OK
        if health_status["status"] == "healthy"
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )

    return Response(health_status, status=status_code)
