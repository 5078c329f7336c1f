"""
Push ride events to chairs over the channel layer.

Each chair listens on its personal group: chair_<chair_id>
"""

import logging
from typing import Any, Dict

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def notify_chair_event(
    event_type: str,
    ride,
    message: str = "",
    extra: Dict[str, Any] = None,
) -> bool:
    """
    Send a ride event to the chair assigned to ``ride``.

    Args:
        event_type: Handler name in the chair's consumer (e.g. ride_matched)
        ride: Ride model instance with a chair
        message: Optional message to include
        extra: Additional payload data

    Returns:
        True if sent successfully, False otherwise
    """
    if not ride.chair_id:
        return False

    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("No channel layer available for chair notifications")
        return False

    from rides.serializers import RideSerializer

    payload = {
        "type": event_type,
        "ride_id": ride.id,
        "chair_id": ride.chair_id,
        "ride_data": RideSerializer(ride).data,
        **(extra or {}),
    }

    if message:
        payload["message"] = message

    try:
        logger.debug("WS -> chair_%s: %s", ride.chair_id, payload)
        async_to_sync(channel_layer.group_send)(f"chair_{ride.chair_id}", payload)
    except Exception:
        logger.exception("Failed to notify chair %s for ride %s", ride.chair_id, ride.id)
        return False

    return True
