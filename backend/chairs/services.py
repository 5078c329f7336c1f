import logging

from django.conf import settings
from django.core.cache import cache

from chairs.models import Chair, ChairLocation
from common.utils.geo import total_path_distance

logger = logging.getLogger(__name__)

TOTAL_DISTANCE_CACHE_KEY = "chair_total_distance:{chair_id}"


# CHAIR ACTIVITY
def set_chair_active(chair: Chair, is_active: bool) -> Chair:
    """
    Toggle whether a chair accepts rides.
    Inactive chairs are skipped by the matching engine on its next cycle.
    """
    chair.is_active = is_active
    chair.save(update_fields=["is_active", "updated_at"])
    logger.info("Chair %s is_active=%s", chair.id, is_active)
    return chair


# LOCATION SAMPLES
def record_chair_location(chair: Chair, lat, lon) -> ChairLocation:
    """
    Append a location sample. The newest sample is the chair's current position.
    """
    location = ChairLocation.objects.create(chair=chair, latitude=lat, longitude=lon)
    # The cached total is only a bounded-staleness view; drop it eagerly on new data
    cache.delete(TOTAL_DISTANCE_CACHE_KEY.format(chair_id=chair.id))
    return location


def get_current_location(chair: Chair):
    """Most recent location sample for the chair, or None if it never reported one."""
    return chair.locations.order_by("-created_at", "-id").first()


# TRAVELLED DISTANCE
def compute_chair_total_distance(chair_id: int) -> float:
    """Manhattan distance summed over consecutive location samples, uncached."""
    points = (
        ChairLocation.objects.filter(chair_id=chair_id)
        .order_by("created_at", "id")
        .values_list("latitude", "longitude")
    )
    return total_path_distance(points)


def get_chair_total_distance(chair_id: int) -> float:
    """
    Total distance travelled by a chair, served from the cache.

    Values may be up to CHAIR_DISTANCE_CACHE_TTL seconds stale when location
    samples are written outside record_chair_location.
    """
    key = TOTAL_DISTANCE_CACHE_KEY.format(chair_id=chair_id)
    total = cache.get(key)
    if total is None:
        total = compute_chair_total_distance(chair_id)
        cache.set(key, total, timeout=getattr(settings, "CHAIR_DISTANCE_CACHE_TTL", 60))
    return total
