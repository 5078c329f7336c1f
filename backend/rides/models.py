from django.db import models
from django.conf import settings

from chairs.models import Chair


class Ride(models.Model):
    """A rider's request to be carried from pickup to destination.

    ``chair`` stays NULL until the matching engine claims a chair for the ride;
    once set it is never reassigned.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='rides'
    )

    chair = models.ForeignKey(
        Chair,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='rides'
    )

    # Pickup location
    pickup_latitude = models.DecimalField(max_digits=10, decimal_places=6)
    pickup_longitude = models.DecimalField(max_digits=10, decimal_places=6)

    # Destination location
    destination_latitude = models.DecimalField(max_digits=10, decimal_places=6)
    destination_longitude = models.DecimalField(max_digits=10, decimal_places=6)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rides'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['chair', 'created_at'], name='rides_chair_created_idx'),
        ]

    def __str__(self):
        return f"Ride #{self.id} - {self.user} -> chair {self.chair_id}"


class RideStatus(models.Model):
    """One entry in a ride's status history. Entries are only ever appended."""

    MATCHING = 'MATCHING'
    ENROUTE = 'ENROUTE'
    PICKUP = 'PICKUP'
    CARRYING = 'CARRYING'
    ARRIVED = 'ARRIVED'
    COMPLETED = 'COMPLETED'

    # Order matters: a ride walks through these one step at a time
    STATUS_CHOICES = [
        (MATCHING, 'Matching'),
        (ENROUTE, 'En route to pickup'),
        (PICKUP, 'Picked up'),
        (CARRYING, 'Carrying'),
        (ARRIVED, 'Arrived'),
        (COMPLETED, 'Completed'),
    ]

    ride = models.ForeignKey(
        Ride,
        on_delete=models.CASCADE,
        related_name='statuses'
    )

    status = models.CharField(max_length=20, choices=STATUS_CHOICES)

    created_at = models.DateTimeField(auto_now_add=True)
    app_sent_at = models.DateTimeField(null=True, blank=True)
    chair_sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'ride_statuses'
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['ride', 'status'],
                name='unique_ride_status'
            )
        ]

    def __str__(self):
        return f"Ride {self.ride_id}: {self.status}"
