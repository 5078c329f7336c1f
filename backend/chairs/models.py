from django.db import models
from django.conf import settings

User = settings.AUTH_USER_MODEL

class Chair(models.Model):
    """A dispatchable chair registered by an owner"""
    
    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='chairs',
        limit_choices_to={'role': 'owner'},
    )
    
    name = models.CharField(max_length=30)
    model = models.CharField(max_length=50)
    
    # Inactive chairs are never offered to the matching engine
    is_active = models.BooleanField(default=False)
    
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'chairs'
        ordering = ['created_at', 'id']
        
    def __str__(self):
        return f"{self.name} ({self.model})"


class ChairLocation(models.Model):
    """Append-only position sample; the newest one is the chair's current position"""

    chair = models.ForeignKey(
        Chair,
        on_delete=models.CASCADE,
        related_name='locations'
    )

    latitude = models.DecimalField(max_digits=10, decimal_places=6)
    longitude = models.DecimalField(max_digits=10, decimal_places=6)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'chair_locations'
        indexes = [
            models.Index(fields=['chair', 'created_at'], name='chair_loc_chair_created_idx'),
        ]

    def __str__(self):
        return f"{self.chair_id} @ ({self.latitude}, {self.longitude})"
