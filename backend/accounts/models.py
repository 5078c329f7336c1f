from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Riders and chair owners share one user table, split by role"""
    ROLE_CHOICES = [
        ('user', 'Rider'),
        ('owner', 'Chair Owner'),
    ]
    
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='user')
    phone_number = models.CharField(max_length=15, blank=True)
    completed_rides = models.IntegerField(default=0)
    
    class Meta:
        db_table = 'users'
        
    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"
