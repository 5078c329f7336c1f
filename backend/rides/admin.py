"""Tells what to show in the Django admin interface for rides app"""

from django.contrib import admin
from .models import Ride, RideStatus


class RideStatusInline(admin.TabularInline):
    model = RideStatus
    extra = 0
    readonly_fields = ("status", "created_at", "app_sent_at", "chair_sent_at")


@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    """Ride admin"""
    list_display = ['id', 'user', 'chair', 'created_at', 'updated_at']
    list_filter = ['created_at']
    search_fields = ['user__username', 'chair__name']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [RideStatusInline]


@admin.register(RideStatus)
class RideStatusAdmin(admin.ModelAdmin):
    list_display = ("ride", "status", "created_at", "app_sent_at", "chair_sent_at")
    list_filter = ("status",)
    search_fields = ("ride__id",)
