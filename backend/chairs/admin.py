from django.contrib import admin
from chairs.models import Chair, ChairLocation
from chairs.services import get_chair_total_distance


@admin.register(Chair)
class ChairAdmin(admin.ModelAdmin):
    """Admin panel for managing chairs"""

    list_display = [
        "name",
        "model",
        "owner",
        "is_active",
        "total_distance",
        "created_at",
    ]

    list_filter = [
        "is_active",
        "model",
    ]

    search_fields = [
        "name",
        "owner__username",
    ]

    readonly_fields = [
        "created_at",
        "updated_at",
    ]

    ordering = ("created_at",)

    @admin.display(description="Total distance")
    def total_distance(self, obj):
        return get_chair_total_distance(obj.id)


@admin.register(ChairLocation)
class ChairLocationAdmin(admin.ModelAdmin):
    list_display = ("chair", "latitude", "longitude", "created_at")
    list_filter = ("created_at",)
    search_fields = ("chair__name",)
