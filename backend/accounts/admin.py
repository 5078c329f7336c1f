from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin panel for riders and chair owners"""

    list_display = [
        "username",
        "email",
        "role",
        "completed_rides",
        "is_active",
    ]

    list_filter = [
        "role",
        "is_active",
    ]

    search_fields = [
        "username",
        "email",
        "phone_number",
    ]

    ordering = ("username",)

    fieldsets = BaseUserAdmin.fieldsets + (
        (
            "Dispatch",
            {"fields": ("role", "phone_number", "completed_rides")},
        ),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        (
            "Dispatch",
            {"fields": ("role", "phone_number")},
        ),
    )
