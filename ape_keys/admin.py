from django.contrib import admin

from .models import ApeKey


@admin.register(ApeKey)
class ApeKeyAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "user", "enabled", "created_at", "use_count")
    list_filter = ("enabled",)
    search_fields = ("id", "name", "user__username")
    readonly_fields = (
        "id",
        "key_hash",
        "created_at",
        "modified_at",
        "last_used_at",
        "use_count",
    )
