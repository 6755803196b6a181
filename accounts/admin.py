from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "can_manage_ape_keys")
    list_filter = ("can_manage_ape_keys",)
    search_fields = ("user__username", "user__email")
