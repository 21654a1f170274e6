from django.contrib import admin
from curators.models import CuratorActivity, CuratorProfile


@admin.register(CuratorProfile)
class CuratorProfileAdmin(admin.ModelAdmin):
    list_display = ("fid", "username", "curator_score", "xp", "wallet_address")
    search_fields = ("username", "wallet_address")
    readonly_fields = ("curator_score", "xp", "created_at", "updated_at")


@admin.register(CuratorActivity)
class CuratorActivityAdmin(admin.ModelAdmin):
    list_display = ("curator", "activity_type", "xp_earned", "recommendation", "created_at")
    list_filter = ("activity_type",)
    raw_id_fields = ("curator", "recommendation", "track")
