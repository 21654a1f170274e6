from django.contrib import admin
from .models import Track


@admin.register(Track)
class TrackAdmin(admin.ModelAdmin):
    list_display = ("title", "artist", "canonical_id", "created_at")
    search_fields = ("title", "artist", "canonical_id")
    readonly_fields = ("created_at", "updated_at")
