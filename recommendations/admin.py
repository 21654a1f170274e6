from django.contrib import admin
from recommendations.models import CoSign, Recommendation, Tip


@admin.register(Recommendation)
class RecommendationAdmin(admin.ModelAdmin):
    list_display = ("id", "curator", "track", "genre", "tip_count", "total_tips_usd", "created_at")
    list_filter = ("genre", "platform")
    search_fields = ("original_url", "title", "artist", "curator__username")
    raw_id_fields = ("track", "curator")


@admin.register(CoSign)
class CoSignAdmin(admin.ModelAdmin):
    list_display = ("recommendation", "cosigner_fid", "created_at")
    raw_id_fields = ("recommendation",)


@admin.register(Tip)
class TipAdmin(admin.ModelAdmin):
    list_display = ("recommendation", "tipper_fid", "amount_usd", "transaction_hash", "created_at")
    search_fields = ("transaction_hash",)
    raw_id_fields = ("recommendation",)
