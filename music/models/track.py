from django.db import models

FALLBACK_PREFIX = "FALLBACK::"


class Track(models.Model):
    """
    Canonical song in the catalog.
    One row per distinct song, keyed by the normalizer's canonical id.
    """

    class Platform(models.TextChoices):
        SPOTIFY = "spotify", "Spotify"
        APPLE_MUSIC = "appleMusic", "Apple Music"
        YOUTUBE = "youtube", "YouTube"
        SOUNDCLOUD = "soundcloud", "SoundCloud"
        YOUTUBE_MUSIC = "youtubeMusic", "YouTube Music"
        TIDAL = "tidal", "Tidal"

    # fallback keys are the prefix plus a URL of up to 1024 chars
    canonical_id = models.CharField(max_length=1024 + len(FALLBACK_PREFIX), unique=True)
    title = models.CharField(max_length=500)
    artist = models.CharField(max_length=500)
    artwork_url = models.URLField(max_length=1024, blank=True, default="")

    # {"spotify": "https://open.spotify.com/track/...", ...}
    platform_urls = models.JSONField(default=dict, blank=True)
    canonical_page_url = models.URLField(max_length=1024, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["artist", "title"], name="track_artist_title_idx"),
        ]

    @property
    def is_fallback(self) -> bool:
        return self.canonical_id.startswith(FALLBACK_PREFIX)

    def url_for(self, platform):
        return (self.platform_urls or {}).get(platform)

    def __str__(self):
        return f"{self.title} – {self.artist}"
