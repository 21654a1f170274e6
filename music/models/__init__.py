from .track import Track, FALLBACK_PREFIX

__all__ = ["Track", "FALLBACK_PREFIX"]
