from .curator import CuratorProfile
from .activity import CuratorActivity

__all__ = ["CuratorProfile", "CuratorActivity"]
