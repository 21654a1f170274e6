from .recommendation import Recommendation
from .engagement import CoSign, Tip

__all__ = ["Recommendation", "CoSign", "Tip"]
