from .compose import Reply, ResponseComposer
from .safety import CRISIS_MESSAGE, DistressDetector

__all__ = ["CRISIS_MESSAGE", "DistressDetector", "Reply", "ResponseComposer"]
