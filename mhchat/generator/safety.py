"""
Safety module: distress detection and interaction logging.

Handles the safety-critical aspects of the responder:
  - Distress detection against a fixed lexicon (literal substring match)
  - The fixed crisis acknowledgment message
  - Interaction logging for review
"""

import json
import logging
import os
from datetime import datetime
from typing import Iterable, Optional

from ..data import DISTRESS_LEXICON

logger = logging.getLogger(__name__)


# Downstream consumers match on this text; keep it verbatim.
CRISIS_MESSAGE = (
    "I notice you may be going through a difficult time. Remember that you're "
    "not alone, and help is available. Would you like me to provide some crisis "
    "resources that might be helpful?"
)


# ---------------------------------------------------------------------------
# DistressDetector
# ---------------------------------------------------------------------------

class DistressDetector:
    """
    Keyword distress screening.

    Pure substring containment on the case-folded text: no tokenization and
    no word boundaries, so "hopelessly" matches "hopeless".
    """

    def __init__(self, lexicon: Iterable[str] = DISTRESS_LEXICON):
        self._lexicon = tuple(phrase.lower() for phrase in lexicon)

    @property
    def lexicon(self):
        return self._lexicon

    def detect(self, text: str) -> bool:
        """Return True if any lexicon phrase occurs in the text."""
        text_lower = text.lower()
        return any(phrase in text_lower for phrase in self._lexicon)


# ---------------------------------------------------------------------------
# Interaction logging
# ---------------------------------------------------------------------------

def log_interaction(
    message: str,
    reply: str,
    distress_detected: bool,
    topic: Optional[str] = None,
    log_dir: str = "logs/interactions",
) -> None:
    """
    Log an exchange for quality monitoring and safety review.

    Only lengths and hashes of the texts are written. Distress exchanges
    go to a separate file.
    """
    os.makedirs(log_dir, exist_ok=True)

    now = datetime.now()
    log_entry = {
        "timestamp": now.isoformat(),
        "distress_detected": distress_detected,
        "topic": topic,
        "message_length": len(message),
        "message_hash": hash(message),
        "reply_length": len(reply),
        "reply_hash": hash(reply),
        "requires_review": distress_detected,
    }

    prefix = "distress" if distress_detected else "general"
    log_file = os.path.join(log_dir, f"{prefix}_{now.strftime('%Y%m%d')}.jsonl")

    with open(log_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")

    if distress_detected:
        logger.warning("Distress interaction logged to %s", log_file)
