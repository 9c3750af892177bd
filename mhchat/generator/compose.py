"""
Response composer: turns detector and retriever outputs into a reply.

Strict order, first match wins:
  1. Distress detected  -> fixed crisis message
  2. Topic retrieved    -> "I understand you're asking about <topic>. <content>"
  3. Neither            -> random supportive phrase addressed to the speaker
"""

import logging
import random
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional, Sequence

from ..data import SUPPORTIVE_PHRASES
from ..retriever.search import KnowledgeRetriever
from .safety import CRISIS_MESSAGE, DistressDetector

logger = logging.getLogger(__name__)

KNOWLEDGE_TEMPLATE = "I understand you're asking about {topic}. {content}"


@dataclass
class Reply:
    """Composed bot reply."""
    text: str
    distress_detected: bool
    topic: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def topic_label(topic: str) -> str:
    """Display form of a corpus topic ("self_care" -> "self-care")."""
    return topic.replace("_", "-")


class ResponseComposer:
    """
    Compose a reply from distress detection, knowledge retrieval and the
    supportive phrase bank.

    The topic label in a knowledge reply is derived separately from
    retrieval, by its own first-match scan over ``topic_order``. By default
    that order is the retriever's corpus order, so label and content agree.
    A caller supplying a different order can make them disagree on messages
    that mention several topics.

    ``rng`` is any object with a ``choice(seq)`` method. Pass a seeded
    ``random.Random`` for deterministic fallback phrases.
    """

    def __init__(
        self,
        detector: Optional[DistressDetector] = None,
        retriever: Optional[KnowledgeRetriever] = None,
        phrases: Sequence[str] = SUPPORTIVE_PHRASES,
        rng=None,
        topic_order: Optional[Iterable[str]] = None,
    ):
        self.detector = detector or DistressDetector()
        self.retriever = retriever or KnowledgeRetriever()
        self._phrases = tuple(phrases)
        if not self._phrases:
            raise ValueError("phrases cannot be empty")
        self._rng = rng or random.Random()
        self._topic_order = tuple(
            topic_order if topic_order is not None else self.retriever.topics
        )

    @property
    def phrases(self):
        return self._phrases

    def compose(self, text: str, speaker_name: str = "User") -> Reply:
        """Compose the reply for one message. Never raises for string input."""
        if self.detector.detect(text):
            logger.warning("Distress language detected; returning crisis message.")
            return Reply(text=CRISIS_MESSAGE, distress_detected=True)

        content = self.retriever.retrieve(text)
        if content is not None:
            label = self._topic_label(text)
            return Reply(
                text=KNOWLEDGE_TEMPLATE.format(topic=label, content=content),
                distress_detected=False,
                topic=label,
            )

        return Reply(text=self._fallback(speaker_name), distress_detected=False)

    def _topic_label(self, text: str) -> str:
        text_lower = text.lower()
        for topic in self._topic_order:
            if topic in text_lower:
                return topic_label(topic)
        # Retrieval matched a topic this order doesn't list: last label wins.
        if self._topic_order:
            return topic_label(self._topic_order[-1])
        return ""

    def _fallback(self, speaker_name: str) -> str:
        phrase = self._rng.choice(self._phrases)
        return phrase.format(speaker_name=speaker_name)
