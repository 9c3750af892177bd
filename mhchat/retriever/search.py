"""
Knowledge retrieval: keyword match against the fixed topic corpus.

The corpus order is the tie-break policy. A message mentioning both
"stress" and "mindfulness" resolves to whichever topic is declared first.
"""

import logging
from typing import Iterable, Optional, Tuple

from ..data import KNOWLEDGE_BASE, KnowledgeEntry

logger = logging.getLogger(__name__)


class KnowledgeRetriever:
    """Return the content of the first corpus topic found in a message."""

    def __init__(self, entries: Iterable[KnowledgeEntry] = KNOWLEDGE_BASE):
        self._entries: Tuple[KnowledgeEntry, ...] = tuple(entries)
        if not self._entries:
            logger.warning("KnowledgeRetriever has an empty corpus; no message will match.")
        else:
            logger.info("KnowledgeRetriever loaded: %d topics", len(self._entries))

    @property
    def entries(self) -> Tuple[KnowledgeEntry, ...]:
        return self._entries

    @property
    def topics(self) -> Tuple[str, ...]:
        """Topics in match-priority order."""
        return tuple(e.topic for e in self._entries)

    def match(self, text: str) -> Optional[KnowledgeEntry]:
        """Return the first entry whose topic occurs in the text, or None."""
        text_lower = text.lower()
        for entry in self._entries:
            if entry.topic in text_lower:
                return entry
        return None

    def retrieve(self, text: str) -> Optional[str]:
        """Return the matched entry's content, or None when no topic occurs."""
        entry = self.match(text)
        if entry is None:
            return None
        logger.debug("Matched topic %r for message: %.60s", entry.topic, text)
        return entry.content
