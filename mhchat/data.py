"""
Fixed knowledge corpus, distress lexicon and supportive phrase bank for MH-CHAT.

All three are loaded once at import time and passed by reference into the
pipeline components. Corpus order is match priority: the first topic found
in a message wins.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KnowledgeEntry:
    """One topic in the knowledge corpus."""
    id: int
    topic: str
    content: str


# ---------------------------------------------------------------------------
# Knowledge corpus (priority order)
# ---------------------------------------------------------------------------
KNOWLEDGE_BASE: Tuple[KnowledgeEntry, ...] = (
    KnowledgeEntry(
        id=1,
        topic="anxiety",
        content=(
            "Anxiety is a normal and often healthy emotion. However, when a person "
            "regularly feels disproportionate levels of anxiety, it might become a "
            "medical disorder. Techniques like deep breathing, mindfulness, and "
            "cognitive behavioral therapy can help manage anxiety."
        ),
    ),
    KnowledgeEntry(
        id=2,
        topic="depression",
        content=(
            "Depression is a common and serious medical illness that negatively "
            "affects how you feel, the way you think, and how you act. It's "
            "characterized by persistent feelings of sadness and loss of interest "
            "in activities once enjoyed. It's important to seek professional help "
            "if experiencing symptoms of depression."
        ),
    ),
    KnowledgeEntry(
        id=3,
        topic="stress",
        content=(
            "Stress is your body's reaction to pressure from a certain situation or "
            "event. It can be positive as a short-term motivator but can negatively "
            "impact health when chronic. Stress management techniques include "
            "regular exercise, adequate sleep, and relaxation practices."
        ),
    ),
    KnowledgeEntry(
        id=4,
        topic="mindfulness",
        content=(
            "Mindfulness is the practice of purposely focusing your attention on the "
            "present moment and accepting it without judgment. Regular mindfulness "
            "practice can reduce stress, improve focus, and increase emotional "
            "regulation."
        ),
    ),
    KnowledgeEntry(
        id=5,
        topic="self_care",
        content=(
            "Self-care means taking the time to do things that help you live well "
            "and improve both your physical health and mental health. Self-care can "
            "include maintaining a regular sleep routine, eating healthy, spending "
            "time in nature, or engaging in hobbies."
        ),
    ),
)

# ---------------------------------------------------------------------------
# Distress lexicon (literal, lowercase phrases)
# ---------------------------------------------------------------------------
DISTRESS_LEXICON: Tuple[str, ...] = (
    "suicide", "kill myself", "end my life", "don't want to live",
    "self-harm", "hurt myself", "cutting myself",
    "hopeless", "worthless", "no reason to live",
)

# ---------------------------------------------------------------------------
# Supportive fallback phrases
# ---------------------------------------------------------------------------
SUPPORTIVE_PHRASES: Tuple[str, ...] = (
    "I hear you, {speaker_name}. How long have you been feeling this way?",
    "Thank you for sharing that with me. Would you like to talk more about what's on your mind?",
    "I'm here to support you. What do you think might help you feel better right now?",
    "That sounds challenging. Have you tried any coping strategies that have worked for you in the past?",
    "I appreciate you opening up. Remember that your feelings are valid, and it's okay to ask for help.",
)


def load_knowledge_jsonl(path: str) -> Tuple[KnowledgeEntry, ...]:
    """
    Load an alternative knowledge corpus from JSONL.

    Each non-blank line is an object with ``id``, ``topic`` and ``content``.
    Line order becomes match priority. Topics are lower-cased.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Knowledge corpus not found: {path}")

    entries = []
    seen_ids, seen_topics = set(), set()
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            if not line.strip():
                continue
            row = json.loads(line)
            try:
                entry = KnowledgeEntry(
                    id=int(row["id"]),
                    topic=str(row["topic"]).strip().lower(),
                    content=str(row["content"]),
                )
            except KeyError as e:
                raise ValueError(f"Missing field {e} at {path}:{line_no}") from e

            if not entry.topic:
                raise ValueError(f"Empty knowledge topic at {path}:{line_no}")
            if entry.id in seen_ids:
                raise ValueError(f"Duplicate knowledge id {entry.id} at {path}:{line_no}")
            if entry.topic in seen_topics:
                raise ValueError(f"Duplicate knowledge topic {entry.topic!r} at {path}:{line_no}")
            seen_ids.add(entry.id)
            seen_topics.add(entry.topic)
            entries.append(entry)

    if not entries:
        logger.warning("Knowledge corpus %s is empty; retrieval will never match.", path)
    else:
        logger.info("Loaded %d knowledge entries from %s", len(entries), path)
    return tuple(entries)
