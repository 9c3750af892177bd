"""
ChatPipeline: single-turn message handling for MH-CHAT.

Connects:
  1. Input validation     (empty messages are rejected)
  2. Distress detection   (fixed lexicon, short-circuits)
  3. Knowledge retrieval  (first matching corpus topic)
  4. Reply composition    (knowledge template or supportive fallback)
  5. Interaction logging

The pipeline holds no conversation state. Every call is independent, so a
single instance can serve concurrent requests.
"""

import json
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .config import ChatConfig, load_chat_config
from .data import KNOWLEDGE_BASE, load_knowledge_jsonl
from .generator.compose import ResponseComposer
from .generator.safety import DistressDetector, log_interaction
from .retriever.search import KnowledgeRetriever

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a message is absent or empty."""


@dataclass
class ChatMessage:
    """One side of an exchange."""
    text: str
    sender: str
    timestamp: datetime
    distress_detected: Optional[bool] = None

    def to_dict(self) -> Dict:
        d = {
            "text": self.text,
            "sender": self.sender,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.distress_detected is not None:
            d["distressDetected"] = self.distress_detected
        return d


@dataclass
class Exchange:
    """User echo plus bot reply for a single utterance."""
    user_echo: ChatMessage
    bot_reply: ChatMessage

    def to_dict(self) -> Dict:
        """Wire shape returned to chat clients."""
        return {
            "message": self.user_echo.to_dict(),
            "response": self.bot_reply.to_dict(),
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, **kwargs)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatPipeline:
    """
    End-to-end handling of one utterance: validate -> compose -> log.

    Usage:
        from mhchat import ChatPipeline

        pipeline = ChatPipeline.from_config("configs/pipeline.yaml")
        exchange = pipeline.handle_utterance("I've been so stressed", "Sam")
        print(exchange.bot_reply.text)
    """

    def __init__(
        self,
        composer: ResponseComposer,
        log_dir: str = "logs/interactions",
        enable_logging: bool = True,
        default_speaker: str = "User",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.composer = composer
        self._log_dir = log_dir
        self._enable_logging = enable_logging
        self._default_speaker = default_speaker
        self._clock = clock or _utcnow

    @classmethod
    def from_config(cls, config_path: str) -> "ChatPipeline":
        """Build a pipeline from a pipeline.yaml config file."""
        return cls.from_chat_config(load_chat_config(config_path))

    @classmethod
    def from_defaults(cls) -> "ChatPipeline":
        """Build a pipeline over the built-in corpus, lexicon and phrases."""
        return cls.from_chat_config(ChatConfig())

    @classmethod
    def from_chat_config(cls, cfg: ChatConfig) -> "ChatPipeline":
        if cfg.knowledge.corpus_jsonl:
            entries = load_knowledge_jsonl(cfg.knowledge.corpus_jsonl)
        else:
            entries = KNOWLEDGE_BASE

        rng = random.Random(cfg.composer.seed) if cfg.composer.seed is not None else None
        composer = ResponseComposer(
            detector=DistressDetector(),
            retriever=KnowledgeRetriever(entries),
            rng=rng,
        )
        return cls(
            composer=composer,
            log_dir=cfg.log_dir,
            enable_logging=cfg.enable_logging,
            default_speaker=cfg.composer.default_speaker,
        )

    def handle_utterance(
        self,
        message: Optional[str],
        speaker_name: Optional[str] = None,
    ) -> Exchange:
        """Process one message and return the user echo with the bot reply."""
        if not message:
            raise InvalidInputError("Message is required")

        if speaker_name is None:
            speaker_name = self._default_speaker

        user_echo = ChatMessage(text=message, sender="user", timestamp=self._clock())
        reply = self.composer.compose(message, speaker_name)
        bot_reply = ChatMessage(
            text=reply.text,
            sender="bot",
            timestamp=self._clock(),
            distress_detected=reply.distress_detected,
        )

        self._log(message, reply.text, reply.distress_detected, reply.topic)
        return Exchange(user_echo=user_echo, bot_reply=bot_reply)

    __call__ = handle_utterance

    def process_batch(self, messages: List[str], speaker_name: Optional[str] = None) -> List[Exchange]:
        """Process multiple messages independently."""
        return [self.handle_utterance(m, speaker_name) for m in messages]

    def _log(self, message: str, reply: str, distress: bool, topic: Optional[str]) -> None:
        """Log interaction for safety monitoring."""
        if not self._enable_logging:
            return
        try:
            log_interaction(
                message=message,
                reply=reply,
                distress_detected=distress,
                topic=topic,
                log_dir=self._log_dir,
            )
        except Exception as e:
            logger.error("Failed to log interaction: %s", e)
