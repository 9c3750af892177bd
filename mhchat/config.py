"""
Configuration loading for MH-CHAT.

Loads pipeline.yaml into dataclass structures.
"""

from dataclasses import dataclass, field
from typing import Optional

import yaml


@dataclass
class KnowledgeConfig:
    """Knowledge corpus source. Empty path means the built-in corpus."""
    corpus_jsonl: str = ""


@dataclass
class ComposerConfig:
    """Reply composition settings."""
    default_speaker: str = "User"
    seed: Optional[int] = None  # fixes the fallback phrase sequence when set


@dataclass
class ChatConfig:
    """Full responder configuration."""
    knowledge: KnowledgeConfig = field(default_factory=KnowledgeConfig)
    composer: ComposerConfig = field(default_factory=ComposerConfig)
    log_dir: str = "logs/interactions"
    enable_logging: bool = True


def load_yaml(path: str) -> dict:
    """Load a YAML file and return its contents as a dict."""
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_chat_config(path: str) -> ChatConfig:
    """Load pipeline.yaml into a ChatConfig, filling defaults for missing keys."""
    raw = load_yaml(path)

    kb_raw = raw.get("knowledge") or {}
    knowledge = KnowledgeConfig(
        corpus_jsonl=kb_raw.get("corpus_jsonl") or "",
    )

    comp_raw = raw.get("composer") or {}
    seed = comp_raw.get("seed")
    composer = ComposerConfig(
        default_speaker=comp_raw.get("default_speaker", "User"),
        seed=int(seed) if seed is not None else None,
    )

    return ChatConfig(
        knowledge=knowledge,
        composer=composer,
        log_dir=raw.get("log_dir", "logs/interactions"),
        enable_logging=bool(raw.get("enable_logging", True)),
    )
