"""
MH-CHAT: a minimal supportive responder.

Single-turn pipeline: screen for distress -> retrieve a topic snippet -> compose a reply.
"""

__version__ = "1.0.0"

# Lazy import so config-only callers don't build the pipeline module graph
def __getattr__(name):
    if name == "ChatPipeline":
        from .pipeline import ChatPipeline
        return ChatPipeline
    if name == "Exchange":
        from .pipeline import Exchange
        return Exchange
    if name == "InvalidInputError":
        from .pipeline import InvalidInputError
        return InvalidInputError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
