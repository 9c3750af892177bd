"""
Tests for mhchat.retriever.search — KnowledgeRetriever keyword matching.
"""

from mhchat.data import KNOWLEDGE_BASE, KnowledgeEntry
from mhchat.retriever.search import KnowledgeRetriever


def _content(topic):
    return next(e.content for e in KNOWLEDGE_BASE if e.topic == topic)


class TestKnowledgeRetriever:
    def setup_method(self):
        self.retriever = KnowledgeRetriever()

    def test_topics_in_declared_order(self):
        assert self.retriever.topics == (
            "anxiety", "depression", "stress", "mindfulness", "self_care",
        )

    def test_single_topic(self, topic_message):
        assert self.retriever.retrieve(topic_message) == _content("anxiety")

    def test_case_insensitive(self):
        assert self.retriever.retrieve("DEPRESSION runs in my family") == _content("depression")

    def test_no_match_returns_none(self, smalltalk_message):
        assert self.retriever.retrieve(smalltalk_message) is None

    def test_empty_string_returns_none(self):
        assert self.retriever.retrieve("") is None

    def test_first_topic_in_corpus_order_wins(self):
        # "mindfulness" appears first in the text, "stress" first in the corpus.
        text = "Can mindfulness help with stress?"
        assert self.retriever.retrieve(text) == _content("stress")
        assert self.retriever.match(text).topic == "stress"

    def test_anxiety_beats_depression(self):
        text = "depression and anxiety together"
        assert self.retriever.match(text).topic == "anxiety"

    def test_substring_inside_other_word(self):
        # "stressful" contains "stress"
        assert self.retriever.match("a stressful week").topic == "stress"

    def test_topic_with_underscore_needs_literal_match(self):
        assert self.retriever.retrieve("tips for self-care") is None
        assert self.retriever.retrieve("self_care tips") == _content("self_care")

    def test_inflected_form_does_not_match(self):
        assert self.retriever.retrieve("I've been feeling really anxious lately") is None

    def test_idempotent(self):
        text = "stress and mindfulness"
        assert self.retriever.retrieve(text) == self.retriever.retrieve(text)

    def test_empty_corpus(self):
        retriever = KnowledgeRetriever(entries=[])
        assert retriever.retrieve("anxiety") is None
        assert retriever.topics == ()

    def test_custom_corpus_order(self):
        entries = [
            KnowledgeEntry(id=1, topic="sleep", content="Sleep content."),
            KnowledgeEntry(id=2, topic="stress", content="Stress content."),
        ]
        retriever = KnowledgeRetriever(entries)
        assert retriever.retrieve("stress ruins my sleep") == "Sleep content."
