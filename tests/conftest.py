"""
Shared pytest fixtures for MH-CHAT tests.
"""

from datetime import datetime, timezone

import pytest


class FirstChoice:
    """Deterministic stand-in for random.Random: always picks index 0."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def topic_message():
    return "I've been dealing with a lot of anxiety lately and can't sleep."


@pytest.fixture
def crisis_message():
    return "I don't want to live anymore"


@pytest.fixture
def smalltalk_message():
    return "just saying hi"


@pytest.fixture
def first_choice():
    return FirstChoice()


@pytest.fixture
def fixed_clock():
    ts = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    return lambda: ts
