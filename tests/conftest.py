"""
Pytest configuration and shared fixtures.
"""

import pytest

from quran_search import ResourceUnavailable, Supplementary


class FakeProvider:
    """In-memory corpus provider that counts supplementary loads."""

    def __init__(self, corpus, translation=None, chapter_names=None, fail=False):
        self.corpus = corpus
        self.translation = translation if translation is not None else []
        self.chapter_names = chapter_names if chapter_names is not None else []
        self.fail = fail
        self.load_calls = 0

    async def load_supplementary(self):
        self.load_calls += 1
        if self.fail:
            raise ResourceUnavailable("offline")
        return Supplementary(translation=self.translation, chapter_names=self.chapter_names)


@pytest.fixture
def small_corpus():
    return [
        ["bread and water", "water only"],
        ["bread alone"],
    ]


@pytest.fixture
def arabic_corpus():
    return [
        ["بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ", "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ"],
        ["ذَٰلِكَ الْكِتَابُ لَا رَيْبَ \u06db فِيهِ", "الَّذِينَ يُؤْمِنُونَ بِالْغَيْبِ"],
        ["اللَّهُ لَا إِلَٰهَ إِلَّا هُوَ الْحَيُّ الْقَيُّومُ"],
    ]


@pytest.fixture
def make_provider():
    return FakeProvider
