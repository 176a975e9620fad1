import random

import pytest

from core.example_sentences import generate_example, guess_pos
from core.schemas import PartOfSpeech


@pytest.mark.parametrize("word, pos", [
    ("to run", PartOfSpeech.VERB),
    ("quickly", PartOfSpeech.ADVERB),
    ("famous", PartOfSpeech.ADJECTIVE),
    ("careful", PartOfSpeech.ADJECTIVE),
    ("station", PartOfSpeech.NOUN),
    ("happiness", PartOfSpeech.NOUN),
    ("walking", PartOfSpeech.VERB),
    ("cat", PartOfSpeech.UNKNOWN),
])
def test_guess_pos(word, pos):
    assert guess_pos(word) is pos


def test_verb_drops_infinitive_marker():
    sentence = generate_example("to negotiate", random.Random(1))
    assert "negotiate" in sentence
    assert "to negotiate" not in sentence
    assert sentence.endswith(".")


def test_unknown_uses_quoted_fallback():
    assert generate_example("cat", random.Random(0)) == \
        "I came across the word “cat” yesterday and tried to use it in a sentence."


def test_same_seed_same_sentence():
    assert generate_example("station", random.Random("id-1")) == \
        generate_example("station", random.Random("id-1"))
