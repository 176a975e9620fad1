"""
Local example sentences for the card front.

A cosmetic heuristic: guess the part of speech from the word's shape and
drop it into a template sentence. Nothing is stored.
"""

from __future__ import annotations

import random
import re
from typing import Optional

from core.schemas import PartOfSpeech


SUBJECTS = ["I", "We", "They", "You"]
VERB_OBJECTS = ["it", "the plan", "the task", "the idea", "the project"]
VERB_MANNERS = ["carefully", "quickly", "every day", "when needed", "whenever possible"]
NOUN_DETERMINERS = ["The", "A", "This", "That"]
NOUN_PLACES = ["on the desk", "in the report", "for our trip", "at work", "in daily life"]
ADJ_NOUNS = ["idea", "plan", "approach", "choice", "solution"]
ADVERB_VERBS = ["adapt", "work", "learn", "respond", "collaborate"]

_INFINITIVE = re.compile(r"^to\s+", re.IGNORECASE)
_ADJ_SUFFIX = re.compile(r"(ous|ive|ful|less|able|al|ic|ish|ern|ary)$")
_NOUN_SUFFIX = re.compile(r"(tion|sion|ment|ness|ity|ship|tude|ance|ence|ism|ist)$")
_VERB_SUFFIX = re.compile(r"(ing|ed)$")


def guess_pos(word: str) -> PartOfSpeech:
    """
    Guess the part of speech from the word's shape.

    Checked in order: "to ..." infinitive, -ly, adjective suffixes,
    noun suffixes, -ing/-ed.
    """
    text = word.strip()
    if _INFINITIVE.match(text):
        return PartOfSpeech.VERB
    lower = text.lower()
    if lower.endswith("ly"):
        return PartOfSpeech.ADVERB
    if _ADJ_SUFFIX.search(lower):
        return PartOfSpeech.ADJECTIVE
    if _NOUN_SUFFIX.search(lower):
        return PartOfSpeech.NOUN
    if _VERB_SUFFIX.search(lower):
        return PartOfSpeech.VERB
    return PartOfSpeech.UNKNOWN


def generate_example(word: str, rng: Optional[random.Random] = None) -> str:
    """
    Build a template sentence using the word.

    Args:
        word: Display word (a leading "to " is dropped)
        rng: Random source (defaults to the module RNG)

    Returns:
        One example sentence
    """
    rng = rng or random.Random()
    raw = word.strip()
    base = _INFINITIVE.sub("", raw)
    pos = guess_pos(raw)
    subject = rng.choice(SUBJECTS)

    if pos is PartOfSpeech.VERB:
        return f"{subject} {base} {rng.choice(VERB_OBJECTS)} {rng.choice(VERB_MANNERS)}."
    if pos is PartOfSpeech.NOUN:
        return f"{rng.choice(NOUN_DETERMINERS)} {base} {rng.choice(NOUN_PLACES)} is very important."
    if pos is PartOfSpeech.ADJECTIVE:
        return f"It is a very {base} {rng.choice(ADJ_NOUNS)}."
    if pos is PartOfSpeech.ADVERB:
        return f"{subject} {rng.choice(ADVERB_VERBS)} {base} under pressure."
    return f"I came across the word “{base}” yesterday and tried to use it in a sentence."
