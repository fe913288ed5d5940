"""
Content scrambling.

This module destroys the readability of free prose while leaving markdown
structure byte-identical. It is intentionally dumb about files, keys and
encryption; the pipeline decides when to call it.

Scrambling is one-way. Nothing here can or should recover the original words.
"""

from __future__ import annotations

import logging
import random
import string
from typing import Iterable, Optional

from .config import (
    SCRAMBLE_GROW_PROBABILITY,
    SCRAMBLE_LETTER_PROBABILITY,
    SCRAMBLE_RESIZE_PROBABILITY,
    SCRAMBLE_SPECIAL_CHARS,
)
from .rules import SPAN_RULES, SpanMap, SpanRule, extract_spans

logger = logging.getLogger(__name__)

LETTERS = string.ascii_letters


class SpanScrambler:
    """
    Randomize free words, keep protected spans.

    ``rng`` only has to provide ``random``, ``choice``, ``sample`` and
    ``randint``; pass a seeded ``random.Random`` for repeatable runs.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        rules: Iterable[SpanRule] = SPAN_RULES,
    ):
        self.rng = rng or random.Random()
        self.rules = tuple(rules)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def scramble(self, text: str) -> str:
        spans = extract_spans(text, self.rules)
        tokens = [self._scramble_token(token, spans) for token in spans.text.split()]

        logger.debug(
            "Scrambled %d token(s), protected %d span(s)",
            len(tokens),
            len(spans.spans),
        )

        return spans.restore(" ".join(tokens))

    def scramble_word(self, word: str) -> str:
        """Replace the letters of ``word`` and maybe change its length."""

        if len(word) <= 1:
            return word

        rng = self.rng
        chars = []
        for char in word:
            if char in LETTERS:
                if rng.random() < SCRAMBLE_LETTER_PROBABILITY:
                    chars.append(rng.choice(LETTERS))
                else:
                    chars.append(rng.choice(SCRAMBLE_SPECIAL_CHARS))
            else:
                chars.append(char)
        new_word = "".join(chars)

        if rng.random() < SCRAMBLE_RESIZE_PROBABILITY:
            if rng.random() < SCRAMBLE_GROW_PROBABILITY:
                new_word += "".join(rng.sample(LETTERS, rng.randint(1, 3)))
            elif len(new_word) > 1:
                new_word = new_word[: -rng.randint(1, 3)]

        return new_word

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _scramble_token(self, token: str, spans: SpanMap) -> str:
        if spans.starts_with_placeholder(token):
            return token

        # Placeholders glued inside a word stay intact; only the free
        # fragments around them are scrambled.
        parts = spans.split(token)
        if len(parts) == 1:
            return self.scramble_word(token)

        return "".join(
            part if index % 2 else self.scramble_word(part)
            for index, part in enumerate(parts)
        )


def scramble(text: str, rng: Optional[random.Random] = None) -> str:
    """Scramble ``text`` with a one-off SpanScrambler."""
    return SpanScrambler(rng).scramble(text)


def scramble_word(word: str, rng: Optional[random.Random] = None) -> str:
    return SpanScrambler(rng).scramble_word(word)
