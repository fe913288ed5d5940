"""
Protected span rules and placeholder substitution.

Given a piece of markdown, this module decides:
- which substrings are structural markup that must survive scrambling
- which placeholder stands in for each of them
- how to put the original text back

Rules DO NOT scramble anything. They only find and restore spans.

Rules are applied strictly in the order of SPAN_RULES. Each rule scans the
working text as it stands when its pass begins, so text already replaced by
a placeholder is never matched again by that rule. A later rule may still
capture a region that contains an earlier placeholder (a heading with bold
words in it); restoration expands such nested placeholders as well.

Every occurrence of a matched literal is replaced, not just the one that
matched. Two spans with identical text share one placeholder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Pattern, Tuple


PLACEHOLDER_OPEN = "\ue000"
PLACEHOLDER_CLOSE = "\ue001"

# Candidate delimiters: the BMP private-use area, then plane 15.
_DELIMITER_RANGES = (range(0xE000, 0xF900), range(0xF0000, 0xFFFFE))


@dataclass(frozen=True)
class SpanRule:
    name: str
    pattern: Pattern[str]


SPAN_RULES: Tuple[SpanRule, ...] = (
    SpanRule("bold", re.compile(r"\*\*.*?\*\*")),
    SpanRule("italic", re.compile(r"\*.*?\*")),
    SpanRule("underscore", re.compile(r"_.*?_")),
    SpanRule("bracket", re.compile(r"\[.*?\]")),
    SpanRule("parenthesis", re.compile(r"\(.*?\)")),
    SpanRule("heading", re.compile(r"#.*?\n")),
    # One backtick on each side; runs of backticks belong to code fences.
    SpanRule("code", re.compile(r"`[^`\n]+`")),
    SpanRule("codeblock", re.compile(r"```[\s\S]*?```")),
)


def make_placeholder(
    index: int,
    opener: str = PLACEHOLDER_OPEN,
    closer: str = PLACEHOLDER_CLOSE,
) -> str:
    return f"{opener}{index}{closer}"


def placeholder_pattern(
    opener: str = PLACEHOLDER_OPEN,
    closer: str = PLACEHOLDER_CLOSE,
) -> Pattern[str]:
    # The whole placeholder is captured so re.split keeps it.
    return re.compile(f"({re.escape(opener)}[0-9]+{re.escape(closer)})")


def pick_delimiters(text: str) -> Tuple[str, str]:
    """
    Return two private-use characters that do not occur in ``text``.

    The defaults are used unless the document already contains them.
    """

    absent = (
        chr(code)
        for codes in _DELIMITER_RANGES
        for code in codes
        if chr(code) not in text
    )
    try:
        return next(absent), next(absent)
    except StopIteration:
        raise ValueError("No free private-use characters for placeholders") from None


@dataclass(frozen=True)
class SpanMap:
    """
    Result of span extraction for one document.

    ``text`` is the input with every protected span replaced by its
    placeholder; ``spans`` maps each placeholder to the original span text.
    ``opener`` and ``closer`` delimit this document's placeholders and never
    occur in the document itself.
    """

    text: str
    spans: Mapping[str, str]
    opener: str = PLACEHOLDER_OPEN
    closer: str = PLACEHOLDER_CLOSE

    @property
    def pattern(self) -> Pattern[str]:
        return placeholder_pattern(self.opener, self.closer)

    def starts_with_placeholder(self, token: str) -> bool:
        return self.pattern.match(token) is not None

    def split(self, token: str) -> List[str]:
        """Split ``token`` into free fragments (even) and placeholders (odd)."""
        return self.pattern.split(token)

    def restore(self, text: str) -> str:
        """Replace every known placeholder in ``text`` with its span."""
        return self.pattern.sub(self._expand, text)

    def _expand(self, match: "re.Match[str]") -> str:
        placeholder = match.group(0)
        original = self.spans.get(placeholder)
        if original is None:
            return placeholder
        return self.pattern.sub(self._expand, original)


def extract_spans(text: str, rules: Iterable[SpanRule] = SPAN_RULES) -> SpanMap:
    """
    Replace protected spans in ``text`` with placeholders.

    Args:
        text: raw document text
        rules: ordered span rules, highest priority first

    Returns:
        SpanMap
    """

    opener, closer = pick_delimiters(text)
    working = text
    spans: Dict[str, str] = {}
    seen: Dict[str, str] = {}

    for rule in rules:
        for literal in rule.pattern.findall(working):
            if literal in seen or literal not in working:
                continue

            placeholder = make_placeholder(len(spans), opener, closer)
            spans[placeholder] = literal
            seen[literal] = placeholder
            working = working.replace(literal, placeholder)

    return SpanMap(
        text=working,
        spans=MappingProxyType(spans),
        opener=opener,
        closer=closer,
    )
