"""
Markdown Scrambler

Encrypts markdown documents with AES-256-CBC, optionally scrambling the
prose first while leaving markdown structure intact.
"""

__version__ = "0.1.0"

from .cipher import CipherEngine, decode_key, generate_key, load_or_generate_key
from .errors import (
    ConfigError,
    CryptoError,
    FormatError,
    InvalidKeyError,
    ScramblerError,
    ValidationError,
)
from .pipeline import Direction, Pipeline, ProcessOutcome, RunReport
from .reporter import RunLog
from .rules import SPAN_RULES, SpanMap, SpanRule, extract_spans
from .settings import Settings
from .transformer import SpanScrambler, scramble, scramble_word

__all__ = [
    "CipherEngine",
    "decode_key",
    "generate_key",
    "load_or_generate_key",
    "ConfigError",
    "CryptoError",
    "FormatError",
    "InvalidKeyError",
    "ScramblerError",
    "ValidationError",
    "Direction",
    "Pipeline",
    "ProcessOutcome",
    "RunReport",
    "RunLog",
    "SPAN_RULES",
    "SpanMap",
    "SpanRule",
    "extract_spans",
    "Settings",
    "SpanScrambler",
    "scramble",
    "scramble_word",
]
