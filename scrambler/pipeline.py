"""
Per-document processing.

The pipeline turns one input file into one output file and one
ProcessOutcome. Expected failures (bad key, bad blob, failed decryption,
I/O, undecodable text) are recorded in the outcome and never escape, so a
bad file cannot stop the rest of a batch.

Outputs are named after the source basename, so within one pipeline each
output path is written at most once; a later document that would overwrite
it fails instead.

Encrypt:  read -> [scramble] -> encrypt -> write
Decrypt:  read -> decrypt -> write

Scrambling is not undone on decrypt. A document that was scrambled before
encryption decrypts to the scrambled text.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .cipher import CipherEngine, KeyMaterial
from .errors import ScramblerError
from .reporter import RunLog
from .transformer import SpanScrambler
from .utils import create_backup, ensure_parent_dir

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


@dataclass(frozen=True)
class ProcessOutcome:
    source: Path
    ok: bool
    output: Optional[Path] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, source: Path, output: Path) -> "ProcessOutcome":
        return cls(source=source, ok=True, output=output)

    @classmethod
    def failure(cls, source: Path, error: str) -> "ProcessOutcome":
        return cls(source=source, ok=False, error=error)


@dataclass
class RunReport:
    outcomes: List[ProcessOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[ProcessOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[ProcessOutcome]:
        return [o for o in self.outcomes if not o.ok]


class Pipeline:
    def __init__(
        self,
        output_dir: Path,
        engine: Optional[CipherEngine] = None,
        scrambler: Optional[SpanScrambler] = None,
        reporter: Optional[RunLog] = None,
        backup: bool = True,
    ):
        self.output_dir = Path(output_dir)
        self.engine = engine or CipherEngine()
        self.scrambler = scrambler or SpanScrambler()
        self.reporter = reporter or RunLog(log_file=None, quiet=True)
        self.backup = backup
        self._written: Dict[Path, Path] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process_one(
        self,
        document: Path,
        direction: Direction,
        key: KeyMaterial,
        scramble: bool = False,
    ) -> ProcessOutcome:
        """Transform one document. Never raises for expected failures."""

        document = Path(document)
        output = self.output_dir / document.name

        first = self._written.get(output)
        if first is not None:
            outcome = ProcessOutcome.failure(
                document, f"Output {output} collides with {first}"
            )
            self.reporter.outcome(outcome)
            return outcome

        try:
            if self.backup:
                backup = create_backup(document)
                self.reporter.info(f"Created backup: {backup}")

            if direction is Direction.ENCRYPT:
                content = document.read_bytes().decode("utf-8")
                if scramble:
                    content = self.scrambler.scramble(content)
                result = self.engine.encrypt_text(content, key)
            else:
                blob = document.read_bytes().decode("utf-8")
                result = self.engine.decrypt_text(blob, key)

            ensure_parent_dir(output)
            output.write_bytes(result.encode("utf-8"))

        except (ScramblerError, OSError, UnicodeError) as e:
            outcome = ProcessOutcome.failure(document, str(e))
        else:
            outcome = ProcessOutcome.success(document, output)
            self._written[output] = document

        self.reporter.outcome(outcome)
        return outcome

    def process_all(
        self,
        documents: Iterable[Path],
        direction: Direction,
        key: KeyMaterial,
        scramble: bool = False,
    ) -> RunReport:
        report = RunReport()
        for document in documents:
            report.outcomes.append(
                self.process_one(document, direction, key, scramble=scramble)
            )

        logger.debug(
            "%s: %d document(s), %d failed",
            direction.value,
            len(report.outcomes),
            len(report.failed),
        )
        return report
