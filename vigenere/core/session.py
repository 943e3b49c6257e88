"""
Vigenère Cipher Session
========================

Application layer around :class:`~vigenere.core.engine.VigenereEngine`.
A session reads symbols from a text buffer or a file, runs them through
a freshly built engine, writes the result in batches and returns a
:class:`~vigenere.core.models.SessionReport`.

Identifying marker
------------------
When enabled, a constant marker is enciphered in front of the message.
Deciphering pulls the first marker-length symbols and compares them
with the marker before anything else is written; a mismatch means the
stream was not produced by this tool or the key is wrong. The marker is
reduced by the symbol policy (filtered and normalised) exactly as the
engine reduces any other input, so under ``letters`` the default marker
``M%S$&#%`` becomes ``MS``.

The key is validated and the first chunk of the source is read before
anything is created next to the destination. File output then goes to a
uniquely named temporary file in the destination directory and is moved
into place only when the whole stream succeeded.
"""

from __future__ import annotations

import datetime as _dt
import tempfile
from itertools import chain, islice
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Union

from shared.config import TabulaConfig
from shared.logger import TabulaLogger

from vigenere.core.engine import VigenereEngine
from vigenere.core.errors import MarkerMismatchError
from vigenere.core.models import Direction, SessionReport, SourceKind, TransformOutcome
from vigenere.core.policy import PolicyName, Symbol, SymbolPolicy, get_policy
from vigenere.streams.reader import iter_file_symbols, iter_text_symbols
from vigenere.streams.writer import write_symbols_to

TEXT_SOURCE = "<text>"


class _CountingIterator:
    """Pass-through iterator that counts the symbols pulled from it."""

    __slots__ = ("_inner", "count")

    def __init__(self, inner: Iterable[Symbol]) -> None:
        self._inner = iter(inner)
        self.count = 0

    def __iter__(self) -> Iterator[Symbol]:
        return self

    def __next__(self) -> Symbol:
        symbol = next(self._inner)
        self.count += 1
        return symbol


class CipherSession:
    """Runs encipher / decipher operations with configured I/O settings.

    Usage::

        session = CipherSession(TabulaConfig.load(), policy="printable")
        outcome = session.encipher_text("attack at dawn", key="LEMON")
        report = session.decipher_file("msg.enc", "msg.txt", key="LEMON")

    Args:
        config: Toolkit configuration; defaults are used when ``None``.
        policy: Overrides ``config.vigenere.policy``.
        use_marker: Overrides ``config.vigenere.use_marker``.

    Raises:
        ValueError: If the policy is unknown or the marker has no symbol
            inside the policy's alphabet.
    """

    def __init__(
        self,
        config: Optional[TabulaConfig] = None,
        *,
        policy: Optional[SymbolPolicy | PolicyName | str] = None,
        use_marker: Optional[bool] = None,
    ) -> None:
        self.config = config or TabulaConfig()
        settings = self.config.vigenere
        self.policy = get_policy(policy if policy is not None else settings.policy)
        self.use_marker = settings.use_marker if use_marker is None else use_marker
        self.logger = TabulaLogger("vigenere.session")

        self._marker = self.policy.reduce(settings.marker) if self.use_marker else ""
        if self.use_marker and not self._marker:
            raise ValueError(
                f"Identifying marker {settings.marker!r} has no symbols in the "
                f"{self.policy.name!r} alphabet; change the marker or disable it"
            )

    @property
    def marker(self) -> str:
        """Marker as the engine sees it (policy-reduced), empty if disabled."""
        return self._marker

    # ------------------------------------------------------------------ #
    #  Text transforms
    # ------------------------------------------------------------------ #

    def encipher_text(self, text: str, key: str) -> TransformOutcome:
        """Encipher an in-memory string."""
        return self._text(Direction.ENCIPHER, text, key)

    def decipher_text(self, text: str, key: str) -> TransformOutcome:
        """Decipher an in-memory string.

        Raises:
            MarkerMismatchError: If the marker is enabled and the
                deciphered prefix does not match it.
        """
        return self._text(Direction.DECIPHER, text, key)

    def _text(self, direction: Direction, text: str, key: str) -> TransformOutcome:
        produced: list[str] = []

        def sink(symbols: Iterator[Symbol]) -> int:
            before = len(produced)
            produced.extend(symbols)  # type: ignore[arg-type]
            return len(produced) - before

        report = self._run(
            direction,
            VigenereEngine(key, self.policy),
            iter_text_symbols(text),
            sink,
            source_kind=SourceKind.TEXT,
            source=TEXT_SOURCE,
            destination=None,
            binary=False,
        )
        return TransformOutcome(text="".join(produced), report=report)

    # ------------------------------------------------------------------ #
    #  File transforms
    # ------------------------------------------------------------------ #

    def encipher_file(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        key: str,
        *,
        binary: bool = False,
    ) -> SessionReport:
        """Encipher *source* into *destination*.

        Raises:
            InvalidKeyError: If the key is rejected by the policy.
            ValueError: If *binary* is requested with a policy wider than
                one byte.
            OSError: If a file cannot be read or written.
            UnicodeDecodeError: If *source* is not valid text.
        """
        return self._file(Direction.ENCIPHER, source, destination, key, binary)

    def decipher_file(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        key: str,
        *,
        binary: bool = False,
    ) -> SessionReport:
        """Decipher *source* into *destination*.

        Raises the same errors as :meth:`encipher_file`, plus
        :class:`MarkerMismatchError`. On any error *destination* is left
        untouched.
        """
        return self._file(Direction.DECIPHER, source, destination, key, binary)

    def _file(
        self,
        direction: Direction,
        source: Union[str, Path],
        destination: Union[str, Path],
        key: str,
        binary: bool,
    ) -> SessionReport:
        settings = self.config.vigenere
        if binary and not self.policy.byte_compatible:
            raise ValueError(
                f"Binary mode needs a policy within one byte; "
                f"{self.policy.name!r} reaches {self.policy.high:#x}"
            )

        engine = VigenereEngine(key, self.policy)
        src = Path(source)
        dest = Path(destination)
        symbols = iter_file_symbols(
            src,
            chunk_size=settings.chunk_size,
            binary=binary,
            encoding=settings.encoding,
        )

        with self.logger.operation(f"{direction.value}_file"):
            # Open and decode the first chunk before touching the destination.
            head = list(islice(symbols, 1))
            dest.parent.mkdir(parents=True, exist_ok=True)
            partial = tempfile.NamedTemporaryFile(
                dir=dest.parent,
                prefix=f".{dest.name}.",
                suffix=".part",
                delete=False,
            )
            partial_path = Path(partial.name)
            try:
                with partial as fh:

                    def sink(output: Iterator[Symbol]) -> int:
                        return write_symbols_to(
                            output,
                            fh,
                            batch_size=settings.batch_size,
                            binary=binary,
                            encoding=settings.encoding,
                        )

                    report = self._run(
                        direction,
                        engine,
                        chain(head, symbols),
                        sink,
                        source_kind=SourceKind.FILE,
                        source=str(src),
                        destination=str(dest),
                        binary=binary,
                    )
                partial_path.replace(dest)
            except BaseException:
                partial_path.unlink(missing_ok=True)
                raise

        self.logger.info(
            "%s -> %s: %d symbols written",
            src,
            dest,
            report.symbols_written,
        )
        return report

    # ------------------------------------------------------------------ #
    #  Shared pipeline
    # ------------------------------------------------------------------ #

    def _run(
        self,
        direction: Direction,
        engine: VigenereEngine,
        symbols: Iterable[Symbol],
        sink: Callable[[Iterator[Symbol]], int],
        *,
        source_kind: SourceKind,
        source: str,
        destination: Optional[str],
        binary: bool,
    ) -> SessionReport:
        counted = _CountingIterator(symbols)
        marker = self._marker_symbols(binary)

        report = SessionReport(
            direction=direction,
            policy=self.policy.name,
            key_length=engine.key_length,
            source_kind=source_kind,
            source=source,
            destination=destination,
            binary=binary,
            marker_used=bool(marker),
        )

        with self.logger.timed(f"{direction.value} {source}") as timer:
            if direction is Direction.ENCIPHER:
                written = sink(engine.cipher(chain(marker, counted)))
                written -= len(marker)
                consumed = written
            else:
                output = engine.decipher(counted)
                if marker:
                    self._verify_marker(output, marker)
                    report.marker_verified = True
                written = sink(output)
                consumed = written + len(marker)

        report.symbols_read = counted.count
        report.symbols_written = written
        report.symbols_dropped = counted.count - consumed
        report.finished_at = _dt.datetime.now(_dt.timezone.utc)
        report.elapsed_seconds = timer.elapsed
        if report.symbols_dropped:
            self.logger.debug(
                "Dropped %d out-of-domain symbols (%s policy)",
                report.symbols_dropped,
                self.policy.name,
            )
        return report

    def _marker_symbols(self, binary: bool) -> list[Symbol]:
        if binary:
            return [ord(ch) for ch in self._marker]
        return list(self._marker)

    def _verify_marker(self, output: Iterator[Symbol], marker: list[Symbol]) -> None:
        prefix = list(islice(output, len(marker)))
        if prefix != marker:
            self.logger.warning(
                "Identifying marker mismatch after %d symbols", len(prefix)
            )
            raise MarkerMismatchError(len(marker))
