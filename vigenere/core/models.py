"""
Vigenère Session Models
========================

Pydantic models describing the outcome of a cipher session. They are
consumed by the Rich console display and serialised verbatim as the
JSON report.

References:
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import datetime as _dt
import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class Direction(str, enum.Enum):
    """Which of the two mirror transforms was applied."""

    ENCIPHER = "encipher"
    DECIPHER = "decipher"


class SourceKind(str, enum.Enum):
    """Where the input symbols came from."""

    TEXT = "text"
    FILE = "file"


# ===================================================================== #
#  Session Report
# ===================================================================== #


class SessionReport(BaseModel):
    """Summary of one encipher / decipher session.

    Attributes:
        direction: Transform that was applied.
        policy: Name of the symbol policy.
        key_length: Number of symbols in the validated key.
        source_kind: Text buffer or file.
        source: Input file path, or ``"<text>"``.
        destination: Output file path, or ``None`` when kept in memory.
        binary: Whether symbols were raw bytes rather than characters.
        symbols_read: Symbols pulled from the source (marker excluded).
        symbols_written: Symbols emitted to the destination (marker excluded).
        symbols_dropped: Out-of-domain input symbols removed by the filter.
        marker_used: Whether the identifying marker was applied.
        marker_verified: ``True`` if the marker matched on decipher,
            ``None`` when no check was made.
        started_at: UTC start timestamp.
        finished_at: UTC end timestamp.
        elapsed_seconds: Wall-clock duration.
    """

    model_config = ConfigDict(validate_assignment=True, use_enum_values=False)

    direction: Direction
    policy: str = Field(..., min_length=1)
    key_length: int = Field(..., ge=1)
    source_kind: SourceKind = SourceKind.TEXT
    source: str = "<text>"
    destination: Optional[str] = None
    binary: bool = False
    symbols_read: int = Field(default=0, ge=0)
    symbols_written: int = Field(default=0, ge=0)
    symbols_dropped: int = Field(default=0, ge=0)
    marker_used: bool = False
    marker_verified: Optional[bool] = None
    started_at: _dt.datetime = Field(
        default_factory=lambda: _dt.datetime.now(_dt.timezone.utc)
    )
    finished_at: Optional[_dt.datetime] = None
    elapsed_seconds: float = Field(default=0.0, ge=0.0)

    @property
    def retention(self) -> float:
        """Fraction of input symbols that survived the domain filter."""
        if self.symbols_read == 0:
            return 1.0
        return self.symbols_written / self.symbols_read

    def summary(self) -> str:
        """One-line human-readable summary."""
        dropped = (
            f", {self.symbols_dropped:,} dropped" if self.symbols_dropped else ""
        )
        return (
            f"{self.direction.value.capitalize()}ed {self.symbols_written:,} "
            f"symbols ({self.policy} policy{dropped}) in "
            f"{self.elapsed_seconds:.3f}s"
        )


class TransformOutcome(BaseModel):
    """In-memory transform result: the produced text plus its report."""

    text: str
    report: SessionReport
