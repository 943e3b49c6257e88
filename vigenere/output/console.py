"""
Vigenère Console Output
========================

Rich-based console formatters for cipher sessions: a session summary
panel and the table of available symbol policies.

Uses the Tabula shared console infrastructure for consistent styling.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.text import Text

from shared.console import TabulaConsole
from vigenere.core.models import Direction, SessionReport
from vigenere.core.policy import SymbolPolicy


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_DIRECTION_COLOURS: dict[str, str] = {
    Direction.ENCIPHER.value: "bright_magenta",
    Direction.DECIPHER.value: "bright_green",
}


def _format_code(code: int) -> str:
    return f"U+{code:04X}" if code > 0xFF else f"0x{code:02X}"


class VigenereConsoleOutput:
    """Console output formatters for Vigenère sessions.

    Usage::

        console = TabulaConsole()
        output = VigenereConsoleOutput(console)
        output.display_report(report)
        output.display_policies(available_policies())
    """

    def __init__(self, console: Optional[TabulaConsole] = None) -> None:
        """Initialise the console output formatter.

        Args:
            console: TabulaConsole instance. Creates one if not provided.
        """
        self.console = console or TabulaConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Session Display
    # ------------------------------------------------------------------ #

    def display_report(self, report: SessionReport) -> None:
        """Display a session summary panel."""
        colour = _DIRECTION_COLOURS.get(report.direction.value, "white")
        title = report.direction.value.capitalize()
        self.console.section(f"{title} Session")

        body = Text()
        rows: list[tuple[str, str]] = [
            ("Policy", report.policy),
            ("Key Length", str(report.key_length)),
            ("Source", report.source),
            ("Destination", report.destination or "<stdout>"),
            ("Mode", "binary" if report.binary else "text"),
            ("Symbols Read", f"{report.symbols_read:,}"),
            ("Symbols Written", f"{report.symbols_written:,}"),
            ("Symbols Dropped", f"{report.symbols_dropped:,}"),
            ("Elapsed", f"{report.elapsed_seconds:.3f}s"),
        ]
        if report.marker_used:
            marker_state = {
                True: "verified",
                False: "mismatch",
                None: "prepended",
            }[report.marker_verified]
            rows.append(("Marker", marker_state))

        for label, value in rows:
            body.append(f"{label}: ", style="bold")
            body.append(f"{value}\n")

        self._rich.print(
            Panel(
                body,
                title=f"[bold {colour}]{title}[/bold {colour}]",
                border_style=colour,
                expand=False,
            )
        )

        if report.symbols_dropped:
            self.console.warning(
                f"{report.symbols_dropped:,} symbols outside the "
                f"{report.policy} alphabet were dropped"
            )
        self.console.success(report.summary())

    # ------------------------------------------------------------------ #
    #  Policy Display
    # ------------------------------------------------------------------ #

    def display_policies(
        self,
        policies: Sequence[SymbolPolicy],
        default: Optional[str] = None,
    ) -> None:
        """Display the available symbol policies as a table."""
        rows = []
        for policy in policies:
            name = f"{policy.name} (default)" if policy.name == default else policy.name
            rows.append((
                name,
                _format_code(policy.low),
                _format_code(policy.high),
                f"{policy.range_len:,}",
                "yes" if policy.fold_case else "no",
                "yes" if policy.byte_compatible else "no",
                policy.description,
            ))
        self.console.table(
            "Symbol Policies",
            ["Name", "Low", "High", "Size", "Folds Case", "Bytes", "Description"],
            rows,
            styles=["bold bright_cyan", "", "", "", "", "", "dim"],
        )
