"""
Tabula Console Interface
=========================

Rich-powered console abstraction providing a unified presentation layer
for every Tabula tool.

The class wraps :class:`rich.console.Console` and adds convenience methods
for banners, section headers, severity-coloured messages, tables, and
status spinners -- all with consistent styling.

Console output goes to stderr by default so that cipher output written
to stdout can be piped without decoration.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme -- consistent palette across all Tabula output
# ---------------------------------------------------------------------------
_TABULA_THEME = Theme(
    {
        "tabula.banner": "bold bright_cyan",
        "tabula.section": "bold bright_magenta",
        "tabula.success": "bold green",
        "tabula.warning": "bold yellow",
        "tabula.error": "bold red",
        "tabula.info": "bold bright_blue",
        "tabula.dim": "dim white",
        "tabula.highlight": "bold bright_white",
    }
)

# ---------------------------------------------------------------------------
# ASCII banner art
# ---------------------------------------------------------------------------
_BANNER_ART = r"""
[bright_cyan]
  ████████╗ █████╗ ██████╗ ██╗   ██╗██╗      █████╗
  ╚══██╔══╝██╔══██╗██╔══██╗██║   ██║██║     ██╔══██╗
     ██║   ███████║██████╔╝██║   ██║██║     ███████║
     ██║   ██╔══██║██╔══██╗██║   ██║██║     ██╔══██║
     ██║   ██║  ██║██████╔╝╚██████╔╝███████╗██║  ██║
     ╚═╝   ╚═╝  ╚═╝╚═════╝  ╚═════╝ ╚══════╝╚═╝  ╚═╝
[/bright_cyan]"""

_TAGLINE = "Polyalphabetic Cipher Toolkit"


class TabulaConsole:
    """Unified console interface for all Tabula tools.

    Usage::

        con = TabulaConsole()
        con.banner()
        con.section("Session")
        con.success("Enciphered 1,024 symbols")
    """

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        stderr: bool = True,
    ) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
            record: Enable Rich recording for HTML / text export.
            stderr: Write to stderr instead of stdout.
        """
        self._console = Console(
            theme=_TABULA_THEME,
            quiet=quiet,
            record=record,
            stderr=stderr,
            highlight=False,
        )

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Display the Tabula ASCII-art banner.

        Args:
            version: Version string shown beneath the logo.
        """
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        subtitle = (
            f"[tabula.highlight]{_TAGLINE}[/tabula.highlight]\n"
            f"[tabula.dim]Version: {version}  |  {now}[/tabula.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(1, 2),
        )
        self._console.print(panel)

    # ------------------------------------------------------------------ #
    #  Section header
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            f"  {title}  ",
            style="tabula.section",
            characters="─",
        )
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(
            f"[tabula.success][✔] SUCCESS:[/tabula.success] {escape(message)}"
        )

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(
            f"[tabula.warning][⚠] WARNING:[/tabula.warning] {escape(message)}"
        )

    def error(self, message: str) -> None:
        """Print an error message."""
        self._console.print(
            f"[tabula.error][✘] ERROR:[/tabula.error] {escape(message)}"
        )

    def info(self, message: str) -> None:
        """Print an informational message."""
        self._console.print(
            f"[tabula.info][ℹ] INFO:[/tabula.info] {escape(message)}"
        )

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Iterable of row tuples; each element is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Status spinner
    # ------------------------------------------------------------------ #

    @contextmanager
    def status(
        self, message: str = "Working..."
    ) -> Generator[Any, None, None]:
        """Context-manager showing a spinner with a status message.

        Example::

            with con.status("Enciphering..."):
                report = session.encipher_file(src, dest, key)
        """
        with self._console.status(
            f"[tabula.info]{escape(message)}[/tabula.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def export_text(self) -> str:
        """Export recorded console output as plain text (requires ``record=True``)."""
        return self._console.export_text()
