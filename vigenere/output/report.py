"""
Vigenère Report Generator
==========================

Generates JSON reports from cipher session results. The report provides
machine-readable structured output suitable for scripting and CI
pipelines. Key material is never part of a report.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from vigenere import __version__
from vigenere.core.models import SessionReport


class VigenereReportGenerator:
    """Builds and writes JSON reports for :class:`SessionReport` objects.

    Usage::

        generator = VigenereReportGenerator()
        text = generator.render_json(report)
        generator.generate_json(report, Path("session.json"))
    """

    def build(self, report: SessionReport) -> dict[str, Any]:
        """Assemble the report document as a plain dictionary."""
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": "vigenere",
                "version": __version__,
            },
            "summary": report.summary(),
            "session": report.model_dump(mode="json"),
        }

    def render_json(self, report: SessionReport) -> str:
        """Return the report as an indented JSON string."""
        return json.dumps(self.build(report), indent=2, ensure_ascii=False)

    def generate_json(self, report: SessionReport, output_path: Path) -> Path:
        """Write the JSON report to *output_path*.

        Args:
            report: Session report to serialise.
            output_path: Path to write the JSON file.

        Returns:
            Path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(report), encoding="utf-8")
        return output_path
