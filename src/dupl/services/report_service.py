"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Renders a ScanReport for people (text block) or for scripts (key=value lines).
"""
from typing import List

from dupl.core.models import ScanReport, ReportFormat
from dupl.utils.convert_utils import ConvertUtils

LABEL_WIDTH = 24


class ReportBuilder:
    """Builds the final report text. Never writes anything itself."""

    def render(self, report: ScanReport, fmt: ReportFormat = ReportFormat.TEXT,
               list_sets: bool = False) -> str:
        if fmt == ReportFormat.KEY_VALUE:
            return self.render_key_value(report)
        return self.render_text(report, list_sets=list_sets)

    @staticmethod
    def _line(label: str, value) -> str:
        return f"{label + ':':<{LABEL_WIDTH}}{value}"

    def render_text(self, report: ScanReport, list_sets: bool = False) -> str:
        lines = [
            "=== Duplicate File Report ===",
            self._line("Start time", ConvertUtils.timestamp_to_human(report.started_at)),
            self._line("End time", ConvertUtils.timestamp_to_human(report.finished_at)),
            self._line("Total execution time", ConvertUtils.seconds_to_human(report.elapsed)),
            "",
            self._line("Directories scanned", " ".join(report.roots) if report.roots else "(none)"),
        ]
        if report.extensions:
            lines.append(self._line("Filetypes filtered", " ".join(report.extensions)))
        lines.append(self._line("Hash algorithm", report.algorithm))
        lines += [
            "",
            self._line("Total files checked", report.files_counted),
            self._line("Total size checked", ConvertUtils.bytes_to_human(report.bytes_counted)),
            "",
            self._line("Duplicate files found", report.duplicate_file_count),
            self._line(
                "Total size of dups",
                f"{ConvertUtils.bytes_to_human(report.duplicate_byte_count)} (Potential space savings)"
            ),
        ]
        if report.cancelled:
            lines.append("Scan interrupted: results are partial.")
        lines.append("=============================")

        if list_sets:
            lines += self.render_sets(report)

        return "\n".join(lines)

    @staticmethod
    def render_sets(report: ScanReport) -> List[str]:
        if not report.duplicate_sets:
            return ["", "No duplicate sets found."]

        lines = []
        for idx, group in enumerate(report.duplicate_sets, 1):
            lines.append("")
            lines.append(
                f"Set {idx} | Size: {ConvertUtils.bytes_to_human(group.size)} "
                f"| Files: {len(group.files)} | {report.algorithm}: {group.hex_digest}"
            )
            lines.append(f"   [KEEP] {group.kept.path}")
            for file in group.redundant:
                lines.append(f"   [DUP]  {file.path}")
        return lines

    @staticmethod
    def render_key_value(report: ScanReport) -> str:
        """One `key=value` per line; roots and extensions repeat their key."""
        lines = [f"root={root}" for root in report.roots]
        lines += [f"extension={ext}" for ext in report.extensions]
        lines += [
            f"algorithm={report.algorithm}",
            f"started_at={ConvertUtils.timestamp_to_human(report.started_at, '%Y-%m-%dT%H:%M:%S')}",
            f"finished_at={ConvertUtils.timestamp_to_human(report.finished_at, '%Y-%m-%dT%H:%M:%S')}",
            f"elapsed_seconds={report.elapsed:.3f}",
            f"files_counted={report.files_counted}",
            f"bytes_counted={report.bytes_counted}",
            f"duplicate_set_count={len(report.duplicate_sets)}",
            f"duplicate_file_count={report.duplicate_file_count}",
            f"duplicate_byte_count={report.duplicate_byte_count}",
            f"cancelled={'true' if report.cancelled else 'false'}",
        ]
        return "\n".join(lines)
