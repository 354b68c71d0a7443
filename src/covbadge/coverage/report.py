"""HTML coverage report generation.

Renders a parsed LCOV document as one self-contained HTML page:

- summary table: "All files" (from the document totals) plus one row per
  folder (unweighted mean of that folder's per-file percentages)
- per-file table: one row per record with missed lines/functions/branches
  revealed on hover

Both tables sort client-side on header click and sort by their first column
on load.
"""

from __future__ import annotations

import html
from collections import defaultdict
from pathlib import Path
from statistics import fmean
from typing import TYPE_CHECKING

from covbadge.core.logging import get_logger
from covbadge.coverage.models import FileCoverage, LcovDocument
from covbadge.coverage.parsers.lcov import percent
from covbadge.coverage.percent import color_for_percent, format_percent
from covbadge.coverage.ranges import RANGE_SEPARATOR

if TYPE_CHECKING:
    from covbadge.config.models import BadgeColorsConfig

log = get_logger("coverage.report")

ROOT_FOLDER_LABEL = "/"
ALL_FILES_LABEL = "All files"

_CSS = """
    body { font-family: system-ui, sans-serif; margin: 2em; color: #222; }
    h1 { margin-bottom: 0.2em; }
    table { border-collapse: collapse; width: 100%; margin: 1em 0 2em; }
    th, td { border: 1px solid #ddd; padding: 0.45em 0.6em; text-align: left; }
    th { background: #f4f4f4; cursor: pointer; user-select: none; white-space: nowrap; }
    th[aria-sort="ascending"]::after { content: " \\25B2"; }
    th[aria-sort="descending"]::after { content: " \\25BC"; }
    td.pct { position: relative; color: #fff; font-weight: bold;
             text-shadow: 0 1px 1px rgba(0, 0, 0, 0.45); white-space: nowrap; }
    td.pct .missed { display: none; position: absolute; z-index: 10; left: 0; top: 100%;
                     min-width: 10em; max-height: 20em; overflow-y: auto;
                     padding: 0.4em 0.6em; background: #333; color: #fff;
                     font-weight: normal; text-shadow: none; border-radius: 4px;
                     font-family: ui-monospace, monospace; font-size: 0.85em; }
    td.pct:hover .missed { display: block; }
    td.pct.has-missed { cursor: help; text-decoration: underline dotted; }
"""

_SCRIPT = """
    function sortTable(table, column, descending) {
      const body = table.tBodies[0];
      const rows = Array.from(body.rows);
      const key = (row) => {
        const cell = row.cells[column];
        return cell.dataset.sort !== undefined ? cell.dataset.sort : cell.textContent.trim();
      };
      rows.sort((a, b) => {
        const result = key(a).localeCompare(key(b), undefined, { numeric: true, sensitivity: "base" });
        return descending ? -result : result;
      });
      rows.forEach((row) => body.appendChild(row));
      Array.from(table.tHead.rows[0].cells).forEach((th, index) => {
        th.setAttribute("aria-sort", index === column ? (descending ? "descending" : "ascending") : "none");
      });
    }
    document.querySelectorAll("table.sortable").forEach((table) => {
      Array.from(table.tHead.rows[0].cells).forEach((th, index) => {
        th.addEventListener("click", () => {
          sortTable(table, index, th.getAttribute("aria-sort") === "ascending");
        });
      });
      sortTable(table, 0, false);
    });
"""


def render_html_report(document: LcovDocument, colors: BadgeColorsConfig) -> str:
    """Render the full HTML report for a parsed LCOV document."""
    totals = document.totals
    summary_rows = [
        _summary_row(
            ALL_FILES_LABEL,
            percent(totals.lines.hit, totals.lines.found),
            percent(totals.functions.hit, totals.functions.found),
            percent(totals.branches.hit, totals.branches.found),
            colors,
            sort_key="",
        )
    ]
    for folder, (lines, functions, branches) in folder_averages(document.files).items():
        summary_rows.append(_summary_row(folder, lines, functions, branches, colors))

    file_rows = [_file_row(fc, colors) for fc in document.files]

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Coverage Report</title>
  <style>{_CSS}</style>
</head>
<body>
  <h1>Coverage Report</h1>
  <h2>Summary</h2>
  <table class="sortable summary">
    <thead>
      <tr><th>Folder</th><th>Lines</th><th>Functions</th><th>Branches</th></tr>
    </thead>
    <tbody>
{"".join(summary_rows)}    </tbody>
  </table>
  <h2>Files</h2>
  <table class="sortable files">
    <thead>
      <tr><th>Folder</th><th>File</th><th>Lines</th><th>Functions</th><th>Branches</th></tr>
    </thead>
    <tbody>
{"".join(file_rows)}    </tbody>
  </table>
  <script>{_SCRIPT}</script>
</body>
</html>
"""


def write_html_report(
    document: LcovDocument,
    output_dir: Path,
    colors: BadgeColorsConfig,
    *,
    index_name: str = "index.html",
) -> Path:
    """Render and write the report, creating the folder as needed."""
    output_dir.mkdir(parents=True, exist_ok=True)
    index_file = output_dir / index_name
    index_file.write_text(render_html_report(document, colors), encoding="utf-8")
    log.info("coverage_report_written", path=str(index_file), files=len(document.files))
    return index_file


def folder_averages(
    files: list[FileCoverage],
) -> dict[str, tuple[float, float, float]]:
    """Per-folder mean of file percentages, keyed by folder in first-seen order."""
    grouped: dict[str, list[FileCoverage]] = defaultdict(list)
    for fc in files:
        grouped[fc.folder or ROOT_FOLDER_LABEL].append(fc)
    return {
        folder: (
            fmean(fc.lines_pct for fc in members),
            fmean(fc.functions_pct for fc in members),
            fmean(fc.branches_pct for fc in members),
        )
        for folder, members in grouped.items()
    }


def _summary_row(
    label: str,
    lines: float,
    functions: float,
    branches: float,
    colors: BadgeColorsConfig,
    *,
    sort_key: str | None = None,
) -> str:
    # The "All files" row sorts first via an empty sort key
    key_attr = "" if sort_key is None else f' data-sort="{html.escape(sort_key)}"'
    cells = "".join(_pct_cell(value, "", colors) for value in (lines, functions, branches))
    return f"      <tr><td{key_attr}>{html.escape(label)}</td>{cells}</tr>\n"


def _file_row(fc: FileCoverage, colors: BadgeColorsConfig) -> str:
    cells = (
        _pct_cell(fc.lines_pct, fc.missed_lines, colors)
        + _pct_cell(fc.functions_pct, fc.missed_functions, colors)
        + _pct_cell(fc.branches_pct, fc.missed_branches, colors)
    )
    return (
        f"      <tr><td>{html.escape(fc.folder)}</td>"
        f"<td>{html.escape(fc.file)}</td>{cells}</tr>\n"
    )


def _pct_cell(value: float, missed: str, colors: BadgeColorsConfig) -> str:
    color = html.escape(color_for_percent(value, colors))
    text = html.escape(format_percent(value))
    classes = "pct has-missed" if missed else "pct"
    tooltip = f'<div class="missed">{_escape_missed(missed)}</div>' if missed else ""
    return (
        f'<td class="{classes}" data-sort="{value:06.2f}" '
        f'style="background-color: {color}">{text}{tooltip}</td>'
    )


def _escape_missed(missed: str) -> str:
    """Escape names and numbers but keep the line-break separators."""
    return RANGE_SEPARATOR.join(html.escape(part) for part in missed.split(RANGE_SEPARATOR))
