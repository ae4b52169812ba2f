"""Plain-text rendering of reports for the console."""

from __future__ import annotations

from tag_finder.models import ScanResult, UnusedReport

PREVIEW_LIMIT = 10


def header_line(width: int) -> str:
    return "=" * width


def section_line(width: int) -> str:
    return "-" * width


def render_summary(report: UnusedReport) -> list[str]:
    lines = [
        "",
        "UNUSED CSS CLASSES REPORT",
        header_line(50),
        f"Total classes analyzed: {report.total_classes}",
        f"Unused classes: {len(report.unused_classes)}",
        f"Used classes: {len(report.used_classes)}",
    ]
    if report.total_classes > 0:
        lines.append(f"Unused percentage: {report.unused_percentage:.1f}%")
    return lines


def render_preview(report: UnusedReport, limit: int = PREVIEW_LIMIT) -> list[str]:
    """Summary followed by the first unused classes."""
    lines = render_summary(report)
    if not report.unused_classes:
        return lines
    lines.extend(["", f"UNUSED CLASSES (first {limit}):"])
    for record in report.unused_classes[:limit]:
        lines.append(f"  .{record.name} in {record.file} (line {record.line})")
    remaining = len(report.unused_classes) - limit
    if remaining > 0:
        lines.append(f"  ... and {remaining} more")
        lines.extend(["", "Use --detailed for full list or --by-file for file breakdown"])
    return lines


def render_detailed(report: UnusedReport) -> list[str]:
    """Summary plus every unused class grouped by stylesheet."""
    lines = render_summary(report)
    if not report.unused_classes:
        return lines
    lines.extend(["", "UNUSED CLASSES:", section_line(30)])
    for file in report.files():
        unused = report.unused_in_file(file)
        if not unused:
            continue
        lines.extend(["", f"{file}:"])
        for usage in unused:
            lines.append(f"   .{usage.css_class.name} (line {usage.css_class.line})")
    lines.extend(
        [
            "",
            "TIP: Review these unused classes and consider removing them to clean up your CSS.",
        ]
    )
    return lines


def render_by_file(report: UnusedReport) -> list[str]:
    """Summary plus per-stylesheet used/unused counts."""
    lines = render_summary(report)
    lines.extend(["", "BY FILE BREAKDOWN:", section_line(40)])
    for file in report.files():
        usages = report.by_file[file]
        unused = [usage for usage in usages if usage.is_unused]
        lines.extend(
            [
                "",
                file,
                f"  Total: {len(usages)}, Unused: {len(unused)}, "
                f"Used: {len(usages) - len(unused)}",
            ]
        )
        if not unused:
            continue
        lines.append("  Unused classes:")
        for usage in unused:
            lines.append(f"    .{usage.css_class.name} (line {usage.css_class.line})")
    return lines


def render_word_results(word: str, result: ScanResult) -> list[str]:
    lines = [f"Search results for word: '{word}'", header_line(50)]
    if result.css_files:
        lines.append("Found in CSS/SCSS files:")
        lines.extend(f"  + {file}" for file in result.css_files)
    if result.other_files:
        lines.append("Found in other files:")
        lines.extend(f"  - {file}" for file in result.other_files)
    lines.extend(["", *render_word_conclusion(word, result)])
    return lines


def render_word_conclusion(word: str, result: ScanResult) -> list[str]:
    if result.is_css_only:
        return [
            f"SUCCESS: '{word}' appears ONLY in CSS/SCSS files!",
            "This code might be extraneous and safe to remove.",
        ]
    if not result.found:
        return [f"Word '{word}' not found in any files."]
    return [f"Word '{word}' appears in non-CSS files too."]
