from __future__ import annotations

from tag_finder.models import ClassRecord, ClassUsage, DynamicPattern, ScanResult, UnusedReport


def test_scan_result_css_only_invariant() -> None:
    assert ScanResult.from_matches(["a.css"], []).is_css_only is True
    assert ScanResult.from_matches(["a.css"], ["b.ts"]).is_css_only is False
    assert ScanResult.from_matches([], ["b.ts"]).is_css_only is False
    assert ScanResult.from_matches([], []).is_css_only is False


def test_report_wire_form_preserves_field_names_and_nesting() -> None:
    header = ClassRecord(name="header", file="style.css", line=1)
    footer = ClassRecord(name="footer", file="style.css", line=1)
    report = UnusedReport.from_usages(
        [
            ClassUsage(css_class=header, is_unused=False),
            ClassUsage(css_class=footer, is_unused=True),
        ]
    )

    assert report.to_dict() == {
        "total_classes": 2,
        "unused_classes": [{"name": "footer", "file": "style.css", "line": 1}],
        "used_classes": [{"name": "header", "file": "style.css", "line": 1}],
        "by_file": {
            "style.css": [
                {"class": {"name": "header", "file": "style.css", "line": 1}, "is_unused": False},
                {"class": {"name": "footer", "file": "style.css", "line": 1}, "is_unused": True},
            ]
        },
    }
    assert report.unused_percentage == 50.0
    assert [usage.css_class.name for usage in report.unused_in_file("style.css")] == ["footer"]


def test_dynamic_pattern_display_form() -> None:
    pattern = DynamicPattern.build("icon-", "-lg", ["icon-b-lg", "icon-a-lg"])

    assert pattern.pattern == "icon-*-lg"
    assert pattern.to_dict()["matching_classes"] == ["icon-a-lg", "icon-b-lg"]
