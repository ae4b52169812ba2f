from __future__ import annotations

from pathlib import Path

from tag_finder.analysis import UsageDetector, analyze_directory
from tag_finder.config import AppConfig, ExecutionOptions, default_filter_rules
from tag_finder.execution import NOTE, RecordingObserver


def _config(progress: bool = False) -> AppConfig:
    return AppConfig(
        rules=default_filter_rules(),
        execution=ExecutionOptions(thread_count=4, progress_enabled=progress),
    )


def _names(records) -> list[str]:
    return [record.name for record in records]


def test_header_used_footer_unused(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text(".header{}.footer{}\n", encoding="utf-8")
    (tmp_path / "index.html").write_text('<div class="header"></div>\n', encoding="utf-8")

    report = analyze_directory(tmp_path, config=_config())

    assert report.total_classes == 2
    assert _names(report.used_classes) == ["header"]
    assert _names(report.unused_classes) == ["footer"]


def test_report_invariants_hold(tmp_path: Path) -> None:
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "a.css").write_text(".one {}\n.two {}\n.three {}\n", encoding="utf-8")
    (tmp_path / "css" / "b.scss").write_text(".two {}\n.four {\n  .five {}\n}\n", encoding="utf-8")
    (tmp_path / "app.tsx").write_text('<p className="two five" />\n', encoding="utf-8")

    report = analyze_directory(tmp_path, config=_config())

    assert report.total_classes == len(report.unused_classes) + len(report.used_classes) == 6
    bucketed = [
        (usage.css_class.name, usage.css_class.file)
        for usages in report.by_file.values()
        for usage in usages
    ]
    flat = [(record.name, record.file) for record in report.used_classes + report.unused_classes]
    assert sorted(bucketed) == sorted(flat)
    assert len(bucketed) == len(set(bucketed))
    for file, usages in report.by_file.items():
        assert all(usage.css_class.file == file for usage in usages)
    assert set(_names(report.used_classes)) == {"two", "five"}


def test_class_referenced_only_from_another_stylesheet_stays_unused(tmp_path: Path) -> None:
    (tmp_path / "base.scss").write_text(".placeholder-card { padding: 0; }\n", encoding="utf-8")
    (tmp_path / "theme.scss").write_text(
        ".profile {\n  @extend .placeholder-card;\n}\n", encoding="utf-8"
    )
    (tmp_path / "index.html").write_text('<div class="profile"></div>\n', encoding="utf-8")

    report = analyze_directory(tmp_path, config=_config())

    assert "placeholder-card" in _names(report.unused_classes)
    assert _names(report.used_classes) == ["profile"]


def test_dynamic_pattern_rescues_template_built_classes(tmp_path: Path) -> None:
    (tmp_path / "types.css").write_text(
        ".type-fire {}\n.type-water {}\n.type-grass {}\n.orphan {}\n", encoding="utf-8"
    )
    (tmp_path / "badge.ts").write_text(
        "export const badge = (pokemonType: string) => `type-${pokemonType}`;\n",
        encoding="utf-8",
    )

    report = analyze_directory(tmp_path, config=_config())

    assert _names(report.used_classes) == ["type-fire", "type-water", "type-grass"]
    assert _names(report.unused_classes) == ["orphan"]


def test_pattern_without_usage_leaves_family_unused(tmp_path: Path) -> None:
    (tmp_path / "types.css").write_text(".type-fire {}\n.type-water {}\n", encoding="utf-8")
    (tmp_path / "main.js").write_text("const kind = 'fire';\n", encoding="utf-8")

    report = analyze_directory(tmp_path, config=_config())

    assert _names(report.unused_classes) == ["type-fire", "type-water"]


def test_static_sibling_does_not_rescue_family(tmp_path: Path) -> None:
    (tmp_path / "types.css").write_text(".type-fire {}\n.type-water {}\n", encoding="utf-8")
    (tmp_path / "index.html").write_text('<div class="type-fire"></div>\n', encoding="utf-8")

    report = analyze_directory(tmp_path, config=_config())

    assert _names(report.used_classes) == ["type-fire"]
    assert _names(report.unused_classes) == ["type-water"]


def test_excluded_directories_do_not_count_as_usage(tmp_path: Path) -> None:
    (tmp_path / "app.css").write_text(".vendor-only {}\n", encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "lib.js").write_text("'vendor-only'\n", encoding="utf-8")

    report = analyze_directory(tmp_path, config=_config())

    assert _names(report.unused_classes) == ["vendor-only"]


def test_empty_directory_gives_empty_report(tmp_path: Path) -> None:
    report = analyze_directory(tmp_path, config=_config())

    assert report.total_classes == 0
    assert report.by_file == {}
    assert report.to_dict()["unused_classes"] == []


def test_detector_reports_progress_through_observer(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text(".alpha {}\n.beta {}\n", encoding="utf-8")
    (tmp_path / "index.html").write_text('<i class="alpha"></i>\n', encoding="utf-8")
    observer = RecordingObserver()

    UsageDetector(_config(progress=True), observer).generate_report(tmp_path)

    phases = {event.phase for event in observer.events}
    assert {"Reading files", "Extracting classes", "Checking exact matches"} <= phases
    messages = [event.message for event in observer.of_kind(NOTE)]
    assert "Found 2 CSS classes in 1 stylesheets" in messages
    assert messages[-1] == "Analysis complete: 1 unused of 2"


def test_disabled_progress_emits_nothing(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text(".alpha {}\n", encoding="utf-8")
    observer = RecordingObserver()

    UsageDetector(_config(progress=False), observer).generate_report(tmp_path)

    assert observer.events == []
