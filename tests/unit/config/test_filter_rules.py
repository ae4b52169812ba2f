from __future__ import annotations

from pathlib import Path

from tag_finder.config import ExecutionOptions, FilterRules, default_filter_rules


def test_build_normalizes_extensions() -> None:
    rules = FilterRules.build(
        exclude_dirs=["node_modules"],
        include_extensions=[".TSX", "html"],
        css_extensions=["SCSS"],
    )

    assert rules.include_extensions == frozenset({"tsx", "html"})
    assert rules.css_extensions == frozenset({"scss"})
    assert rules.scanned_extensions == frozenset({"tsx", "html", "scss"})


def test_css_file_detection_uses_extension_only() -> None:
    rules = default_filter_rules()

    assert rules.is_css_file(Path("a/b/site.css"))
    assert rules.is_css_file("theme.SCSS")
    assert not rules.is_css_file("index.html")
    assert not rules.is_css_file("css")


def test_exclude_dir_is_exact_name_match() -> None:
    rules = default_filter_rules()

    assert rules.should_exclude_dir("node_modules")
    assert not rules.should_exclude_dir("node_modules_backup")
    assert not rules.should_exclude_dir("my-build")


def test_execution_options_resolve_thread_count() -> None:
    assert ExecutionOptions(thread_count=3).resolved_thread_count() == 3
    assert ExecutionOptions().resolved_thread_count() >= 1
