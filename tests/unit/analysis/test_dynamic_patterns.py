from __future__ import annotations

from tag_finder.analysis import detect_dynamic_patterns, find_pattern_usage, pattern_key
from tag_finder.models import DynamicPattern


def test_type_family_yields_single_prefix_pattern() -> None:
    patterns = detect_dynamic_patterns(["type-fire", "type-water", "type-grass"])

    assert len(patterns) == 1
    pattern = patterns[0]
    assert pattern.prefix == "type-"
    assert pattern.suffix == ""
    assert pattern.pattern == "type-*"
    assert pattern.matching_classes == frozenset({"type-fire", "type-water", "type-grass"})


def test_names_without_separator_yield_no_pattern() -> None:
    assert detect_dynamic_patterns(["a", "b"]) == []
    assert detect_dynamic_patterns(["header", "footer"]) == []


def test_single_member_group_is_not_a_pattern() -> None:
    assert detect_dynamic_patterns(["type-fire", "card-body"]) == []


def test_duplicate_names_count_once() -> None:
    assert detect_dynamic_patterns(["type-fire", "type-fire"]) == []


def test_short_prefix_is_rejected() -> None:
    assert detect_dynamic_patterns(["-a", "-b"]) == []


def test_pattern_key_uses_trailing_separator_segment() -> None:
    assert pattern_key("type-fire") == "type-*"
    assert pattern_key("card-header-active") == "card-*-active"
    assert pattern_key("btn_primary-hover") == "btn_*-hover"
    assert pattern_key("plain") is None


def test_suffix_family_keeps_common_suffix() -> None:
    patterns = detect_dynamic_patterns(["card-header-active", "card-body-active"])

    assert [(item.prefix, item.suffix, item.pattern) for item in patterns] == [
        ("card-", "-active", "card-*-active"),
    ]


def test_prefix_and_suffix_never_overlap() -> None:
    patterns = detect_dynamic_patterns(["ab-ab", "ab-abab"])

    assert len(patterns) == 1
    pattern = patterns[0]
    assert pattern.prefix == "ab-ab"
    assert pattern.suffix == ""
    assert pattern.pattern == "ab-ab*"


def test_patterns_sorted_by_display_form() -> None:
    patterns = detect_dynamic_patterns(["zone-a1", "zone-b2", "area-x1", "area-y2"])

    assert [pattern.pattern for pattern in patterns] == ["area-*", "zone-*"]


def test_template_literal_interpolation_is_usage() -> None:
    pattern = DynamicPattern.build("type-", "", ["type-fire", "type-water"])

    assert find_pattern_usage("const cls = `type-${pokemonType}`;", pattern)


def test_brace_interpolation_is_usage() -> None:
    pattern = DynamicPattern.build("type-", "", ["type-fire"])

    assert find_pattern_usage('cls = "type-{}".format(kind)', pattern)
    assert find_pattern_usage('cls = f"type-{kind}"', pattern)


def test_quoted_variable_interpolation_is_usage() -> None:
    pattern = DynamicPattern.build("type-", "", ["type-fire"])

    assert find_pattern_usage('<div class="badge type-$kind">', pattern)
    assert find_pattern_usage('class = "type-#{kind}"', pattern)


def test_concatenation_is_usage() -> None:
    pattern = DynamicPattern.build("icon-", "-lg", ["icon-home-lg", "icon-user-lg"])

    assert find_pattern_usage('el.className = "icon-" + name + "-lg";', pattern)
    assert find_pattern_usage("el.className = 'icon-' + name;", pattern)


def test_suffix_is_required_inside_interpolation_form() -> None:
    pattern = DynamicPattern.build("icon-", "-lg", ["icon-home-lg", "icon-user-lg"])

    assert find_pattern_usage("`icon-${name}-lg`", pattern)
    assert not find_pattern_usage("`icon-${name}-sm`", pattern)


def test_unrelated_content_is_not_usage() -> None:
    pattern = DynamicPattern.build("type-", "", ["type-fire"])

    assert not find_pattern_usage("const kind = pokemon.type;", pattern)
    assert not find_pattern_usage(".type-fire { color: red; }", pattern)


def test_prefix_is_escaped_in_usage_forms() -> None:
    pattern = DynamicPattern.build("a.b-", "", ["a.b-x", "a.b-y"])

    assert not find_pattern_usage("`aXb-${v}`", pattern)
    assert find_pattern_usage("`a.b-${v}`", pattern)


def test_static_member_literal_is_not_usage() -> None:
    pattern = DynamicPattern.build("type-", "", ["type-fire", "type-water"])

    assert not find_pattern_usage('<div class="type-fire">', pattern)
    assert not find_pattern_usage("const cls = 'type-fire';", pattern)


def test_placeholder_after_literal_middle_is_usage() -> None:
    pattern = DynamicPattern.build("icon-", "-lg", ["icon-home-lg", "icon-user-lg"])

    assert find_pattern_usage('"icon-x{size}-lg"', pattern)
    assert find_pattern_usage("'icon-a$name-lg'", pattern)
    assert not find_pattern_usage('"icon-home-lg"', pattern)
