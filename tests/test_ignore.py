"""Tests for autodoc.ignore."""

from __future__ import annotations

from autodoc.ignore import build_rule, build_rules, should_ignore


def test_build_rule_parses_flags() -> None:
    rule = build_rule("!/build/")

    assert rule is not None
    assert rule.pattern == "build"
    assert rule.negate
    assert rule.anchored
    assert rule.directory_only
    assert not rule.has_slash


def test_blank_and_comment_patterns_are_dropped() -> None:
    assert build_rule("   ") is None
    assert build_rule("# note") is None
    assert build_rules(["", "*.min.js", "# x"])[0].pattern == "*.min.js"


def test_unanchored_pattern_matches_any_segment() -> None:
    rules = build_rules(["vendor/"])

    assert should_ignore("vendor", True, rules)
    assert should_ignore("lib/vendor", True, rules)
    assert not should_ignore("lib/vendor.js", False, rules)


def test_anchored_pattern_matches_from_base_only() -> None:
    rules = build_rules(["/generated/"])

    assert should_ignore("generated", True, rules)
    assert not should_ignore("lib/generated", True, rules)


def test_slash_pattern_matches_full_relative_path() -> None:
    rules = build_rules(["lib/*.js"])

    assert should_ignore("lib/a.js", False, rules)
    assert not should_ignore("a.js", False, rules)


def test_negation_reincludes_later_match() -> None:
    rules = build_rules(["*.js", "!keep.js"])

    assert should_ignore("drop.js", False, rules)
    assert not should_ignore("keep.js", False, rules)
