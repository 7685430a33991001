"""Tests for the built-in vocabulary rules and the text scanner."""

import pytest

from unai.rewrite import clean
from unai.rules_text import TEXT_RULES, apply_text_rules


def test_utilize_flagged_with_replacement():
    findings = apply_text_rules("We should utilize this approach.\n")
    assert len(findings) == 1
    f = findings[0]
    assert (f.line, f.col, f.matched) == (1, 10, "utilize")
    assert f.replacement == "use"
    assert f.severity == "high"
    assert f.rule_id == "text/utilize"


@pytest.mark.parametrize(
    "text",
    [
        "The pivotale moment.",
        "The commencement was today.",
        "Utilization is high.",
        "A notable result.",
        "Es un resultado notable.",
        "Une épivotale chose.",
    ],
)
def test_no_substring_false_positives(text):
    assert apply_text_rules(text) == [], f"unexpected findings for {text!r}"


def test_fenced_block_with_info_string_skipped():
    text = "```python\nutilize = 1\n```\n"
    assert apply_text_rules(text) == []


def test_text_after_closing_fence_is_scanned():
    text = "```\ndelve\n```\nWe delve.\n"
    findings = apply_text_rules(text)
    assert [f.line for f in findings] == [4]


def test_bare_url_lines_skipped():
    assert apply_text_rules("https://example.com/utilize\n") == []
    assert apply_text_rules("   http://example.com/delve\n") == []


def test_backtick_span_skipped():
    findings = apply_text_rules("Use `utilize` and utilize bar.\n")
    assert len(findings) == 1
    assert findings[0].col == 18


def test_unclosed_backtick_does_not_crash():
    assert apply_text_rules("see `utilize here\n") == []


def test_findings_follow_rule_table_order():
    findings = apply_text_rules("Moreover, we utilize and delve.\n")
    assert [f.matched for f in findings] == ["delve", "utilize", "Moreover"]


def test_repeated_word_left_to_right():
    findings = apply_text_rules("utilize, utilize\n")
    assert [f.col for f in findings] == [0, 9]


def test_uppercase_input_keeps_original_text():
    findings = apply_text_rules("UTILIZE this.")
    assert findings[0].matched == "UTILIZE"


def test_column_is_utf8_byte_offset():
    findings = apply_text_rules("café utilize\n")
    assert findings[0].col == len("café ".encode("utf-8"))
    assert findings[0].end_col == findings[0].col + 7


def test_sycophantic_opener_is_critical():
    findings = apply_text_rules("Certainly! Here you go.")
    assert len(findings) == 1
    assert findings[0].severity == "critical"
    assert findings[0].matched == "Certainly!"


def test_overlapping_phrases_both_reported():
    findings = apply_text_rules("I'd be happy to help with that.")
    assert {f.rule_id for f in findings} == {"text/happy to help", "text/i'd be happy to"}


def test_table_needles_are_lowercase_and_single_line():
    for rule in TEXT_RULES:
        assert rule.needle == rule.needle.lower()
        assert rule.needle
        if rule.replacement is not None:
            assert "\n" not in rule.replacement


def test_replacements_do_not_match_any_rule():
    for rule in TEXT_RULES:
        if rule.replacement:
            assert apply_text_rules(rule.replacement) == [], rule.replacement


def test_cleaning_is_idempotent():
    text = "We utilize and leverage it; this could potentially delve deeper.\n"
    cleaned = clean(text, apply_text_rules(text))
    assert [f for f in apply_text_rules(cleaned) if f.fixable] == []


NEEDLES = [rule.needle for rule in TEXT_RULES]


@pytest.mark.parametrize("needle", NEEDLES)
def test_every_needle_needs_word_boundaries(needle):
    assert apply_text_rules(f"a{needle}1\n") == []


@pytest.mark.parametrize("needle", NEEDLES)
def test_every_needle_suppressed_in_fenced_block(needle):
    assert apply_text_rules(f"```\n{needle}\n```\n") == []


@pytest.mark.parametrize("needle", NEEDLES)
def test_every_finding_slices_back_to_matched(needle):
    line = f"Café naïve: {needle} über"
    findings = apply_text_rules(line + "\n")
    assert findings, f"no finding for {needle!r}"
    raw = line.encode("utf-8")
    for f in findings:
        assert raw[f.col : f.end_col].decode("utf-8") == f.matched
