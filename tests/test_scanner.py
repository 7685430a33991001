"""Tests for the scan pipeline: mode routing, user rules and filtering."""

import pytest

from unai.models import SEV_ORDER, SEVERITIES
from unai.policy import Config
from unai.scanner import Scanner, effective_categories, filter_findings
from unai.rules_text import apply_text_rules


def config(**kwargs):
    data = {"version": 1}
    data.update(kwargs)
    return Config.from_dict(data)


def test_pipeline_returns_findings_without_rendering():
    result = Scanner(mode="text").scan("We should utilize this approach.\n", "notes.md")
    assert result.mode == "text"
    assert result.filename == "notes.md"
    assert len(result.findings) == 1
    assert result.cleaned == "We should use this approach.\n"
    assert [f.matched for f in result.fixable] == ["utilize"]


def test_no_findings_on_clean_input():
    result = Scanner().scan("hello world\n")
    assert result.findings == []
    assert result.cleaned == "hello world\n"


def test_ignore_block_suppresses_findings():
    text = "<!-- unai-ignore -->\nCertainly!\n<!-- /unai-ignore -->\n"
    assert Scanner(mode="text").scan(text).findings == []


def test_min_severity_filters_low():
    result = Scanner(mode="text", min_severity="medium").scan("Moreover, we utilize it.\n")
    assert [f.matched for f in result.findings] == ["utilize"]


def test_ignore_words_case_insensitive():
    cfg = config(ignore={"words": ["UTILIZE"]})
    assert Scanner(cfg, mode="text").scan("Utilize it.\n").findings == []


def test_text_mode_text_rules_before_structural():
    text = "Moreover, X. Furthermore, Y. Additionally, Z."
    rules = [f.rule_id for f in Scanner(mode="text").scan(text).findings]
    assert rules == ["text/moreover", "text/furthermore", "structural/connector-density"]


def test_commit_mode_runs_text_and_commit_rules():
    result = Scanner().scan("Added utilize to the codebase", "COMMIT_EDITMSG")
    assert result.mode == "commit"
    messages = [f.message for f in result.findings]
    assert any("utilize" in m for m in messages)
    assert any("imperative mood" in m for m in messages)


def test_code_mode_excludes_commit_rules_for_ordinary_files():
    assert Scanner(mode="code").scan("Added various things\n", "main.py").findings == []


def test_code_mode_commit_file_runs_commit_rules():
    result = Scanner(mode="code").scan("Added x\n", "COMMIT_EDITMSG")
    assert any(f.rule_id == "commit/past-tense" for f in result.findings)


def test_code_mode_commit_file_with_narrowed_categories():
    result = Scanner(mode="code", categories=["naming"]).scan("Added userManager\n", "COMMIT_EDITMSG")
    rules = {f.rule_id for f in result.findings}
    assert rules == {"code/anemic-suffix", "commit/past-tense"}


def test_user_rules_appended_in_code_mode():
    cfg = config(rules=[{"pattern": "synergize"}])
    result = Scanner(cfg, mode="code").scan("# we synergize here\n", "x.py")
    assert [f.rule_id for f in result.findings] == ["user/synergize"]


def test_ignored_files_are_not_scanned():
    cfg = config(ignore={"files": ["CHANGELOG.md"]})
    result = Scanner(cfg).scan("Certainly! We delve.\n", "CHANGELOG.md")
    assert result.skipped
    assert result.findings == []


def test_effective_categories():
    assert "commits" not in effective_categories([], False)
    assert effective_categories([], True) == []
    assert effective_categories(["naming"], False) == ["naming"]


def test_filter_order_and_ignored_lines():
    text = "We utilize it.\n# unai-ignore-next-line\nWe utilize it.\n"
    findings = filter_findings(apply_text_rules(text), text)
    assert [f.line for f in findings] == [1]


def test_unknown_min_severity_rejected():
    with pytest.raises(ValueError):
        Scanner(min_severity="urgent")


def test_severity_ranks_are_strictly_ordered():
    assert SEV_ORDER["critical"] > SEV_ORDER["high"] > SEV_ORDER["medium"] > SEV_ORDER["low"]
    assert list(SEVERITIES) == sorted(SEV_ORDER, key=SEV_ORDER.get, reverse=True)


ALL_SEVERITIES_TEXT = "Certainly! We utilize a comprehensive plan. Moreover, done.\n"


@pytest.mark.parametrize("threshold", SEVERITIES)
def test_min_severity_keeps_findings_at_or_above_threshold(threshold):
    findings = apply_text_rules(ALL_SEVERITIES_TEXT)
    assert {f.severity for f in findings} == set(SEVERITIES)
    kept = filter_findings(findings, ALL_SEVERITIES_TEXT, min_severity=threshold)
    expected = [f for f in findings if SEV_ORDER[f.severity] >= SEV_ORDER[threshold]]
    assert kept == expected
    assert Scanner(mode="text", min_severity=threshold).scan(ALL_SEVERITIES_TEXT).findings == expected
