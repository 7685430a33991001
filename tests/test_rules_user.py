"""Tests for configured user rules."""

from unai.policy import Config
from unai.rules_user import apply_user_rules, bind_user_rules
from unai.scanner import Scanner


def config_with(*rules):
    return Config.from_dict({"version": 1, "rules": list(rules)})


def test_no_config_no_findings():
    assert apply_user_rules("ab ab", None) == []


def test_multiple_matches_same_line():
    findings = apply_user_rules("ab ab ab", config_with({"pattern": "ab"}))
    assert [f.col for f in findings] == [0, 3, 6]
    f = findings[0]
    assert f.message == "User rule: 'ab'"
    assert f.severity == "low"
    assert f.replacement is None
    assert f.rule_id == "user/ab"


def test_terminates_on_repeated_pattern():
    findings = apply_user_rules("x " * 1000, config_with({"pattern": "x"}))
    assert len(findings) == 1000


def test_pattern_matched_case_insensitively_with_replacement():
    cfg = config_with(
        {
            "pattern": "Synergize",
            "replacement": "work together",
            "severity": "high",
            "message": "Corporate jargon",
        }
    )
    findings = apply_user_rules("We SYNERGIZE daily.", cfg)
    assert len(findings) == 1
    f = findings[0]
    assert f.matched == "SYNERGIZE"
    assert (f.replacement, f.severity, f.message) == ("work together", "high", "Corporate jargon")


def test_disabled_rules_skipped():
    cfg = config_with({"pattern": "robust", "enabled": False}, {"pattern": "ab"})
    assert [r.needle for r in bind_user_rules(cfg)] == ["ab"]


def test_user_rules_respect_fences_and_backticks():
    cfg = config_with({"pattern": "foo"})
    text = "```\nfoo\n```\nuse `foo` here\nfoo\n"
    findings = apply_user_rules(text, cfg)
    assert [f.line for f in findings] == [5]


def test_user_rules_need_word_boundaries():
    assert apply_user_rules("foobar barfoo", config_with({"pattern": "foo"})) == []


def test_final_sigma_pattern_matches_its_own_text():
    # whole-string lowering turns a word-final "Σ" into "ς"; lines lower per character
    cfg = config_with({"pattern": "ΟΔΟΣ"})
    assert bind_user_rules(cfg)[0].needle == "οδοσ"
    findings = Scanner(cfg, mode="text").scan("ΟΔΟΣ here\n").findings
    assert [f.matched for f in findings] == ["ΟΔΟΣ"]
