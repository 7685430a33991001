"""Tests for commit-message checks."""

from unai.rules_commit import apply_commit_rules, check_commit_line


def _rules(findings):
    return [f.rule_id for f in findings]


def test_past_tense_after_conventional_prefix():
    findings = check_commit_line("feat: added authentication", 1)
    f = next(f for f in findings if f.rule_id == "commit/past-tense")
    assert f.severity == "high"
    assert "imperative mood" in f.message
    assert (f.col, f.matched) == (6, "added")


def test_imperative_subject_passes():
    assert check_commit_line("Add authentication logic", 1) == []


def test_subject_checks_only_on_first_line():
    assert check_commit_line("Added various New Shiny Things", 2) == []


def test_vague_scope_with_past_tense():
    findings = check_commit_line("Updated several files for release", 1)
    assert _rules(findings) == ["commit/past-tense", "commit/vague-scope"]
    scope = findings[1]
    assert scope.matched == "several"
    assert scope.message == "Vague scope in commit subject: name the specific change"


def test_vague_scope_once_per_word():
    findings = check_commit_line("fix many many bugs", 1)
    assert _rules(findings) == ["commit/vague-scope"]


def test_vague_scope_needs_word_boundary():
    assert check_commit_line("fix manyfold parsing", 1) == []


def test_title_case_subject():
    findings = check_commit_line("Add New Login Page", 1)
    f = next(f for f in findings if f.rule_id == "commit/title-case")
    assert f.severity == "medium"
    assert f.matched == "Add New Login Page"
    assert f.col == 0


def test_title_case_skips_one_prefix_token():
    assert "commit/title-case" in _rules(check_commit_line("feat: Add New Login", 1))
    # only the first prefix is skipped; "Scope:" still counts as a word
    assert "commit/title-case" in _rules(check_commit_line("fix: Scope: Add New", 1))
    assert "commit/title-case" not in _rules(check_commit_line("feat: Add New", 1))


def test_vague_phrase_on_any_line():
    findings = apply_commit_rules("Fix parser\n\nwip\n")
    vague = [f for f in findings if f.rule_id == "commit/vague-phrase"]
    assert len(vague) == 1
    assert vague[0].line == 3
    assert vague[0].severity == "low"
    assert vague[0].message == "Vague commit message: 'wip'"


def test_third_line_body_flagged():
    findings = apply_commit_rules("Fix parser crash\n\nLong explanation here.\n")
    assert _rules(findings) == ["commit/over-explanation"]
    assert findings[0].line == 3
    assert findings[0].severity == "low"


def test_blank_third_line_not_flagged():
    assert apply_commit_rules("Fix parser crash\n\n   \n") == []


def test_indented_subject_columns_point_into_original_line():
    raw = "   Added x"
    findings = apply_commit_rules(raw + "\n")
    f = next(f for f in findings if f.rule_id == "commit/past-tense")
    assert (f.col, f.matched) == (3, "Added")
    assert raw.encode("utf-8")[f.col : f.end_col].decode("utf-8") == f.matched


def test_whole_line_findings_skip_leading_whitespace():
    findings = check_commit_line("  Add New Login Page  ", 1)
    f = next(f for f in findings if f.rule_id == "commit/title-case")
    assert (f.col, f.matched) == (2, "Add New Login Page")


def test_vague_phrase_keeps_original_case():
    findings = apply_commit_rules("Fix parser\n\n\tWIP on tokenizer\n")
    vague = next(f for f in findings if f.rule_id == "commit/vague-phrase")
    assert (vague.col, vague.matched) == (1, "WIP")
