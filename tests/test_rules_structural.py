"""Tests for paragraph-level connector density and sentence uniformity."""

import pytest

from unai.rules_structural import (
    apply_structural_rules,
    count_connectors,
    sentence_length_stats,
    split_sentences,
)

UNIFORM = (
    "The cat sat on the mat. The dog ran in the park. "
    "The bird flew over the tree. The fish swam in the pond."
)


def test_connector_density_exactly_three_fires():
    findings = apply_structural_rules("Moreover, X. Furthermore, Y. Additionally, Z.")
    assert len(findings) == 1
    f = findings[0]
    assert f.severity == "high"
    assert f.matched == "3 discourse connectors"
    assert "connector density" in f.message
    assert (f.line, f.col) == (1, 0)


def test_connector_density_low_count_no_fire():
    assert apply_structural_rules("Moreover, this is important. Furthermore, this helps.") == []


def test_connectors_counted_case_insensitively():
    assert count_connectors("IN ADDITION, as a Result, on the other hand") == 3


def test_paragraph_line_numbers():
    text = "Intro line.\nSecond line.\n\nMoreover, a. Furthermore, b. Additionally, c."
    findings = apply_structural_rules(text)
    assert [f.line for f in findings] == [4]


def test_uniform_sentence_lengths_fire():
    findings = apply_structural_rules(UNIFORM)
    assert len(findings) == 1
    f = findings[0]
    assert f.severity == "medium"
    assert f.matched == "stddev=0.0"
    assert f.rule_id == "structural/uniform-sentences"


def test_varied_sentence_lengths_no_fire():
    text = (
        "Short one. "
        "This sentence is a great deal longer than the others because it keeps going on. "
        "Tiny bit. "
        "And here is another rather long sentence that contains plenty of extra words to vary things."
    )
    assert apply_structural_rules(text) == []


def test_short_uniform_sentences_no_fire():
    assert apply_structural_rules("One two three. Four five six. Seven eight nine. Ten eleven twelve.") == []


def test_split_sentences_keeps_residue():
    assert split_sentences("A b. C d! E f? G") == ["A b. ", "C d! ", "E f? ", "G"]
    assert split_sentences("   ") == []


def test_sentence_length_stats_is_population_stddev():
    mean, stddev = sentence_length_stats(["a b", "a b c d"])
    assert mean == 3
    assert stddev == pytest.approx(1.0)
