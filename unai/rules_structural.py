"""Paragraph-level checks: discourse-connector density and sentence-length uniformity.

These look at whole paragraphs (blocks separated by a blank line) rather than
individual lines. Structural signals stay stable when the vocabulary is
paraphrased (Rosenfeld 2024).
"""

import math
from typing import List

from .models import Finding
from .utils import split_lines

CONNECTORS = (
    "moreover",
    "furthermore",
    "additionally",
    "consequently",
    "subsequently",
    "nevertheless",
    "nonetheless",
    "in addition",
    "as a result",
    "on the other hand",
    "with that said",
    "that being said",
    "to summarize",
    "in summary",
    "in conclusion",
)
SENTENCE_ENDINGS = (". ", "! ", "? ", ".\n", "!\n", "?\n")

MIN_CONNECTORS = 3
MIN_SENTENCES = 4
MIN_MEAN_WORDS = 5.0
MAX_STDDEV = 3.0


def count_connectors(paragraph: str) -> int:
    lower = paragraph.lower()
    total = 0
    for connector in CONNECTORS:
        cursor = 0
        while True:
            idx = lower.find(connector, cursor)
            if idx < 0:
                break
            total += 1
            cursor = idx + len(connector)
    return total


def split_sentences(paragraph: str) -> List[str]:
    sentences = []
    remaining = paragraph.strip()
    while remaining:
        cuts = [
            idx + len(ending)
            for ending in SENTENCE_ENDINGS
            for idx in [remaining.find(ending)]
            if idx >= 0
        ]
        cut = min(cuts) if cuts else len(remaining)
        sentences.append(remaining[:cut])
        remaining = remaining[cut:].lstrip()
    return sentences


def sentence_length_stats(sentences: List[str]):
    """Mean and population standard deviation of per-sentence word counts."""
    counts = [len(s.split()) for s in sentences]
    mean = sum(counts) / len(counts)
    variance = sum((c - mean) ** 2 for c in counts) / len(counts)
    return mean, math.sqrt(variance)


def apply_structural_rules(content: str) -> List[Finding]:
    findings: List[Finding] = []
    lineno = 1

    for para in content.split("\n\n"):
        n = count_connectors(para)
        if n >= MIN_CONNECTORS:
            findings.append(
                Finding(
                    line=lineno,
                    col=0,
                    matched=f"{n} discourse connectors",
                    message=f"High connector density ({n}): reads as machine-generated transitions (Rosenfeld 2024)",
                    replacement=None,
                    severity="high",
                    rule_id="structural/connector-density",
                )
            )

        sentences = split_sentences(para)
        if len(sentences) >= MIN_SENTENCES:
            mean, stddev = sentence_length_stats(sentences)
            if stddev < MAX_STDDEV and mean > MIN_MEAN_WORDS:
                findings.append(
                    Finding(
                        line=lineno,
                        col=0,
                        matched=f"stddev={stddev:.1f}",
                        message="Uniform sentence length: LLMs cluster in 10-30 token range (Rosenfeld 2024)",
                        replacement=None,
                        severity="medium",
                        rule_id="structural/uniform-sentences",
                    )
                )

        # the "\n\n" separator accounts for exactly one blank line
        lineno += len(split_lines(para)) + 1

    return findings


def run_structural_rules(content: str, ctx) -> List[Finding]:
    return apply_structural_rules(content)


def get_rules():
    return [run_structural_rules]
