"""Tests for automatic mode detection."""

import pytest

from unai.sniff import detect_mode, is_commit_msg_file


@pytest.mark.parametrize("name", ["main.rs", "script.py", "app.ts", "MAIN.PY", "src/lib.zig"])
def test_detects_code_by_extension(name):
    assert detect_mode(name, "hello world") == "code"


@pytest.mark.parametrize("name", ["README.md", "notes.txt", "Makefile"])
def test_text_without_code_extension(name):
    assert detect_mode(name, "hello world") == "text"


@pytest.mark.parametrize("name", ["COMMIT_EDITMSG", "MERGE_MSG", "SQUASH_MSG", "/repo/.git/COMMIT_EDITMSG"])
def test_commit_message_files(name):
    assert is_commit_msg_file(name)
    assert detect_mode(name, "def foo(): import os") == "commit"


def test_detects_code_by_content_signals():
    python = "def foo():\n    import os\n    return True"
    assert detect_mode(None, python) == "code"


def test_single_signal_is_text():
    assert detect_mode(None, "import this, she said.") == "text"


def test_detects_text_without_signals():
    assert detect_mode(None, "This is a blog post about dogs. Dogs are great.") == "text"
    assert detect_mode(None, "Of course!") == "text"


def test_commit_mode_never_inferred_from_content():
    assert detect_mode(None, "feat: added authentication\n") == "text"


def test_only_first_fifty_non_empty_lines_sampled():
    prose = "plain prose line\n\n" * 50
    assert detect_mode(None, prose + "def f():\n    import os\n") == "text"
