import os
from typing import Optional

COMMIT_MSG_FILES = {"COMMIT_EDITMSG", "MERGE_MSG", "SQUASH_MSG"}

CODE_EXTENSIONS = {
    "py", "ts", "tsx", "js", "jsx", "rs", "go", "java", "kt", "swift", "c",
    "cpp", "h", "hpp", "cs", "rb", "php", "sh", "bash", "zsh", "fish", "lua",
    "r", "scala", "hs", "ml", "ex", "exs", "clj", "cljs", "dart", "nim", "zig",
}

CODE_SIGNALS = (
    "def ", "fn ", "func ", "function ", "class ", "import ", "from ", "use ",
    "mod ", "const ", "let ", "var ", "type ", "interface ", "struct ", "enum ",
    "impl ", "pub fn", "async fn", "pub struct", "pub enum", "pub trait",
    "#include", "package ", "namespace ",
)

SAMPLE_LINES = 50


def is_commit_msg_file(filename: str) -> bool:
    return os.path.basename(filename) in COMMIT_MSG_FILES


def _extension(filename: str) -> str:
    _, ext = os.path.splitext(os.path.basename(filename))
    return ext[1:].lower()


def count_code_signals(text: str) -> int:
    """Number of distinct code keywords present in the first non-empty lines."""
    sample = []
    for line in text.splitlines():
        if line.strip():
            sample.append(line)
            if len(sample) >= SAMPLE_LINES:
                break
    joined = "\n".join(sample)
    return sum(1 for sig in CODE_SIGNALS if sig in joined)


def detect_mode(filename: Optional[str], text: str) -> str:
    """Guess ``"commit"``, ``"code"`` or ``"text"`` from the file name, then content.

    Commit mode is only ever inferred from the file name.
    """
    if filename:
        if is_commit_msg_file(filename):
            return "commit"
        if _extension(filename) in CODE_EXTENSIONS:
            return "code"
    if count_code_signals(text) >= 2:
        return "code"
    return "text"
