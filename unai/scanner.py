import importlib
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .ignores import collect_ignored_lines
from .models import CODE_CATEGORIES, SEV_ORDER, Finding
from .policy import Config
from .rewrite import clean
from .sniff import detect_mode, is_commit_msg_file

logger = logging.getLogger(__name__)


@dataclass
class ScanContext:
    config: Optional[Config]
    mode: str
    categories: Sequence[str] = ()
    filename: Optional[str] = None
    is_commit_file: bool = False


RuleFn = Callable[[str, ScanContext], Iterable[Finding]]

MODE_TO_RULESET = {
    "text": ["unai.rules_text", "unai.rules_structural"],
    "commit": ["unai.rules_text", "unai.rules_commit", "unai.rules_structural"],
    "code": ["unai.rules_code"],
}
USER_RULESET = "unai.rules_user"


@dataclass
class ScanResult:
    content: str
    mode: str
    filename: Optional[str] = None
    findings: List[Finding] = field(default_factory=list)
    skipped: bool = False

    @property
    def cleaned(self) -> str:
        return clean(self.content, self.findings)

    @property
    def fixable(self) -> List[Finding]:
        return [f for f in self.findings if f.fixable]

    @property
    def flagged(self) -> List[Finding]:
        return [f for f in self.findings if not f.fixable]


def effective_categories(categories: Sequence[str], is_commit_file: bool) -> List[str]:
    """Code categories to run; with none requested, commit checks only run on commit files."""
    if not categories and not is_commit_file:
        return [c for c in CODE_CATEGORIES if c != "commits"]
    return list(categories)


def filter_findings(
    findings: Iterable[Finding],
    content: str,
    config: Optional[Config] = None,
    min_severity: str = "low",
) -> List[Finding]:
    ignore_words = set(config.ignore_words) if config else set()
    ignored_lines = collect_ignored_lines(content)
    threshold = SEV_ORDER[min_severity]
    return [
        f
        for f in findings
        if f.matched.lower() not in ignore_words
        and f.line not in ignored_lines
        and SEV_ORDER[f.severity] >= threshold
    ]


class Scanner:
    def __init__(
        self,
        config: Optional[Config] = None,
        mode: str = "auto",
        categories: Sequence[str] = (),
        min_severity: str = "low",
    ):
        if min_severity not in SEV_ORDER:
            raise ValueError(f"unknown severity '{min_severity}'")
        self.config = config
        self.mode = mode
        self.categories = list(categories)
        self.min_severity = min_severity
        self.rules: Dict[str, List[RuleFn]] = {}
        self._load_builtin_rules()

    def _load_builtin_rules(self):
        user_rules = importlib.import_module(USER_RULESET).get_rules()
        for mode, mods in MODE_TO_RULESET.items():
            fns: List[RuleFn] = []
            for m in mods:
                mod = importlib.import_module(m)
                fns.extend(mod.get_rules())
            fns.extend(user_rules)
            self.rules[mode] = fns

    def resolve_mode(self, content: str, filename: Optional[str] = None) -> str:
        if self.mode == "auto":
            return detect_mode(filename, content)
        return self.mode

    def scan(self, content: str, filename: Optional[str] = None) -> ScanResult:
        mode = self.resolve_mode(content, filename)
        result = ScanResult(content=content, mode=mode, filename=filename)

        if self.config is not None and self.config.is_ignored_file(filename):
            logger.info("skipping %s (matches ignore.files)", filename)
            result.skipped = True
            return result

        commit_file = bool(filename) and is_commit_msg_file(filename)
        ctx = ScanContext(
            config=self.config,
            mode=mode,
            categories=effective_categories(self.categories, commit_file),
            filename=filename,
            is_commit_file=commit_file,
        )

        findings: List[Finding] = []
        for rule in self.rules[mode]:
            findings.extend(rule(content, ctx))
        logger.debug("%d raw finding(s) in %s mode", len(findings), mode)

        result.findings = filter_findings(
            findings, content, self.config, self.min_severity
        )
        return result
