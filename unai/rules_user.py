from typing import List, Optional

from .boundary import lower_chars
from .models import Finding, TextRule
from .rules_text import apply_text_rules


def bind_user_rules(config) -> List[TextRule]:
    """Turn the enabled ``[[rules]]`` entries of a config into text rules."""
    if config is None:
        return []
    bound = []
    for rule in config.rules:
        if not rule.enabled:
            continue
        bound.append(
            TextRule(
                needle=lower_chars(rule.pattern),
                message=rule.message or f"User rule: '{rule.pattern}'",
                replacement=rule.replacement,
                severity=rule.severity or "low",
            )
        )
    return bound


def apply_user_rules(content: str, config: Optional[object]) -> List[Finding]:
    rules = bind_user_rules(config)
    if not rules:
        return []
    return apply_text_rules(content, rules, rule_prefix="user")


def run_user_rules(content: str, ctx) -> List[Finding]:
    return apply_user_rules(content, ctx.config)


def get_rules():
    return [run_user_rules]
