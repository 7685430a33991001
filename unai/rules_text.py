from typing import Iterable, List, Sequence

from .boundary import LoweredLine, is_in_backtick_span, is_word_boundary
from .models import Finding, TextRule
from .utils import split_lines

# Ratios cite excess frequency over a pre-LLM baseline (Kobak et al. 2025,
# Liang 2024, Neri 2024, Juzek 2025, Rosenfeld 2024). Critical means r > 10.
TEXT_RULES = (
    TextRule("delve", "LLM tell: 'delve' (25× excess frequency, Kobak 2025)", "explore", "critical"),
    TextRule("delves", "LLM tell: 'delves' (25× excess frequency, Kobak 2025)", "explores", "critical"),
    TextRule("showcasing", "LLM tell: 'showcasing' (9.2× excess frequency, Kobak 2025)", None, "high"),
    TextRule("underscore", "LLM tell: 'underscore/underscores' (9.1× excess frequency, Kobak 2025)", None, "high"),
    TextRule("meticulous", "LLM tell: 'meticulous' (Kobak 2025, Neri 2024)", None, "high"),
    TextRule("meticulously", "LLM tell: 'meticulously' (Kobak 2025, Neri 2024)", None, "high"),
    TextRule("intricate", "LLM tell: 'intricate' (Kobak 2025, Liang 2024)", None, "high"),
    TextRule("realm", "LLM tell: 'realm' (Liang 2024, Neri 2024)", None, "high"),
    TextRule("pivotal", "LLM tell: 'pivotal' (Kobak 2025, Liang 2024)", "key", "high"),
    TextRule("notably", "LLM tell: 'notably' (Kobak 2025)", None, "high"),
    TextRule("leveraging", "LLM filler: 'leveraging' (Kobak 2025)", "using", "high"),
    TextRule("leverage", "LLM filler: 'leverage' when used as verb (Kobak 2025)", "use", "high"),
    TextRule("streamline", "LLM filler: 'streamline' (Kobak 2025)", None, "high"),
    TextRule("utilize", "LLM filler: 'utilize' (Kobak 2025)", "use", "high"),
    TextRule("facilitate", "LLM filler: 'facilitate' (Kobak 2025)", "help", "high"),
    TextRule("endeavor", "LLM filler: 'endeavor' (Kobak 2025)", "try", "high"),
    TextRule("commence", "LLM filler: 'commence' (Kobak 2025)", "start", "high"),
    TextRule("tapestry", "LLM filler: 'tapestry' (Neri 2024)", None, "high"),
    TextRule("testament", "LLM filler: 'testament' (Neri 2024)", None, "high"),
    TextRule("stands as a testament", "LLM cliché: 'stands as a testament' (Neri 2024)", None, "high"),
    TextRule("comprehensive", "LLM filler: 'comprehensive' (Kobak 2025 δ=high)", "thorough", "medium"),
    TextRule("crucial", "LLM filler: 'crucial' (Kobak 2025 δ=0.026)", "important", "medium"),
    TextRule("particularly", "LLM filler: 'particularly' (Kobak 2025 cross-validated)", None, "medium"),
    TextRule("enhancing", "LLM tell: 'enhancing' (Kobak 2025 cross-validated)", None, "medium"),
    TextRule("exhibited", "LLM tell: 'exhibited' (Kobak 2025 cross-validated)", None, "medium"),
    TextRule("insights", "LLM filler: 'insights' (Kobak 2025 cross-validated)", None, "medium"),
    TextRule("boast", "LLM filler: 'boast/boasts' as in 'boasts features' (Kobak 2025)", None, "medium"),
    TextRule("harnessing", "LLM filler: 'harnessing' (Juzek 2025 emerging signal)", "using", "medium"),
    TextRule("harnesses", "LLM filler: 'harnesses' (Juzek 2025 emerging signal)", None, "medium"),
    TextRule("groundbreaking", "LLM filler: 'groundbreaking' (Kobak 2025)", None, "medium"),
    TextRule("innovative", "LLM filler: 'innovative' (Kobak 2025, lower ratio)", None, "medium"),
    TextRule("revolutionary", "LLM filler: 'revolutionary' (Kobak 2025, lower ratio)", None, "medium"),
    TextRule("cutting-edge", "LLM filler: 'cutting-edge' (Kobak 2025, lower ratio)", None, "medium"),
    TextRule("robust", "LLM filler: 'robust' (Kobak 2025; legitimate in security specs, review context)", None, "medium"),
    TextRule("multifaceted", "LLM filler: 'multifaceted' (Kobak 2025)", None, "medium"),
    TextRule("vibrant", "LLM filler: 'vibrant' (Kobak 2025)", None, "medium"),
    TextRule("seamlessly", "LLM filler: 'seamlessly' (Kobak 2025)", None, "medium"),
    TextRule("ingrained", "LLM filler: 'ingrained' (Kobak 2025)", None, "medium"),
    TextRule("indelible", "LLM filler: 'indelible' (Kobak 2025)", None, "medium"),
    TextRule("evolving landscape", "LLM cliché: 'evolving landscape' (Kobak 2025)", None, "medium"),
    # RLHF-induced openers and closers
    TextRule("certainly!", "Sycophantic opener: 'Certainly!' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("great question!", "Sycophantic opener: 'Great question!' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("of course!", "Sycophantic opener: 'Of course!' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("absolutely!", "Sycophantic opener: 'Absolutely!' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("happy to help", "Sycophantic opener: 'happy to help' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("happy to explain", "Sycophantic opener: 'happy to explain' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("i'd be happy to", "Sycophantic opener: 'I'd be happy to' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("i would be happy to", "Sycophantic opener: 'I would be happy to' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("i hope this helps", "Chatbot closer: 'I hope this helps' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("let me know if", "Chatbot closer: 'Let me know if' (RLHF-induced, Juzek 2025)", None, "critical"),
    TextRule("feel free to", "Chatbot closer: 'Feel free to' (RLHF-induced, Juzek 2025)", None, "critical"),
    # Connectors, hedges and filler
    TextRule("moreover", "LLM connector: 'moreover' (Rosenfeld 2024)", None, "low"),
    TextRule("furthermore", "LLM connector: 'furthermore' (Rosenfeld 2024)", None, "low"),
    TextRule("subsequently", "LLM connector: 'subsequently' (Kobak 2025)", "then", "low"),
    TextRule("in conclusion", "LLM connector: 'in conclusion' (Rosenfeld 2024)", None, "low"),
    TextRule("serves as a reminder", "LLM filler: 'serves as a reminder'", None, "low"),
    TextRule("it is worth noting", "LLM hedge: 'it is worth noting' (Kobak 2025)", None, "low"),
    TextRule("it is important to note", "LLM hedge: 'it is important to note'", None, "low"),
    TextRule("could potentially", "Hedging: 'could potentially'", "could", "low"),
    TextRule("might possibly", "Hedging: 'might possibly'", "might", "low"),
    TextRule("arguably could be considered", "Hedging: 'arguably could be considered'", None, "low"),
    TextRule("in order to", "Filler: 'in order to'", "to", "low"),
    TextRule("due to the fact that", "Filler: 'due to the fact that'", "because", "low"),
)


def _is_fence(trimmed: str) -> bool:
    return trimmed.startswith("```")


def _is_bare_url(trimmed: str) -> bool:
    return trimmed.startswith("http://") or trimmed.startswith("https://")


def apply_text_rules(
    content: str, rules: Sequence[TextRule] = TEXT_RULES, rule_prefix: str = "text"
) -> List[Finding]:
    findings: List[Finding] = []
    in_fenced_block = False

    for line_idx, line in enumerate(split_lines(content)):
        trimmed = line.strip()
        if _is_fence(trimmed):
            in_fenced_block = not in_fenced_block
            continue
        if in_fenced_block or _is_bare_url(trimmed):
            continue

        lowered = LoweredLine(line)
        for rule in rules:
            findings.extend(_match_rule(lowered, rule, line_idx + 1, rule_prefix))

    return findings


def _match_rule(
    lowered: LoweredLine, rule: TextRule, lineno: int, rule_prefix: str
) -> Iterable[Finding]:
    line = lowered.original
    for pos in lowered.find_all(rule.needle):
        end = pos + len(rule.needle)
        if not is_word_boundary(lowered.lower, pos, end):
            continue
        span = lowered.span(pos, end)
        if span is None:
            continue
        start, stop = span
        if is_in_backtick_span(line, start, stop):
            continue
        yield Finding(
            line=lineno,
            col=lowered.byte_offset(start),
            matched=line[start:stop],
            message=rule.message,
            replacement=rule.replacement,
            severity=rule.severity,
            rule_id=f"{rule_prefix}/{rule.needle}",
        )


def run_text_rules(content: str, ctx) -> List[Finding]:
    return apply_text_rules(content)


def get_rules():
    return [run_text_rules]
