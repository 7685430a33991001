import argparse
import logging
import os
import sys
from typing import Optional

from .errors import EXIT_FINDINGS, EXIT_OK, OutputError, UnaiError
from .models import SEVERITIES, VERSION
from .policy import Config
from .report import (
    print_annotated,
    to_dry_run,
    to_json,
    to_markdown,
    to_sarif,
    to_text_report,
    unified_diff,
)
from .rules_code import parse_categories
from .scanner import Scanner
from .utils import read_input

FORMATS = ("text", "json", "md", "sarif")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="unai", description="Remove LLM-isms from text and code"
    )
    p.add_argument("file", nargs="?", metavar="FILE", help="input file (stdin if omitted)")
    p.add_argument("--mode", choices=["auto", "text", "code"], default="auto")
    p.add_argument(
        "--rules",
        help="code rule categories, comma-separated "
        "(comments, naming, commits, docstrings, tests, errors, api)",
    )
    p.add_argument("--dry-run", action="store_true", help="list changes, emit input unchanged")
    p.add_argument("--diff", action="store_true", help="show a unified diff of the fixes")
    p.add_argument("--annotate", action="store_true", help="annotate findings inline")
    p.add_argument("--report", action="store_true", help="print a severity-grouped summary")
    p.add_argument(
        "--min-severity", choices=list(reversed(SEVERITIES)), default="low"
    )
    p.add_argument("--format", choices=FORMATS, default="text")
    p.add_argument("--output", metavar="FILE", help="write output to a file instead of stdout")
    p.add_argument("--config", metavar="FILE", help="config file (default: ./unai.toml if present)")
    p.add_argument(
        "--fail",
        action="store_true",
        help="exit 10 when findings at or above --min-severity remain",
    )
    p.add_argument("--color", choices=["auto", "always", "never"], default="auto")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    p.add_argument("--version", action="version", version=f"unai {VERSION}")
    return p


def write_output(content: str, path: Optional[str] = None) -> None:
    if path is None:
        sys.stdout.write(content)
        sys.stdout.flush()
        return
    if os.path.islink(path):
        raise OutputError(
            f"Cannot write output to '{path}': output path is a symlink; refusing to follow"
        )
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise OutputError(f"Cannot write output to '{path}': {e.strerror or e}") from e


def _use_color(choice: str) -> bool:
    if choice == "always":
        return True
    if choice == "never":
        return False
    return sys.stderr.isatty()


def run(args) -> bool:
    """Execute one invocation; returns whether any findings survived filtering."""
    if args.config:
        config = Config.load(args.config)
    else:
        config = Config.load_from_cwd()

    content, filename = read_input(args.file)
    categories = parse_categories(args.rules)

    scanner = Scanner(
        config=config,
        mode=args.mode,
        categories=categories,
        min_severity=args.min_severity,
    )
    result = scanner.scan(content, filename)
    findings = result.findings
    had_findings = bool(findings)

    if args.format == "json":
        write_output(to_json(findings, result.mode, filename), args.output)
        return had_findings
    if args.format == "md":
        write_output(to_markdown(findings, result.mode, filename), args.output)
        return had_findings
    if args.format == "sarif":
        write_output(to_sarif(findings, filename), args.output)
        return had_findings

    if not had_findings and not args.report:
        write_output(content, args.output)
        return False

    if args.report:
        sys.stderr.write(to_text_report(findings, result.mode, _use_color(args.color)))

    if args.diff:
        diff = unified_diff(content, result.cleaned)
        if diff:
            write_output(diff, args.output)
        elif not had_findings:
            sys.stderr.write("unai: no findings\n")
        elif not result.fixable:
            sys.stderr.write(
                f"unai: {len(findings)} finding(s), none auto-fixable "
                "(run --report to see them)\n"
            )
        else:
            sys.stderr.write("unai: no changes\n")
        return had_findings

    if args.dry_run:
        sys.stderr.write(to_dry_run(findings))
        write_output(content, args.output)
        return had_findings

    if args.annotate:
        print_annotated(content, findings)
        return had_findings

    write_output(result.cleaned, args.output)
    return had_findings


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="unai: %(levelname)s: %(message)s",
    )

    try:
        had_findings = run(args)
    except UnaiError as e:
        print(f"unai: {e}", file=sys.stderr)
        return e.exit_code

    if args.fail and had_findings:
        return EXIT_FINDINGS
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
