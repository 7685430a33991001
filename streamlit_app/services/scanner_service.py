"""
Scanner Service - Adapter layer between Streamlit and the unai core
Handles decoding of uploads, config parsing and DataFrame conversion
"""

import tomllib
from typing import Any, Dict, List, Optional

import pandas as pd

from unai.errors import ConfigError, InputError, UnaiError
from unai.models import SEV_ORDER, Finding
from unai.policy import MAX_CONFIG_BYTES, Config
from unai.report import to_json, unified_diff
from unai.rules_code import parse_categories
from unai.scanner import ScanResult, Scanner
from unai.utils import MAX_INPUT_BYTES

PASTED_NAME = "pasted text"


class ScannerService:
    """Service layer to bridge Streamlit and the unai scanner"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def build_scanner(self) -> Scanner:
        """Scanner configured from the sidebar settings.

        Raises ConfigError / InvalidRuleError for bad TOML or categories.
        """
        categories = parse_categories(",".join(self.config.get("categories", [])))
        return Scanner(
            config=self._load_config(),
            mode=self.config.get("mode", "auto"),
            categories=categories,
            min_severity=self.config.get("min_severity", "low"),
        )

    def scan_text(self, text: str, filename: Optional[str] = None) -> Dict[str, Any]:
        """Scan one pasted document."""
        return self._scan_documents([(filename or PASTED_NAME, text, filename)])

    def scan_uploaded_files(self, uploaded_files: List) -> Dict[str, Any]:
        """
        Scan uploaded files and return structured results

        Args:
            uploaded_files: List of Streamlit UploadedFile objects

        Returns:
            Dict with per-file ScanResults, findings, summary and metadata
        """
        if not uploaded_files:
            return self._empty_results()

        documents = []
        skipped = []
        for uploaded in uploaded_files:
            try:
                documents.append((uploaded.name, self._decode(uploaded), uploaded.name))
            except InputError as e:
                skipped.append(f"{uploaded.name}: {e}")

        results = self._scan_documents(documents)
        results["skipped"] = skipped + results.get("skipped", [])
        return results

    def _scan_documents(self, documents) -> Dict[str, Any]:
        results = self._empty_results()
        try:
            scanner = self.build_scanner()
            for label, text, filename in documents:
                scan = scanner.scan(text, filename)
                results["results"][label] = scan
                results["findings_by_file"][label] = scan.findings
                if scan.skipped:
                    results["skipped"].append(f"{label}: matches ignore.files")
            results["files_scanned"] = [label for label, _, _ in documents]
            results["summary"] = self._generate_summary(results["findings_by_file"])
        except UnaiError as e:
            results["error"] = str(e)
            results["summary"] = {"error": True, "message": str(e)}
        return results

    def findings_to_dataframe(self, findings_by_file: Dict[str, List[Finding]]) -> pd.DataFrame:
        """Convert findings to a pandas DataFrame for Streamlit display"""
        data = []
        for filename, findings in findings_by_file.items():
            for finding in findings:
                data.append(
                    {
                        "File": filename,
                        "Rule ID": finding.rule_id,
                        "Severity": finding.severity,
                        "Line": finding.line,
                        "Column": finding.col,
                        "Matched": finding.matched,
                        "Message": finding.message,
                        "Fix": _describe_fix(finding),
                    }
                )
        if not data:
            return pd.DataFrame()

        df = pd.DataFrame(data)

        # Add severity ordering for proper sorting
        df["Severity_Order"] = df["Severity"].map(SEV_ORDER)
        df = df.sort_values(
            ["Severity_Order", "File", "Line"], ascending=[False, True, True]
        )
        df = df.drop("Severity_Order", axis=1)

        return df

    def get_findings_by_severity(
        self, findings: List[Finding]
    ) -> Dict[str, List[Finding]]:
        """Group findings by severity level"""
        grouped = {"critical": [], "high": [], "medium": [], "low": []}

        for finding in findings:
            grouped[finding.severity].append(finding)

        return grouped

    def get_findings_by_rule(self, findings: List[Finding]) -> Dict[str, List[Finding]]:
        """Group findings by rule ID"""
        grouped: Dict[str, List[Finding]] = {}

        for finding in findings:
            grouped.setdefault(finding.rule_id, []).append(finding)

        return grouped

    def cleaned_output(self, scan: ScanResult) -> str:
        return scan.cleaned

    def diff_output(self, scan: ScanResult) -> str:
        return unified_diff(scan.content, scan.cleaned)

    def json_report(self, scan: ScanResult) -> str:
        return to_json(scan.findings, scan.mode, scan.filename)

    def _load_config(self) -> Optional[Config]:
        raw = self.config.get("config_toml") or ""
        if not raw.strip():
            return None
        if len(raw.encode("utf-8")) > MAX_CONFIG_BYTES:
            raise ConfigError("config file exceeds 1 MiB size limit")
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Cannot parse config: {e}") from e
        return Config.from_dict(data)

    @staticmethod
    def _decode(uploaded_file) -> str:
        data = uploaded_file.getvalue()
        if len(data) > MAX_INPUT_BYTES:
            raise InputError("exceeds 64 MiB size limit")
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputError("not valid UTF-8") from e

    def _generate_summary(self, findings_by_file: Dict[str, List[Finding]]) -> Dict[str, Any]:
        """Generate summary statistics from findings"""
        all_findings = [f for findings in findings_by_file.values() for f in findings]
        by_severity = self.get_findings_by_severity(all_findings)
        by_rule = self.get_findings_by_rule(all_findings)

        return {
            "total_issues": len(all_findings),
            "by_severity": {sev: len(group) for sev, group in by_severity.items()},
            "by_rule": {
                rule_id: len(group)
                for rule_id, group in sorted(by_rule.items(), key=lambda kv: -len(kv[1]))
            },
            "unique_rules": len(by_rule),
            "files_with_issues": sum(1 for findings in findings_by_file.values() if findings),
            "auto_fixable": sum(1 for f in all_findings if f.fixable),
        }

    def _empty_results(self) -> Dict[str, Any]:
        """Return empty results structure"""
        return {
            "results": {},
            "findings_by_file": {},
            "summary": self._generate_summary({}),
            "files_scanned": [],
            "skipped": [],
        }


def _describe_fix(finding: Finding) -> str:
    if finding.replacement is None:
        return ""
    if finding.replacement == "":
        return "remove line"
    return f"→ {finding.replacement}"
