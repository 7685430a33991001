"""
Results Component
Summary metrics, a filterable findings table and the cleaned output per document
"""

from typing import Any, Dict

import streamlit as st

SEVERITY_STYLES = {
    "critical": "background-color: #ffebee; color: #c62828",
    "high": "background-color: #fff3e0; color: #e65100",
    "medium": "background-color: #fffde7; color: #f57f17",
    "low": "background-color: #f3e5f5; color: #7b1fa2",
}


def render_results(results: Dict[str, Any], scanner_service) -> None:
    """
    Render scan results: metrics, findings table, then cleaned output

    Args:
        results: Scan results from scanner service
        scanner_service: Scanner service instance for data conversion
    """
    for note in results.get("skipped", []):
        st.warning(f"Skipped {note}")

    summary = results["summary"]
    if summary["total_issues"] == 0:
        st.success("✅ No LLM-isms found!")
    else:
        render_summary_metrics(summary)
        render_findings_table(results["findings_by_file"], scanner_service)

    render_cleaned_output(results["results"], scanner_service)


def render_summary_metrics(summary: Dict[str, Any]) -> None:
    """Display summary metrics in columns"""

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Total Findings", summary["total_issues"])

    with col2:
        critical_count = summary["by_severity"]["critical"]
        st.metric(
            "Critical",
            critical_count,
            delta=f"-{critical_count}" if critical_count > 0 else None,
            delta_color="inverse",
        )

    with col3:
        st.metric("High Severity", summary["by_severity"]["high"])

    with col4:
        st.metric("Auto-fixable", summary["auto_fixable"])

    non_zero = {k: v for k, v in summary["by_severity"].items() if v > 0}
    if non_zero:
        severity_text = " | ".join(f"{k.capitalize()}: {v}" for k, v in non_zero.items())
        st.caption(f"Breakdown: {severity_text}")

    top_rules = list(summary.get("by_rule", {}).items())[:5]
    if top_rules:
        rules_text = " | ".join(f"{rule_id}: {count}" for rule_id, count in top_rules)
        st.caption(f"Most frequent rules: {rules_text}")


def render_findings_table(findings_by_file, scanner_service) -> None:
    """Render filterable findings table with CSV export"""

    st.subheader("🔍 Findings")

    df = scanner_service.findings_to_dataframe(findings_by_file)
    if df.empty:
        st.info("No findings to display")
        return

    col1, col2 = st.columns(2)
    with col1:
        all_severities = ["critical", "high", "medium", "low"]
        severity_filter = st.multiselect(
            "Filter by Severity",
            options=all_severities,
            default=all_severities,
        )
    with col2:
        file_filter = st.multiselect(
            "Filter by File",
            options=sorted(df["File"].unique()),
            default=[],
            help="Leave empty for all",
        )

    filtered_df = df
    if severity_filter:
        filtered_df = filtered_df[filtered_df["Severity"].isin(severity_filter)]
    if file_filter:
        filtered_df = filtered_df[filtered_df["File"].isin(file_filter)]

    if len(filtered_df) != len(df):
        st.info(f"Showing {len(filtered_df)} of {len(df)} findings")

    if filtered_df.empty:
        st.info("No findings match the current filters")
        return

    styled_df = filtered_df.style.map(
        lambda val: SEVERITY_STYLES.get(val, ""), subset=["Severity"]
    )
    st.dataframe(styled_df, use_container_width=True, hide_index=True)

    st.download_button(
        label="📥 Download CSV",
        data=filtered_df.to_csv(index=False),
        file_name="unai_findings.csv",
        mime="text/csv",
    )


def render_cleaned_output(scans: Dict[str, Any], scanner_service) -> None:
    """Cleaned text, diff and JSON report for each scanned document"""

    for label, scan in scans.items():
        with st.expander(f"✨ {label} ({scan.mode} mode)", expanded=len(scans) == 1):
            tab_clean, tab_diff = st.tabs(["Cleaned", "Diff"])
            with tab_clean:
                st.code(scanner_service.cleaned_output(scan), language="text")
            with tab_diff:
                diff = scanner_service.diff_output(scan)
                if diff:
                    st.code(diff, language="diff")
                else:
                    st.caption("No auto-fixable changes")

            col1, col2 = st.columns(2)
            with col1:
                st.download_button(
                    label="📥 Cleaned text",
                    data=scanner_service.cleaned_output(scan),
                    file_name=f"cleaned_{scan.filename or 'text.txt'}",
                    mime="text/plain",
                    key=f"clean_{label}",
                )
            with col2:
                st.download_button(
                    label="📥 JSON report",
                    data=scanner_service.json_report(scan),
                    file_name="unai_report.json",
                    mime="application/json",
                    key=f"json_{label}",
                )
