"""
Configuration Panel Component
Sidebar settings for mode, code categories, severity threshold and unai.toml
"""

from typing import Dict

import streamlit as st

from unai.models import CODE_CATEGORIES

EXAMPLE_CONFIG = """version = 1

[[rules]]
pattern = "synergize"
replacement = "work together"
severity = "high"
message = "Corporate jargon"

[ignore]
words = ["robust"]
"""


def render_config_panel() -> Dict:
    """
    Render configuration panel in sidebar

    Returns:
        Dict containing user configuration settings
    """

    config = {}

    st.subheader("⚙️ Scanner Settings")

    config["mode"] = st.selectbox(
        "Mode",
        options=["auto", "text", "code"],
        index=0,
        help="Auto detects commit messages and code from the file name, then content.",
    )

    config["categories"] = st.multiselect(
        "Code rule categories",
        options=list(CODE_CATEGORIES),
        default=[],
        help="Code mode only. Leave empty for all categories except commits.",
        disabled=config["mode"] == "text",
    )

    config["min_severity"] = st.selectbox(
        "Minimum severity",
        options=["low", "medium", "high", "critical"],
        index=0,
        help="Hide findings below this severity",
    )

    st.divider()

    st.subheader("📋 unai.toml")

    config_file = st.file_uploader(
        "Upload unai.toml",
        type=["toml"],
        help="User rules and ignore lists",
    )
    uploaded_text = ""
    if config_file is not None:
        try:
            uploaded_text = config_file.getvalue().decode("utf-8")
        except UnicodeDecodeError:
            st.error("Config file is not valid UTF-8")

    config["config_toml"] = st.text_area(
        "Or edit config here",
        value=uploaded_text,
        height=180,
        placeholder=EXAMPLE_CONFIG,
    )

    st.divider()

    st.subheader("📊 Current Settings")
    st.caption(f"• **Mode:** {config['mode']}")
    if config["categories"]:
        st.caption(f"• **Categories:** {', '.join(config['categories'])}")
    st.caption(f"• **Threshold:** {config['min_severity'].title()} and above")
    if config["config_toml"].strip():
        st.caption("• **Config:** custom unai.toml")

    get_config_help()

    return config


def get_config_help() -> None:
    """Display help information about configuration options"""

    with st.expander("❓ Configuration Help"):
        st.markdown(
            """
        ### Modes
        - **text**: vocabulary tells plus paragraph structure
        - **code**: comment, docstring and naming tells
        - **auto**: `COMMIT_EDITMSG` and friends are scanned as commit messages

        ### Ignore directives
        ```
        <!-- unai-ignore --> ... <!-- /unai-ignore -->
        # unai-ignore-start ... # unai-ignore-end
        # unai-ignore-next-line
        ```
        """
        )
