"""
unai Streamlit Web Application
Main entry point for the web interface
"""

import os
import sys

import streamlit as st

# Add parent directory to path so we can import components
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from streamlit_app.components.config_panel import render_config_panel
from streamlit_app.components.file_upload import render_file_upload, render_text_input
from streamlit_app.components.results_table import render_results
from streamlit_app.services.scanner_service import ScannerService


def main():
    """Main Streamlit application"""

    st.set_page_config(
        page_title="unai: remove LLM-isms",
        page_icon="✂️",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.markdown(
        """
    <style>
    .main-header {
        font-size: 3rem;
        color: #4C6EF5;
        text-align: center;
        margin-bottom: 2rem;
    }
    </style>
    """,
        unsafe_allow_html=True,
    )

    st.markdown('<h1 class="main-header">✂️ unai</h1>', unsafe_allow_html=True)
    st.markdown(
        """
    <div style="text-align: center; margin-bottom: 2rem; color: #666;">
    Find and fix LLM-isms in prose, code and commit messages
    </div>
    """,
        unsafe_allow_html=True,
    )

    with st.sidebar:
        st.header("⚙️ Configuration")
        config = render_config_panel()

    col1, col2 = st.columns([1, 2])

    with col1:
        st.subheader("📝 Input")
        text = render_text_input()
        uploaded_files = render_file_upload()

    with col2:
        st.subheader("🔍 Results")
        scanner_service = ScannerService(config)

        if uploaded_files:
            with st.spinner("Scanning files..."):
                results = scanner_service.scan_uploaded_files(uploaded_files)
        elif text.strip():
            results = scanner_service.scan_text(text)
        else:
            st.info("👈 Paste text or upload files to start")
            return

        if results.get("error"):
            st.error(f"❌ {results['error']}")
        else:
            render_results(results, scanner_service)


if __name__ == "__main__":
    main()
