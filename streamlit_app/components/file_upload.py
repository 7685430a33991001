"""
Input Component
Pasted text or uploaded files, with size and emptiness validation
"""

from typing import List

import streamlit as st

MAX_FILE_SIZE_MB = 10


def render_text_input() -> str:
    """Text area for pasting prose, code or a commit message"""
    return st.text_area(
        "Paste text to clean",
        height=240,
        placeholder="Certainly! Let's delve into the intricate details...",
    )


def render_file_upload() -> List:
    """
    Render file upload widget with multiple file support and validation

    Returns:
        List of uploaded files (Streamlit UploadedFile objects)
    """

    uploaded_files = st.file_uploader(
        "Or choose files to scan",
        accept_multiple_files=True,
        help=f"Any UTF-8 text file. Max size: {MAX_FILE_SIZE_MB}MB per file",
    )

    if not uploaded_files:
        return []

    valid_files = []
    invalid_files = []

    for file in uploaded_files:
        file_size_mb = len(file.getvalue()) / (1024 * 1024)

        if file_size_mb > MAX_FILE_SIZE_MB:
            invalid_files.append(
                f"**{file.name}**: Too large ({file_size_mb:.1f}MB > {MAX_FILE_SIZE_MB}MB)"
            )
            continue

        if len(file.getvalue()) == 0:
            invalid_files.append(f"**{file.name}**: Empty file")
            continue

        valid_files.append(file)

    if invalid_files:
        st.warning("⚠️ Some files were skipped:")
        for invalid_file in invalid_files:
            st.write(f"- {invalid_file}")

    if valid_files:
        total_size = sum(len(f.getvalue()) for f in valid_files)
        col1, col2 = st.columns(2)
        with col1:
            st.metric("Valid Files", len(valid_files))
        with col2:
            st.metric("Total Size", f"{total_size / 1024:.1f} KB")

    return valid_files
