#!/usr/bin/env python3
"""
unai Streamlit App Launcher
Usage: python run_app.py
"""
import os
import subprocess
import sys


def main():
    """Launch the unai Streamlit web application"""

    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    print("🚀 Starting unai web app...")
    print("📍 Open your browser to: http://localhost:8501")
    print("⏹️  Press Ctrl+C to stop the application")
    print("-" * 50)

    try:
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                "streamlit_app/main.py",
                "--server.port=8501",
                "--server.address=localhost",
            ]
        )
    except KeyboardInterrupt:
        print("\n🛑 Application stopped by user")
    except OSError as e:
        print(f"❌ Error starting application: {e}")
        print("\n💡 Make sure you have installed the dependencies:")
        print("   pip install -e .")


if __name__ == "__main__":
    main()
