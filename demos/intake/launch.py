#!/usr/bin/env python3
"""
Launch script for the label code intake demo.

Usage:
    python demos/intake/launch.py
"""

import subprocess
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(project_root))

from demos.ports_config import get_port, get_url


def main():
    """Launch the Streamlit intake demo."""
    app_path = Path(__file__).parent / "app.py"

    if not app_path.exists():
        print(f"❌ Error: App file not found at {app_path}")
        sys.exit(1)

    port = get_port("intake")

    print("🚀 Launching Label Intake Demo...")
    print(f"📂 App location: {app_path}")
    print(f"🌐 URL: {get_url('intake')}")
    print("-" * 60)

    try:
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                str(app_path),
                f"--server.port={port}",
                "--server.headless=true",
            ],
            cwd=project_root,
            check=True,
        )
    except KeyboardInterrupt:
        print("\n\n👋 Shutting down intake demo...")
    except subprocess.CalledProcessError as e:
        print(f"\n❌ Error launching app: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
