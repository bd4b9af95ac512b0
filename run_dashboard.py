#!/usr/bin/env python3
"""Direct launcher for the Budget Dashboard.

This script launches Streamlit with ``budget_dashboard/Home.py`` as the app.
"""

import sys
import subprocess
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_path = project_root / "budget_dashboard" / "Home.py"

if __name__ == "__main__":
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)], cwd=project_root)
