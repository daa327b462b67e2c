#!/usr/bin/env python
"""Script to run the taskgen backend server."""
import os
import sys
from pathlib import Path

# Get the directory where this script is located
script_dir = Path(__file__).resolve().parent

# Add project directory to Python path
sys.path.insert(0, str(script_dir))

# Change to project directory so relative SQLite paths land here
os.chdir(script_dir)

# Now run uvicorn
import uvicorn

from taskgen.config import load_settings

if __name__ == "__main__":
    settings = load_settings()
    uvicorn.run(
        "taskgen.main:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload="--reload" in sys.argv,
    )
