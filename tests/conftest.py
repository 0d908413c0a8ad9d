"""Pytest configuration for the goastgen test suite."""

import sys
from pathlib import Path

# Add the repo root to path for goastgen imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))
