"""Root conftest.py for pytest configuration.

Adds project root to sys.path so shared helpers are importable as
``tests.helpers``.
"""

from __future__ import annotations

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
