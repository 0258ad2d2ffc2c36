"""
Wegesa App Store — Composition Root
=====================================
One AppStore per process (or per test) owns every engine and shares
a single clock and id provider between them.
"""

from engines.app_store.store import AppStore
from engines.app_store.seed import seed_demo_data

__all__ = ["AppStore", "seed_demo_data"]
