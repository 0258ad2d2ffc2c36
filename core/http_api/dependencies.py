"""
Wegesa HTTP API - Dependencies
==============================
Injected application store for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpApiDependencies:
    store: object
