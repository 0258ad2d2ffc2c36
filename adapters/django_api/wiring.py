"""
Wegesa Django Adapter Wiring
============================
Constructs HttpApiDependencies around one process-wide AppStore.

This module is adapter-only glue:
- settings come from django.conf.settings.WEGESA
- the store is built lazily on first request
- tests swap the store in and out with install_dependencies()
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from core.config import AppSettings
from core.http_api.dependencies import HttpApiDependencies
from engines.app_store import AppStore

logger = logging.getLogger("wegesa.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _create_dependencies() -> HttpApiDependencies:
    app_settings = AppSettings.from_mapping(getattr(settings, "WEGESA", {}))
    store = AppStore(settings=app_settings)
    logger.info(
        f"AppStore created (prefix={app_settings.invoice_prefix}, "
        f"currency={app_settings.currency}, seeded={app_settings.seed_demo_data})"
    )
    return HttpApiDependencies(store=store)


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def install_dependencies(dependencies: HttpApiDependencies | None) -> None:
    """Replace the singleton; None resets to lazy construction."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies
