"""
Domain models — Pydantic types for launchdeck.

    from launchdeck.core.models import App, AppConfig, Dependency, LaunchReceipt
"""

from launchdeck.core.models.app import App, AppKind, Dependency, DependencyAction
from launchdeck.core.models.config import AppConfig
from launchdeck.core.models.receipt import CheckResult, LaunchReceipt

__all__ = [
    # app.py
    "App",
    # config.py
    "AppConfig",
    "AppKind",
    # receipt.py
    "CheckResult",
    "Dependency",
    "DependencyAction",
    "LaunchReceipt",
]
