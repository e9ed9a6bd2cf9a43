"""Life Navigator HTTP service: FastAPI routes over the wellbeing scoring engine."""

from importlib import import_module
from typing import Any

_LAZY = {"create_app": "app.main", "get_app_state": "app.deps"}


def __getattr__(name: str) -> Any:
    # Deferred so importing app.deps does not build the FastAPI application.
    if name in _LAZY:
        return getattr(import_module(_LAZY[name]), name)
    raise AttributeError(f"module 'app' has no attribute {name!r}")


__all__ = ["create_app", "get_app_state"]
