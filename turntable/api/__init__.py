"""HTTP surface for the turntable resource."""

from .app import build_machine, create_app

__all__ = ["build_machine", "create_app"]
