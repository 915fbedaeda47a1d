"""Shared helpers for camera-menu-lib."""

from cm_common.api import CMError, configure_logging

__all__ = ["CMError", "configure_logging"]
