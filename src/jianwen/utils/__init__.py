"""Shared utilities for Jianwen."""

from jianwen.utils.logger import get_logger

__all__ = ["get_logger"]
