"""Structured logging helpers for the layout engine."""

from .logger import log_record

__all__ = ["log_record"]
