"""Structured build logging utilities."""

from .build_log import BuildEvent, JsonlBuildLog, utc_timestamp

__all__ = ["BuildEvent", "JsonlBuildLog", "utc_timestamp"]
