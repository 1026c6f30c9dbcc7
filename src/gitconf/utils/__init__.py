"""Shared utilities for gitconf."""

from ._logging import LogFormatType, create_logger, resolve_log_level
from ._toml import toml_error_position

__all__ = ["LogFormatType", "create_logger", "resolve_log_level", "toml_error_position"]
