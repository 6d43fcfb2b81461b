"""Built-in plugins."""

from .plugin import Plugin
from .json_plugin import JsonPlugin, as_json
from .error_plugin import ErrorPlugin, to_error
from .logging_plugin import LoggingPlugin, log

__all__ = [
    "Plugin",
    "JsonPlugin",
    "ErrorPlugin",
    "LoggingPlugin",
    "as_json",
    "to_error",
    "log",
]
