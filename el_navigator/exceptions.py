from __future__ import annotations

# (H) Configuration errors
TTL_NON_NEGATIVE = "INDEX_CACHE_TTL_MS must be zero or a positive integer, got {value}"
WATCH_NON_NEGATIVE = "{field} must not be negative, got {value}"
SOURCE_ROOT_ABSOLUTE = "SOURCE_ROOT_RELATIVE must be relative to the workspace: {value}"

# (H) CLI errors
CLI_ERR_CONFIG = "Invalid configuration: {error}"
FILE_NOT_FOUND = "File not found: {path}"
WORKSPACE_NOT_FOUND = "Workspace not found: {path}"
POSITION_OUT_OF_RANGE = "Line {line} is outside {path} ({count} lines)"


# (H) Exception classes
class ConfigurationError(ValueError):
    pass
