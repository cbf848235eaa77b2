"""Configuration constants and environment variable lookup."""

import os
from typing import Optional


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


# Core Configuration Constants
DEFAULT_INPUT_KEY = "default"
"""str: Reserved input key holding the primary payload (also the default output key)."""

NOT_IMPLEMENTED = "call method must be implemented"
"""str: Message of the error raised when a service does not override ``call``."""

# Error fields
INPUT_FIELD = "input"
INPUT_SUBITEM_FIELD = "input_subitem"

# Error codes
MUST_BE_HASH = "must_be_hash"
MUST_BE_ARRAY = "must_be_array"
FIELD_MUST_EXIST = "field_must_exist"
ANY_FIELD_MUST_EXIST = "any_field_must_exist"

# Logging
ENV_LOG_LEVEL = "SERVICE_OBJECT_LOG_LEVEL"
"""str: Environment variable name for the root log level."""

ENV_ENVIRONMENT = "SERVICE_OBJECT_ENVIRONMENT"
"""str: Environment variable name; ``production`` switches logs to JSON."""

LOGGER_NAMESPACE = "service_object"
MODULE_LOGGERS = ("service", "validators", "handlers")
