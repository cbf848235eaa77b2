"""Service objects: validated, hookable, result-branching calls of business logic."""

__version__ = "0.1.0"

# Core components
from service_object.context import ServiceContext, build_context, canonical_key
from service_object.handlers import HandlerTable
from service_object.service import Service

# Errors
from service_object.exceptions import (
    ExecutionHalted,
    NotImplementedCallError,
    ServiceObjectError,
    UnknownFieldError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Service",
    "ServiceContext",
    "HandlerTable",
    "build_context",
    "canonical_key",
    # Errors
    "ServiceObjectError",
    "NotImplementedCallError",
    "UnknownFieldError",
    "ExecutionHalted",
]
