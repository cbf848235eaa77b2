"""Hook, success and failure handler registration and result resolution."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from service_object.config import DEFAULT_INPUT_KEY
from service_object.keys import canonical_key
from service_object.logging_config import get_logger

logger = get_logger("handlers")

Handler = Callable[[Any], Any]


@dataclass
class HandlerTable:
    """Hooks by name; success and failure handlers by selector (None = default)."""

    hooks: Dict[Any, Handler] = field(default_factory=dict)
    success_handlers: Dict[Optional[Any], Handler] = field(default_factory=dict)
    failure_handlers: Dict[Optional[Any], Handler] = field(default_factory=dict)

    def register_hook(self, name, handler: Optional[Handler] = None):
        return _register(self.hooks, name, handler)

    def register_success(self, selector=None, handler: Optional[Handler] = None):
        if handler is None and callable(selector):
            selector, handler = None, selector
        return _register(self.success_handlers, selector, handler)

    def register_failure(self, selector=None, handler: Optional[Handler] = None):
        if handler is None and callable(selector):
            selector, handler = None, selector
        return _register(self.failure_handlers, selector, handler)


def _register(table: Dict, key, handler: Optional[Handler]):
    """Store ``handler`` under ``key``; without a handler, return a decorator."""
    if handler is None:

        def _decorator(fn: Handler) -> Handler:
            table[key] = fn
            return fn

        return _decorator

    table[key] = handler
    return handler


def dispatch_hook(table: HandlerTable, name, data: Any) -> Any:
    """Call the hook registered under ``name`` with ``data``; no-op if absent."""
    handler = table.hooks.get(name)
    if handler is None:
        return None
    return handler(data)


def _first_registered(candidates, handlers: Dict):
    for candidate in candidates:
        if isinstance(candidate, Hashable) and candidate in handlers:
            return candidate, True
    return None, False


def success_selector(outputs: Dict, handlers: Dict):
    """First output key, then the default selector, that has a success handler."""
    selector, _ = _first_registered([*outputs, None], handlers)
    return selector


def failure_selector(errors: Dict, handlers: Dict):
    """First error code in field-then-append order, then the default, with a handler.

    Returns ``(selector, found)`` since ``None`` is itself the default selector.
    """
    codes = [
        canonical_key(code) if isinstance(code, Hashable) else code
        for field_codes in errors.values()
        for code in field_codes
    ]
    return _first_registered([*codes, None], handlers)


def resolve_success(ctx) -> Any:
    handlers = ctx.handlers.success_handlers
    selector = success_selector(ctx.outputs, handlers)
    if selector in ctx.outputs:
        result = ctx.outputs[selector]
    else:
        result = ctx.outputs.get(DEFAULT_INPUT_KEY)

    handler = handlers.get(selector)
    if handler is None:
        return result
    logger.debug(
        f"Resolving success with selector {selector!r}",
        extra={"selector": repr(selector)},
    )
    return handler(result)


def resolve_failure(ctx) -> Any:
    handlers = ctx.handlers.failure_handlers
    selector, found = failure_selector(ctx.errors, handlers)
    if not found:
        logger.warning(
            f"Dropping errors on {list(ctx.errors)}: no failure handler matched",
            extra={"error_fields": [repr(key) for key in ctx.errors]},
        )
        return None
    logger.debug(
        f"Resolving failure with selector {selector!r}",
        extra={"selector": repr(selector)},
    )
    return handlers[selector](ctx.errors)
