"""Service base class: the per-call execution lifecycle.

A service subclasses ``Service`` and implements ``call``. ``Service.run``
builds one instance for one call and executes it::

    class CreateUser(Service):
        def audit(self):
            self.required("email")

        def call(self):
            self.output(self.email.lower())

    CreateUser.run(
        {"email": "A@B.C"},
        configure=lambda s: (s.success(str.upper), s.failure(dict)),
    )
"""

from functools import wraps
from typing import Any, Callable, Hashable, Mapping, Optional

from service_object import attributes, handlers, validators
from service_object.config import DEFAULT_INPUT_KEY
from service_object.context import (
    ServiceContext,
    build_context,
    canonical_key,
    canonical_payload,
)
from service_object.exceptions import (
    ExecutionHalted,
    NotImplementedCallError,
    UnknownFieldError,
)
from service_object.handlers import HandlerTable
from service_object.logging_config import get_logger

logger = get_logger("service")

_NO_VALUE = object()


def _coercive(validator: Callable) -> Callable:
    """Run ``validator`` and halt the call if the service is invalid afterwards."""

    @wraps(validator)
    def _strict(self, *args, **kwargs):
        validator(self, *args, **kwargs)
        if not self.valid:
            self.halt()

    _strict.__name__ = f"{validator.__name__}_strict"
    _strict.__qualname__ = f"Service.{_strict.__name__}"
    return _strict


class Service:
    """Base class of service objects.

    Inputs not declared as members are readable as attributes: with no
    arguments and a mapping payload, payload entries come first, then any
    input (argument or the reserved payload key).
    """

    def __init__(self, payload: Any = None, args: Optional[Mapping] = None) -> None:
        self._context: ServiceContext = build_context(
            {} if payload is None else payload, args
        )

    @classmethod
    def run(
        cls,
        payload: Any = None,
        args: Optional[Mapping] = None,
        configure: Optional[Callable[["Service"], Any]] = None,
    ) -> Any:
        """Build one service for ``payload`` and ``args`` and execute it."""
        return cls(payload, args).execute(configure)

    # Lifecycle

    def execute(self, configure: Optional[Callable[["Service"], Any]] = None) -> Any:
        name = type(self).__name__
        try:
            if configure is not None:
                configure(self)
                logger.debug(f"{name} configured", extra={"service": name})
            self.audit()
            if self.valid:
                self.call()
            else:
                logger.debug(
                    f"{name} skipped call: invalid after audit",
                    extra={"service": name},
                )
        except ExecutionHalted as halt:
            if halt.owner is not self:
                raise
            logger.debug(
                f"{name} halted on {list(self.errors)}",
                extra={"service": name},
            )

        if self.valid:
            return handlers.resolve_success(self._context)
        return handlers.resolve_failure(self._context)

    def audit(self) -> None:
        """Pre-call validation hook. Does nothing by default."""

    def call(self) -> None:
        raise NotImplementedCallError()

    def halt(self) -> None:
        """Stop the current ``execute`` and go straight to result resolution."""
        raise ExecutionHalted(self)

    @property
    def valid(self) -> bool:
        return self._context.valid

    # Handlers

    def on(self, name: Hashable, handler: Optional[Callable] = None):
        return self._context.handlers.register_hook(canonical_key(name), handler)

    def success(self, selector=None, handler: Optional[Callable] = None):
        if not callable(selector):
            selector = canonical_key(selector)
        return self._context.handlers.register_success(selector, handler)

    def failure(self, selector=None, handler: Optional[Callable] = None):
        if not callable(selector):
            selector = canonical_key(selector)
        return self._context.handlers.register_failure(selector, handler)

    def hook(self, name: Hashable, data: Any = _NO_VALUE) -> Any:
        if data is _NO_VALUE:
            data = self
        return handlers.dispatch_hook(self._context.handlers, canonical_key(name), data)

    # Outputs

    def output(self, key_or_value: Any, value: Any = _NO_VALUE) -> Any:
        """``output(value)`` writes the default output; ``output(key, value)`` a named one."""
        if value is _NO_VALUE:
            key, value = DEFAULT_INPUT_KEY, key_or_value
        else:
            key = canonical_key(key_or_value)
        self._context.outputs[key] = value
        return value

    def output_value(self, key: Hashable = DEFAULT_INPUT_KEY) -> Any:
        return self._context.outputs.get(canonical_key(key))

    # Validators

    def add_error(self, field: Hashable, value: Any) -> None:
        validators.add_error(self._context, field, value)

    def add_errors(self, errors: Mapping) -> None:
        validators.add_errors(self._context, errors)

    def required(self, *keys: Hashable) -> None:
        validators.required(self._context, *keys)

    def any_of(self, *keys: Hashable) -> None:
        validators.any_of(self._context, *keys)

    def sliced(self, *keys: Hashable) -> None:
        validators.sliced(self._context, *keys)

    def sliced_list(self, *keys: Hashable) -> None:
        validators.sliced_list(self._context, *keys)

    add_error_strict = _coercive(add_error)
    add_errors_strict = _coercive(add_errors)
    required_strict = _coercive(required)
    any_of_strict = _coercive(any_of)
    sliced_strict = _coercive(sliced)
    sliced_list_strict = _coercive(sliced_list)

    # Inputs

    @property
    def payload(self) -> Any:
        return self._context.payload

    @payload.setter
    def payload(self, value: Any) -> None:
        self._context.payload = canonical_payload(value)

    @property
    def payload_snapshot(self) -> Any:
        return self._context.payload_snapshot

    @property
    def snapshot(self) -> Mapping:
        return self._context.snapshot

    @property
    def inputs(self) -> dict:
        return self._context.inputs

    @property
    def args(self) -> dict:
        return self._context.args

    @property
    def errors(self):
        return self._context.errors

    @property
    def outputs(self) -> dict:
        return self._context.outputs

    @property
    def handlers(self) -> HandlerTable:
        return self._context.handlers

    def responds_to(self, name: str) -> bool:
        if hasattr(type(self), name) or name in vars(self):
            return True
        return self._has_field(name)

    def _has_field(self, name: str) -> bool:
        context = vars(self).get("_context")
        return context is not None and attributes.has_field(context, name)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real members.
        context = vars(self).get("_context")
        if context is None or (name.startswith("__") and name.endswith("__")):
            raise UnknownFieldError(self, name)
        value = attributes.resolve_field(context, name)
        if value is attributes.MISSING:
            raise UnknownFieldError(self, name)
        return value
