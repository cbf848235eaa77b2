"""Lookup of inputs as pseudo-fields of a service."""

from typing import Any

from service_object.context import ServiceContext, canonical_key


class _Missing:
    """Sentinel for a field that is not found."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def try_get_from_payload(ctx: ServiceContext, name: str) -> Any:
    """Payload entry ``name`` when there are no arguments and the payload is a mapping."""
    if ctx.args or not ctx.payload_is_mapping:
        return MISSING
    return ctx.payload.get(canonical_key(name), MISSING)


def try_get_from_inputs(ctx: ServiceContext, name: str) -> Any:
    """Input store entry ``name`` (an argument, or the reserved payload key)."""
    return ctx.inputs.get(canonical_key(name), MISSING)


def resolve_field(ctx: ServiceContext, name: str) -> Any:
    value = try_get_from_payload(ctx, name)
    if value is MISSING:
        value = try_get_from_inputs(ctx, name)
    return value


def has_field(ctx: ServiceContext, name: str) -> bool:
    return resolve_field(ctx, name) is not MISSING
