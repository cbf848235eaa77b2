"""Validation helpers operating on a ServiceContext.

Each helper records error codes in ``ctx.errors`` and never raises. Helpers
that need a mapping payload record ``input: must_be_hash`` and return
without checking anything when the payload is not a mapping.
"""

from collections.abc import Mapping
from typing import Any, Hashable, Iterable

from service_object.config import (
    ANY_FIELD_MUST_EXIST,
    FIELD_MUST_EXIST,
    INPUT_FIELD,
    INPUT_SUBITEM_FIELD,
    MUST_BE_ARRAY,
    MUST_BE_HASH,
)
from service_object.context import ServiceContext, canonical_key, canonicalize
from service_object.logging_config import get_logger

logger = get_logger("validators")


def add_error(ctx: ServiceContext, field: Hashable, value: Any) -> None:
    """Append ``value`` to the errors of ``field``.

    Lists and tuples append element-wise. ``None`` appends nothing but still
    creates the field entry, which marks the context invalid.
    """
    if value is None:
        values = []
    elif isinstance(value, (list, tuple)):
        values = list(value)
    else:
        values = [value]
    ctx.errors[canonical_key(field)].extend(values)


def add_errors(ctx: ServiceContext, errors: Mapping) -> None:
    for field, value in errors.items():
        add_error(ctx, field, value)


def _require_mapping(ctx: ServiceContext) -> bool:
    if ctx.payload_is_mapping:
        return True
    logger.debug(
        f"Payload of type {type(ctx.payload).__name__} is not a mapping",
        extra={"payload_type": type(ctx.payload).__name__},
    )
    add_error(ctx, INPUT_FIELD, MUST_BE_HASH)
    return False


def required(ctx: ServiceContext, *keys: Hashable) -> None:
    if not _require_mapping(ctx):
        return

    present = ctx.service_keys()
    for key in _canonical_keys(keys):
        if key not in present:
            add_error(ctx, key, FIELD_MUST_EXIST)


def any_of(ctx: ServiceContext, *keys: Hashable) -> None:
    if not _require_mapping(ctx):
        return

    present = ctx.service_keys()
    if not any(key in present for key in _canonical_keys(keys)):
        add_error(ctx, INPUT_FIELD, ANY_FIELD_MUST_EXIST)


def sliced(ctx: ServiceContext, *keys: Hashable) -> None:
    """Replace the payload with payload-plus-args restricted to ``keys``.

    Arguments win over payload entries with the same key. Missing keys are
    omitted.
    """
    if not _require_mapping(ctx):
        return

    merged = {**canonicalize(ctx.payload), **ctx.args}
    ctx.payload = _slice(merged, keys)


def sliced_list(ctx: ServiceContext, *keys: Hashable) -> None:
    """Restrict every mapping of a list payload to ``keys``.

    On a shape error the payload is left as it was.
    """
    payload = ctx.payload
    if not isinstance(payload, (list, tuple)):
        add_error(ctx, INPUT_FIELD, MUST_BE_ARRAY)
        return
    if not all(isinstance(item, Mapping) for item in payload):
        add_error(ctx, INPUT_SUBITEM_FIELD, MUST_BE_HASH)
        return

    ctx.payload = [_slice(canonicalize(item), keys) for item in payload]


def _canonical_keys(keys: Iterable[Hashable]) -> list:
    return [canonical_key(key) for key in keys]


def _slice(mapping: Mapping, keys: Iterable[Hashable]) -> dict:
    return {key: mapping[key] for key in _canonical_keys(keys) if key in mapping}
