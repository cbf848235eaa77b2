"""Per-call execution context: input store, snapshot, errors, outputs and handlers."""

from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, DefaultDict, Dict, Hashable, List, Optional

from service_object.config import DEFAULT_INPUT_KEY
from service_object.handlers import HandlerTable
from service_object.keys import canonical_key, canonicalize

__all__ = [
    "ServiceContext",
    "build_context",
    "canonical_key",
    "canonical_payload",
    "canonicalize",
]


def canonical_payload(payload: Any) -> Any:
    if isinstance(payload, Mapping):
        return canonicalize(payload)
    return payload


@dataclass
class ServiceContext:
    """State owned by one service call."""

    inputs: Dict[Hashable, Any]
    snapshot: Mapping
    errors: DefaultDict[Hashable, List[Any]] = field(
        default_factory=lambda: defaultdict(list)
    )
    outputs: Dict[Hashable, Any] = field(default_factory=dict)
    handlers: HandlerTable = field(default_factory=HandlerTable)

    @property
    def payload(self) -> Any:
        return self.inputs[DEFAULT_INPUT_KEY]

    @payload.setter
    def payload(self, value: Any) -> None:
        self.inputs[DEFAULT_INPUT_KEY] = value

    @property
    def payload_snapshot(self) -> Any:
        return self.snapshot[DEFAULT_INPUT_KEY]

    @property
    def args(self) -> Dict[Hashable, Any]:
        """Auxiliary arguments: every input except the payload."""
        return {
            key: value
            for key, value in self.inputs.items()
            if key != DEFAULT_INPUT_KEY
        }

    @property
    def payload_is_mapping(self) -> bool:
        return isinstance(self.payload, Mapping)

    @property
    def valid(self) -> bool:
        return not self.errors

    def service_keys(self) -> List[Hashable]:
        """Union of payload keys and argument keys, payload first."""
        keys = [canonical_key(key) for key in self.payload]
        keys.extend(key for key in self.args if key not in keys)
        return keys


def build_context(payload: Any, args: Optional[Mapping] = None) -> ServiceContext:
    """Assemble the input store for one call and snapshot it.

    The payload is stored under the reserved key after the arguments, so an
    argument named like the reserved key is shadowed by the payload.
    """
    inputs = canonicalize(args or {})
    inputs[DEFAULT_INPUT_KEY] = canonical_payload(payload)
    snapshot = MappingProxyType(dict(inputs))
    return ServiceContext(inputs=inputs, snapshot=snapshot)
