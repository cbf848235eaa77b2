from service_object.attributes import (
    MISSING,
    has_field,
    resolve_field,
    try_get_from_inputs,
    try_get_from_payload,
)
from service_object.context import build_context


class TestTryGet:
    def test_payload_entry_without_arguments(self):
        ctx = build_context({"k": 1})

        assert try_get_from_payload(ctx, "k") == 1

    def test_payload_skipped_with_arguments(self):
        ctx = build_context({"k": 1}, {"x": 2})

        assert try_get_from_payload(ctx, "k") is MISSING

    def test_payload_skipped_when_not_mapping(self):
        assert try_get_from_payload(build_context([1]), "k") is MISSING

    def test_inputs_entry(self):
        ctx = build_context({"k": 1}, {"x": 2})

        assert try_get_from_inputs(ctx, "x") == 2
        assert try_get_from_inputs(ctx, "default") == {"k": 1}
        assert try_get_from_inputs(ctx, "k") is MISSING

    def test_falsy_values_are_found(self):
        ctx = build_context({"zero": 0, "none": None})

        assert resolve_field(ctx, "zero") == 0
        assert resolve_field(ctx, "none") is None
        assert has_field(ctx, "none") is True


class TestResolveField:
    def test_str_key_wins_over_bytes_variant(self):
        ctx = build_context({b"k": 1, "k": 2})

        assert resolve_field(ctx, "k") == 2

    def test_not_found(self):
        ctx = build_context({"k": 1}, {"x": 2})

        assert resolve_field(ctx, "k") is MISSING
        assert has_field(ctx, "k") is False

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"
        assert type(MISSING)() is MISSING
