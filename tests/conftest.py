import pytest

from service_object import Service


def _call_service(service_class, payload, **args):
    def configure(service):
        service.success(lambda result: result)
        service.failure(lambda errors: errors)

    return service_class.run(payload, args, configure)


def _call_service_with_error_param(service_class, payload, error_param):
    def configure(service):
        service.success(lambda result: result)
        service.failure(error_param, lambda errors: errors)
        service.failure("other_param", lambda errors: "Other param failure")
        service.failure(lambda errors: "Default failure")

    return service_class.run(payload, configure=configure)


@pytest.fixture
def call_service():
    """Run a service with pass-through success and failure handlers."""
    return _call_service


@pytest.fixture
def call_service_with_error_param():
    """Run a service with failure handlers for ``error_param``, ``other_param`` and default."""
    return _call_service_with_error_param


@pytest.fixture
def make_service():
    """Build a Service subclass from plain functions."""

    def _make(call=None, audit=None, **members):
        attrs = dict(members)
        if call is not None:
            attrs["call"] = call
        if audit is not None:
            attrs["audit"] = audit
        return type("AdHocService", (Service,), attrs)

    return _make
