"""Custom exception hierarchy and the halt signal for service objects."""

from service_object.config import NOT_IMPLEMENTED


class ServiceObjectError(Exception):
    """Base exception for all service object framework errors."""

    pass


class NotImplementedCallError(ServiceObjectError, NotImplementedError):
    """Raised when a service does not override ``call``."""

    NOT_IMPLEMENTED = NOT_IMPLEMENTED

    def __init__(self, message: str = NOT_IMPLEMENTED) -> None:
        super().__init__(message)


class UnknownFieldError(ServiceObjectError, AttributeError):
    """Raised when a name is neither a member nor an input of the service."""

    def __init__(self, owner, name: str) -> None:
        super().__init__(
            f"'{type(owner).__name__}' object has no attribute '{name}'"
        )
        self.name = name
        self.obj = owner


class ExecutionHalted(BaseException):
    """Early-exit signal raised by coercive validators.

    Only the ``execute`` of the service named in ``owner`` intercepts it.
    Derives from BaseException so ``except Exception`` in business code
    does not catch it.
    """

    def __init__(self, owner) -> None:
        super().__init__(f"execution halted for {type(owner).__name__}")
        self.owner = owner
