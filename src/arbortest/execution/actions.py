"""
Invocation of hook and test actions.

Every action call is wrapped here so that its fault is captured as a value
instead of propagating through the engine. A test action's `AssertionError` is
the caller's assertion mechanism; any other exception is an unexpected fault.
"""

from attrs import field, frozen

from arbortest.core.types import Action


@frozen
class FailureDetail:
    """Description of a failed hook or test action.

    Params:
        message: Exception message, or its class name when the message is empty
        origin: Identity of the hook or test that raised
        exception_type: Class name of the raised exception
        exception: The raised exception itself
    """

    message: str
    origin: str
    exception_type: str | None = None
    exception: BaseException | None = field(default=None, eq=False, repr=False)

    @classmethod
    def from_exception(cls, error: BaseException, origin: str) -> "FailureDetail":
        message = str(error) or type(error).__name__
        return cls(
            message=message,
            origin=origin,
            exception_type=type(error).__name__,
            exception=error,
        )


@frozen
class Passed:
    """The action ran to completion."""

    @property
    def ok(self) -> bool:
        return True


@frozen
class AssertionFailure:
    """The action's own assertion logic rejected the result."""

    detail: FailureDetail

    @property
    def ok(self) -> bool:
        return False


@frozen
class UnexpectedFault:
    """The action could not run to a verdict."""

    detail: FailureDetail

    @property
    def ok(self) -> bool:
        return False


ActionResult = Passed | AssertionFailure | UnexpectedFault


def invoke(action: Action, origin: str) -> ActionResult:
    """
    Run a zero-argument action and classify how it ended.

    Only `Exception` subclasses are captured; interpreter exits and keyboard
    interrupts still stop the run.

    Params:
        action: Zero-argument callable to run
        origin: Identity recorded in the failure detail

    Returns:
        Passed, AssertionFailure or UnexpectedFault
    """
    try:
        action()
    except AssertionError as e:
        return AssertionFailure(FailureDetail.from_exception(e, origin))
    except Exception as e:
        return UnexpectedFault(FailureDetail.from_exception(e, origin))
    return Passed()
