"""
Error taxonomy for view operations.

Validation errors are raised before any mutation scope is opened. Failures
raised by the host document itself are not wrapped; they reach the caller
unchanged.
"""


class ViewOpsError(Exception):
    """Base class for errors raised by viewops itself."""


class InvalidArgument(ViewOpsError, ValueError):
    """None, empty or structurally wrong input (blank name, empty curve list,
    incompatible template, object that is not a view)."""


class UnsupportedViewKind(ViewOpsError, ValueError):
    """A view kind fell through every known policy, or is not allowed for
    the requested operation (e.g. a callout parent)."""

    def __init__(self, kind, operation=None):
        self.kind = kind
        self.operation = operation
        if operation:
            msg = "View kind '{}' is not supported for {}".format(kind, operation)
        else:
            msg = "Unsupported view kind '{}'".format(kind)
        super(UnsupportedViewKind, self).__init__(msg)


class UnsupportedValue(ViewOpsError, ValueError):
    """A string-keyed option did not match any documented name."""

    def __init__(self, option, value, allowed):
        self.option = option
        self.value = value
        self.allowed = tuple(allowed)
        super(UnsupportedValue, self).__init__(
            "Unsupported {} '{}' (expected one of: {})".format(
                option, value, ", ".join(self.allowed)
            )
        )


class NotFound(ViewOpsError, LookupError):
    """A referenced sub-element (type, owner, bounds context) did not resolve."""
