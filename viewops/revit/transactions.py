"""
Mutation scope for document writes.

All writes go through one MutationScope per session. The host context
(Dynamo's TransactionManager, or a plain Revit Transaction) is opened by the
first holder and closed once, when the outermost holder leaves. Composite
operations therefore share a single ambient context instead of nesting
independent open/close pairs.

No rollback is attempted: if a body raises, the depth is unwound, the
failure is recorded and re-raised, and the outermost holder asks the host to
close its context (abandon_mutation) so later scopes can reopen it.
"""

from contextlib import contextmanager


class MutationScope(object):
    """Depth-counted guard around the host's begin/end mutation primitives.

    Example:
        >>> scope = MutationScope(host)
        >>> with scope:
        ...     with scope:          # joins, does not reopen
        ...         view.Name = "Level 1"
        >>> scope.is_open
        False
    """

    def __init__(self, host, diag=None):
        self.host = host
        self.diag = diag
        self._depth = 0
        self.opened_count = 0
        self.closed_count = 0

    @property
    def depth(self):
        return self._depth

    @property
    def is_open(self):
        return self._depth > 0

    def ensure_open(self):
        """Open the host context if needed, otherwise join the open one."""
        if self._depth == 0:
            self.host.begin_mutation()
            self.opened_count += 1
            if self.diag is not None:
                self.diag.debug(phase="mutation", callsite="ensure_open", message="scope opened")
        self._depth += 1
        return self

    def mark_done(self):
        """Leave the scope; closes the host context when the outermost holder leaves."""
        if self._depth == 0:
            raise RuntimeError("mark_done() called with no open mutation scope")
        self._depth -= 1
        if self._depth == 0:
            self.host.end_mutation()
            self.closed_count += 1
            if self.diag is not None:
                self.diag.debug(phase="mutation", callsite="mark_done", message="scope closed")

    def _abandon(self, exc):
        # Inner holders only unwind depth; the outermost one hands the
        # context back to the host so the next scope can reopen it.
        outermost = self._depth == 1
        self._depth = max(0, self._depth - 1)
        if not outermost:
            return

        if self.diag is not None:
            try:
                self.diag.error(
                    phase="mutation",
                    callsite="scope_body",
                    message="mutation failed inside scope; no rollback attempted",
                    exc=exc,
                )
            except Exception:
                pass

        try:
            self.host.abandon_mutation()
            self.closed_count += 1
        except Exception as e:
            # The body's exception is the one that propagates
            if self.diag is not None:
                self.diag.error(
                    phase="mutation",
                    callsite="abandon_mutation",
                    message="could not close mutation context after failure",
                    exc=e,
                )

    def __enter__(self):
        return self.ensure_open()

    def __exit__(self, exc_type, exc, tb):
        if exc is None:
            self.mark_done()
        else:
            self._abandon(exc)
        return False


@contextmanager
def mutation(session):
    """Acquire the session's mutation scope for the duration of a block."""
    with session.scope:
        yield session.scope
