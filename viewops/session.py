"""
Explicit document context for view operations.

Every operation takes a DocumentSession as its first argument instead of
reading a process-wide current document.
"""

from .config import Config
from .core.diagnostics import Diagnostics
from .revit.transactions import MutationScope


class DocumentSession(object):
    """Host document adapter + mutation scope + config + diagnostics.

    Attributes:
        host: Document adapter (RevitHost, or a test fake with the same methods)
        cfg: Config
        diag: Diagnostics recorder
        scope: MutationScope shared by every operation run on this session
    """

    def __init__(self, host, cfg=None, diag=None):
        if host is None:
            raise ValueError("DocumentSession requires a host document adapter")
        self.host = host
        self.cfg = cfg if cfg is not None else Config()
        self.diag = diag if diag is not None else Diagnostics(max_events=self.cfg.max_diag_events)
        self.scope = MutationScope(host, diag=self.diag)

    @property
    def best_effort_policy(self):
        return self.cfg.best_effort_policy

    @classmethod
    def for_document(cls, doc, cfg=None, diag=None):
        """Wrap a native Revit Document."""
        from .revit.host import RevitHost

        return cls(RevitHost(doc), cfg=cfg, diag=diag)

    @classmethod
    def from_current(cls, cfg=None, diag=None):
        """Session over the Dynamo/Revit current document."""
        from .entry_dynamo import get_current_document

        return cls.for_document(get_current_document(), cfg=cfg, diag=diag)

    def __repr__(self):
        return f"DocumentSession(host={type(self.host).__name__}, scope_depth={self.scope.depth})"
