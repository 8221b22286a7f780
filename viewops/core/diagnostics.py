# viewops/core/diagnostics.py

LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _exc_to_str(e):
    try:
        return str(e)
    except Exception:
        return "<unstringifiable exception>"


class Diagnostics(object):
    """
    Structured diagnostics recorder for view operations.

    - Bounded event storage
    - Aggregated counts (keep counting after the event cap is hit)
    - JSON-safe output
    - Recording never raises into the caller

    Every operation that takes a session records through session.diag, so a
    host can inspect what was swallowed by best-effort operations.
    """

    def __init__(self, max_events=200):
        self.max_events = int(max_events)
        self.events = []
        self.counts = {}
        self.dropped_events = 0

    def _count_key(self, level, phase, callsite, exc_type):
        return "{}|{}|{}|{}".format(level, phase, callsite, exc_type or "")

    def _record(self, level, phase, callsite, message, exc=None,
                view_id=None, elem_id=None, extra=None):
        payload = {
            "level": level,
            "phase": phase,
            "callsite": callsite,
            "message": message,
            "exc_type": type(exc).__name__ if exc is not None else None,
            "exc_message": _exc_to_str(exc) if exc is not None else None,
            "view_id": view_id,
            "elem_id": elem_id,
            "extra": dict(extra or {}),
        }

        key = self._count_key(level, phase, callsite, payload["exc_type"])
        self.counts[key] = self.counts.get(key, 0) + 1

        if len(self.events) >= self.max_events:
            self.dropped_events += 1
            return None

        self.events.append(payload)
        return len(self.events) - 1

    def debug(self, phase, callsite, message, exc=None, view_id=None, elem_id=None, extra=None):
        self._record("DEBUG", phase, callsite, message, exc=exc,
                     view_id=view_id, elem_id=elem_id, extra=extra)

    def info(self, phase, callsite, message, exc=None, view_id=None, elem_id=None, extra=None):
        self._record("INFO", phase, callsite, message, exc=exc,
                     view_id=view_id, elem_id=elem_id, extra=extra)

    def warn(self, phase, callsite, message, exc=None, view_id=None, elem_id=None, extra=None):
        self._record("WARN", phase, callsite, message, exc=exc,
                     view_id=view_id, elem_id=elem_id, extra=extra)

    def error(self, phase, callsite, message, exc=None, view_id=None, elem_id=None, extra=None):
        self._record("ERROR", phase, callsite, message, exc=exc,
                     view_id=view_id, elem_id=elem_id, extra=extra)

    def events_at(self, level):
        """Stored events of one level, in recording order."""
        return [ev for ev in self.events if ev.get("level") == level]

    def count(self, level=None, phase=None):
        """Total recorded events (stored or dropped) matching level/phase."""
        total = 0
        for key, n in self.counts.items():
            k_level, k_phase = key.split("|")[:2]
            if level is not None and k_level != level:
                continue
            if phase is not None and k_phase != phase:
                continue
            total += n
        return total

    def to_dict(self):
        return {
            "max_events": self.max_events,
            "num_events": len(self.events),
            "dropped_events": self.dropped_events,
            "counts": dict(self.counts),
            "events": list(self.events),
        }
