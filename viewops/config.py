"""
Configuration for view operations.

Defines the Config class carried by every DocumentSession.
"""

BEST_EFFORT_POLICIES = ("default", "raise")


class Config:
    """Configuration for viewops.

    Attributes:
        geom_tolerance_ft (float): Tolerance for point/box comparisons in feet
            (default: 1e-9)
        best_effort_policy (str): How best-effort operations treat failures
            "default" => record an ERROR diagnostic and return the benign result
            "raise" => record an ERROR diagnostic, then re-raise
            Default: "default"
        max_diag_events (int): Event cap for the session's default Diagnostics
            (default: 200)
        template_parameter (str): Built-in parameter cleared by
            remove_view_template (default: "VIEW_TEMPLATE_FOR_SCHEDULE")

    Commentary:
        ✔ best_effort_policy covers delete, remove_view_template and the
          schedule capability check
        ⚠ "raise" changes delete() from returning False to propagating the
          host's error

    Example:
        >>> cfg = Config()
        >>> cfg.best_effort_policy
        'default'
    """

    def __init__(
        self,
        geom_tolerance_ft=1e-9,
        best_effort_policy="default",
        max_diag_events=200,
        template_parameter="VIEW_TEMPLATE_FOR_SCHEDULE",
    ):
        self.geom_tolerance_ft = float(geom_tolerance_ft)
        self.best_effort_policy = str(best_effort_policy)
        self.max_diag_events = int(max_diag_events)
        self.template_parameter = str(template_parameter)

        if self.geom_tolerance_ft < 0:
            raise ValueError("geom_tolerance_ft must be non-negative")
        if self.best_effort_policy not in BEST_EFFORT_POLICIES:
            raise ValueError("best_effort_policy must be 'default' or 'raise'")
        if self.max_diag_events <= 0:
            raise ValueError("max_diag_events must be positive")
        if not self.template_parameter.strip():
            raise ValueError("template_parameter must be a non-empty name")

    def __repr__(self):
        return (
            f"Config(geom_tolerance_ft={self.geom_tolerance_ft}, "
            f"best_effort_policy='{self.best_effort_policy}', "
            f"max_diag_events={self.max_diag_events}, "
            f"template_parameter='{self.template_parameter}')"
        )

    def to_dict(self):
        """Export configuration as dictionary for JSON serialization."""
        return {
            "geom_tolerance_ft": self.geom_tolerance_ft,
            "best_effort_policy": self.best_effort_policy,
            "max_diag_events": self.max_diag_events,
            "template_parameter": self.template_parameter,
        }

    @classmethod
    def from_dict(cls, d):
        """Create Config from dictionary (e.g., from JSON)."""
        return cls(
            geom_tolerance_ft=d.get("geom_tolerance_ft", 1e-9),
            best_effort_policy=d.get("best_effort_policy", "default"),
            max_diag_events=d.get("max_diag_events", 200),
            template_parameter=d.get("template_parameter", "VIEW_TEMPLATE_FOR_SCHEDULE"),
        )
