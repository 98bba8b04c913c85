"""Error hierarchy shared across the pointsplan package."""


class PointsPlanError(Exception):
    """Base class for all pointsplan errors."""


class LabelNotFoundError(PointsPlanError, KeyError):
    """Raised when a size label is not part of a size mapping."""

    kind = "LabelNotFound"

    def __init__(self, label: str, declared: tuple[str, ...] = ()) -> None:
        self.label = label
        self.declared = declared
        message = f"Unknown size label: {label!r}"
        if declared:
            message += f" (expected one of {', '.join(declared)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class MappingNotFoundError(PointsPlanError, KeyError):
    """Raised when no size mapping is registered under a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No size mapping registered as {name!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class WorkbookError(PointsPlanError):
    """Raised for invalid workbooks or structural edits."""


class PlanningError(PointsPlanError):
    """Raised when a team plan cannot be produced."""


class JiraExportError(PointsPlanError):
    """Raised when a Jira export cannot start or the connection fails."""


__all__ = [
    "PointsPlanError",
    "LabelNotFoundError",
    "MappingNotFoundError",
    "WorkbookError",
    "PlanningError",
    "JiraExportError",
]
