"""T-shirt size to story point configuration.

The mapping is built once at import time and exposed read-only. Collaborators
that only need to turn a label into points should depend on
:class:`EstimateProvider` instead of the concrete mapping.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterator, Mapping, Protocol, runtime_checkable

from pointsplan.exceptions import LabelNotFoundError, MappingNotFoundError

_logger = logging.getLogger(__name__)

JIRA_CONFIG_NAME = "Jira Config"

# Declared order is significant: values strictly increase along it.
_DEFAULT_SIZES: tuple[tuple[str, int], ...] = (
    ("XS", 1),
    ("S", 3),
    ("M", 5),
    ("L", 13),
    ("XL", 21),
)


@runtime_checkable
class EstimateProvider(Protocol):
    """Anything that can turn a size label into a point value."""

    def points_for(self, label: str) -> int:
        ...


class SizePointsMapping:
    """Immutable, ordered mapping of size labels to positive point values.

    Parameters
    ----------
    pairs:
        ``(label, points)`` pairs in declared order. Labels must be unique,
        points must be positive integers and strictly increasing.
    name:
        Optional identifier used in log messages and ``repr``.
    """

    __slots__ = ("_name", "_labels", "_points")

    def __init__(self, pairs, name: str | None = None) -> None:
        labels: list[str] = []
        points: dict[str, int] = {}
        previous = 0
        for label, value in pairs:
            if not isinstance(label, str) or not label.strip():
                raise ValueError("Size labels must be non-empty strings")
            if label in points:
                raise ValueError(f"Duplicate size label: {label}")
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Points for {label} must be a positive integer")
            if value <= previous:
                raise ValueError(
                    f"Points must strictly increase in declared order ({label}={value})"
                )
            labels.append(label)
            points[label] = value
            previous = value

        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_labels", tuple(labels))
        object.__setattr__(self, "_points", MappingProxyType(points))

    def __setattr__(self, key, value):
        raise TypeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key):
        raise TypeError(f"{type(self).__name__} is immutable")

    @property
    def name(self) -> str | None:
        return self._name

    def lookup(self, label: str) -> int:
        """Return the points for ``label`` or raise :class:`LabelNotFoundError`."""
        key = label.strip() if isinstance(label, str) else label
        try:
            return self._points[key]
        except (KeyError, TypeError):
            raise LabelNotFoundError(str(label), self._labels) from None

    def points_for(self, label: str) -> int:
        return self.lookup(label)

    def declared_labels(self) -> tuple[str, ...]:
        return self._labels

    def items(self) -> tuple[tuple[str, int], ...]:
        return tuple((label, self._points[label]) for label in self._labels)

    def as_mapping(self) -> Mapping[str, int]:
        return self._points

    def __getitem__(self, label: str) -> int:
        return self.lookup(label)

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and label.strip() in self._points

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        body = ", ".join(f"{label}={points}" for label, points in self.items())
        return f"SizePointsMapping({self._name!r}: {body})"


DEFAULT_SIZE_MAPPING = SizePointsMapping(_DEFAULT_SIZES, name=JIRA_CONFIG_NAME)

_REGISTRY: Mapping[str, SizePointsMapping] = MappingProxyType(
    {JIRA_CONFIG_NAME: DEFAULT_SIZE_MAPPING}
)


def get_size_mapping(name: str = JIRA_CONFIG_NAME) -> SizePointsMapping:
    """Return the mapping registered under ``name``."""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise MappingNotFoundError(name) from None


def lookup(label: str) -> int:
    return DEFAULT_SIZE_MAPPING.lookup(label)


def declared_labels() -> tuple[str, ...]:
    return DEFAULT_SIZE_MAPPING.declared_labels()


def size_cost(
    size: str | None,
    estimates: EstimateProvider = DEFAULT_SIZE_MAPPING,
    logger: logging.Logger | None = None,
) -> int:
    """Point cost of a size cell.

    Blank sizes and the ``-`` placeholder cost nothing. Unknown labels are
    logged and cost nothing as well so a typo never aborts a whole plan.
    """
    if size is None:
        return 0
    label = size.strip()
    if not label or label == "-":
        return 0
    try:
        return estimates.points_for(label)
    except LabelNotFoundError as exc:
        (logger or _logger).warning("Ignoring unsized item: %s", exc)
        return 0


__all__ = [
    "JIRA_CONFIG_NAME",
    "DEFAULT_SIZE_MAPPING",
    "EstimateProvider",
    "SizePointsMapping",
    "declared_labels",
    "get_size_mapping",
    "lookup",
    "size_cost",
]
