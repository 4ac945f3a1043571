"""Location records produced by the intersection engine.

A :class:`CurveLocation` is a point on one curve: the curve, the
fraction along it and the world coordinates there.  Each geometric event
found by the engine is a :class:`CurveLocationPair`, one location per
input curve, and a query returns them in discovery order as an
:class:`IntersectionResults`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List

from yapcurve.geom import vstr


class IntervalRole(Enum):
    """How a location relates to neighboring locations on its curve."""

    ISOLATED = 0
    ISOLATED_AT_VERTEX = 1
    INTERVAL_START = 10
    INTERVAL_INTERIOR = 11
    INTERVAL_END = 12


class CurveCurveApproach(Enum):
    """Kind of event that produced a location pair."""

    INTERSECTION = 0
    COINCIDENT = 2


@dataclass(frozen=True)
class CurveLocation:
    """A point at ``fraction`` on ``curve``.

    ``curve`` is a plain reference to the caller's primitive, so the
    record is only meaningful while the caller keeps that curve.
    """

    curve: object
    fraction: float
    point: list
    role: IntervalRole = IntervalRole.ISOLATED

    @property
    def isextrapolated(self) -> bool:
        return self.fraction < 0.0 or self.fraction > 1.0

    @property
    def isisolated(self) -> bool:
        return self.role in (IntervalRole.ISOLATED, IntervalRole.ISOLATED_AT_VERTEX)

    def __repr__(self):
        return 'CurveLocation({}, fraction={}, point={}, role={})'.format(
            type(self.curve).__name__, self.fraction, vstr(self.point), self.role.name)


@dataclass(frozen=True)
class CurveLocationPair:
    detailA: CurveLocation
    detailB: CurveLocation
    approach: CurveCurveApproach = CurveCurveApproach.INTERSECTION

    def swapped(self) -> 'CurveLocationPair':
        return CurveLocationPair(self.detailB, self.detailA, self.approach)


@dataclass(frozen=True)
class LocationArrays:
    """Parallel lists of locations on geometry A and geometry B."""

    dataA: List[CurveLocation]
    dataB: List[CurveLocation]


@dataclass
class IntersectionResults:
    """Ordered, non-deduplicated sequence of location pairs."""

    pairs: List[CurveLocationPair] = field(default_factory=list)

    def append(self, pair: CurveLocationPair) -> None:
        self.pairs.append(pair)

    def extend(self, other: 'IntersectionResults') -> None:
        self.pairs.extend(other.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[CurveLocationPair]:
        return iter(self.pairs)

    def __getitem__(self, i):
        return self.pairs[i]

    def __bool__(self) -> bool:
        return len(self.pairs) > 0

    def arrays(self) -> LocationArrays:
        """The legacy view: all A locations and all B locations as two
        parallel lists."""

        return LocationArrays([p.detailA for p in self.pairs],
                              [p.detailB for p in self.pairs])

    def swapped(self) -> 'IntersectionResults':
        return IntersectionResults([p.swapped() for p in self.pairs])


__all__ = [
    'IntervalRole',
    'CurveCurveApproach',
    'CurveLocation',
    'CurveLocationPair',
    'LocationArrays',
    'IntersectionResults',
]
