"""Shared machinery of the intersection engines.

An engine is a :class:`~yapcurve.curves.CurveHandler`: geometry A is
dispatched into it, the handler for A's type looks at the stored
geometry B to pick a solver, and every solver records its findings in
the engine's :class:`~yapcurve.location.IntersectionResults`.  The
engine object is the per-query context; ``reset_geometry()`` re-targets
it at the next leaf of a collection without rebuilding it.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Tuple

from loguru import logger

from yapcurve.curves import CurveHandler
from yapcurve.extend import accept_fraction, fragment_extension
from yapcurve.geom import dist, epsilon, interpolate
from yapcurve.location import (
    CurveCurveApproach,
    CurveLocation,
    CurveLocationPair,
    IntersectionResults,
    IntervalRole,
)


class Fragment(NamedTuple):
    """A straight piece of a segment or line string.  ``index`` counts
    the kept pieces, so it is 0 for the first non-degenerate one."""

    curve: object
    point0: list
    point1: list
    fraction0: float
    fraction1: float
    extend: object
    index: int
    last: bool


def segment_fragments(curve, extend) -> Iterator[Fragment]:
    """Straight fragments of a segment or line string, skipping
    zero-length pieces.  Only the first fragment extends at its start and
    only the last extends at its end."""

    if curve.curvetype == 'segment':
        if not curve.isdegenerate():
            yield Fragment(curve, curve.point0, curve.point1, 0.0, 1.0, extend, 0, True)
        return
    pieces = [f for f in curve.fragments() if dist(f[1], f[2]) >= epsilon]
    count = len(pieces)
    for k, (_, p0, p1, f0, f1) in enumerate(pieces):
        yield Fragment(curve, p0, p1, f0, f1, fragment_extension(extend, k, count), k, k == count - 1)


class IntersectionEngine(CurveHandler):
    """Base class for the XY and XYZ engines."""

    logtag = '[CCI]'

    def __init__(self, extendA, geometryB, extendB):
        self._extendA = extendA
        self._geometryB = geometryB
        self._extendB = extendB
        self.results = IntersectionResults()

    def reset_geometry(self, geometryB, extendB) -> None:
        self._geometryB = geometryB
        self._extendB = extendB

    def grab_results(self) -> IntersectionResults:
        results = self.results
        self.results = IntersectionResults()
        return results

    def _unsupported(self, curveA) -> None:
        logger.debug(f"{self.logtag} no solver for {curveA.curvetype} x {self._geometryB.curvetype}")

    def _degenerate(self, curve) -> bool:
        if curve.isdegenerate():
            logger.debug(f"{self.logtag} skipping degenerate {curve.curvetype}")
            return True
        return False

    def _fragment_fraction(self, fragment: Fragment, local: float) -> Optional[Tuple[float, IntervalRole]]:
        """Map a local fraction on ``fragment`` to the owning curve, or
        ``None`` if the extension policy rejects it.  A hit at the end of
        a non-final fragment belongs to the next fragment."""

        u = accept_fraction(fragment.extend, local)
        if u is None:
            return None
        if not fragment.last and u >= 1.0:
            return None
        role = IntervalRole.ISOLATED
        if fragment.index > 0 and u == 0.0:
            role = IntervalRole.ISOLATED_AT_VERTEX
        return interpolate(fragment.fraction0, u, fragment.fraction1), role

    def _accept_pair(self, pair: CurveLocationPair) -> bool:
        return True

    def _record(self, curveA, fractionA, curveB, fractionB, reversed,
                roleA=IntervalRole.ISOLATED, roleB=IntervalRole.ISOLATED,
                approach=CurveCurveApproach.INTERSECTION) -> None:
        detailA = CurveLocation(curveA, fractionA, curveA.fraction_to_point(fractionA), roleA)
        detailB = CurveLocation(curveB, fractionB, curveB.fraction_to_point(fractionB), roleB)
        pair = CurveLocationPair(detailA, detailB, approach)
        if not self._accept_pair(pair):
            logger.debug(f"{self.logtag} rejecting pair at fractions {fractionA}, {fractionB}")
            return
        if reversed:
            pair = pair.swapped()
        self.results.append(pair)


__all__ = ['Fragment', 'segment_fragments', 'IntersectionEngine']
