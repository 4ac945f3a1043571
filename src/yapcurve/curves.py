"""Curve primitives and collections consumed by the intersection engine.

Primitives are parameterized by a *fraction*, nominally ``0 <= u <= 1``
from the start to the end of the curve, with values outside that
interval continuing the curve beyond its ends.  Each primitive carries a
``curvetype`` tag and routes itself to a :class:`CurveHandler` through
``dispatch()``, which is how the engine selects a solver without a
global type switch.

Points are yapCAD 4-vectors ``[x, y, z, w]``.  Arc axes are stored as
free vectors with ``w = 0`` so that they transform as directions.
"""

from __future__ import annotations

from math import cos, sin
from typing import Iterator, List, Sequence, Tuple

from yapcurve.geom import (
    add,
    cross,
    dist,
    epsilon,
    ispoint,
    isgoodnum,
    isvect,
    mag,
    point,
    scale3,
    sub,
    unit,
    vstr,
)
from yapcurve.polynomial import implicit_line_unit_circle
from yapcurve.sweep import AngleSweep


class CurveHandler:
    """Null handler: one method per dispatchable type, each doing nothing.

    Engines subclass this and override the methods for the types they
    support; anything left alone contributes nothing.
    """

    def handle_line_segment(self, segment):
        return None

    def handle_line_string(self, linestring):
        return None

    def handle_arc(self, arc):
        return None

    def handle_bspline_curve(self, bspline):
        return None

    def handle_bspline_curve_h(self, bspline):
        return None

    def handle_curve_collection(self, collection):
        return None


class CurvePrimitive:
    """Base class for leaf curves."""

    curvetype = 'primitive'

    def dispatch(self, handler: CurveHandler):
        raise NotImplementedError

    def fraction_to_point(self, fraction: float) -> list:
        raise NotImplementedError

    def fraction_to_point_and_derivative(self, fraction: float) -> Tuple[list, list]:
        raise NotImplementedError

    def start_point(self) -> list:
        return self.fraction_to_point(0.0)

    def end_point(self) -> list:
        return self.fraction_to_point(1.0)

    def isdegenerate(self) -> bool:
        return False


def _freevector(v) -> list:
    if not (isvect(v) or (isinstance(v, (list, tuple)) and len(v) == 3
                          and all(isgoodnum(x) for x in v))):
        raise ValueError('bad vector: {}'.format(v))
    return [float(v[0]), float(v[1]), float(v[2]), 0.0]


## line segments
## -------------

class LineSegment(CurvePrimitive):
    """Straight segment from ``point0`` (fraction 0) to ``point1`` (fraction 1)."""

    curvetype = 'segment'

    def __init__(self, point0, point1):
        if not (ispoint(point0) and ispoint(point1)):
            raise ValueError('bad values passed to LineSegment()')
        self.point0 = point(point0)
        self.point1 = point(point1)

    def __repr__(self):
        return 'LineSegment({}, {})'.format(vstr(self.point0), vstr(self.point1))

    def dispatch(self, handler):
        return handler.handle_line_segment(self)

    def fraction_to_point(self, fraction):
        return add(self.point0, scale3(sub(self.point1, self.point0), fraction))

    def fraction_to_point_and_derivative(self, fraction):
        d = sub(self.point1, self.point0)
        return self.fraction_to_point(fraction), [d[0], d[1], d[2], 0.0]

    def isdegenerate(self):
        return dist(self.point0, self.point1) < epsilon


## line strings
## ------------

class LineString(CurvePrimitive):
    """Polyline through two or more points.

    With ``n`` segments, segment ``i`` covers fractions ``[i/n, (i+1)/n]``.
    Fractions below 0 or above 1 continue the first or last segment.
    """

    curvetype = 'linestring'

    def __init__(self, points: Sequence[list]):
        if not isinstance(points, (list, tuple)) or len(points) < 2:
            raise ValueError('LineString needs at least two points')
        for p in points:
            if not ispoint(p):
                raise ValueError('bad point passed to LineString(): {}'.format(p))
        self.points = [point(p) for p in points]

    def __repr__(self):
        return 'LineString({})'.format(vstr(self.points))

    def dispatch(self, handler):
        return handler.handle_line_string(self)

    def segment_count(self) -> int:
        return len(self.points) - 1

    def _locate(self, fraction) -> Tuple[int, float]:
        n = self.segment_count()
        i = int(fraction * n) if fraction > 0.0 else 0
        i = min(i, n - 1)
        return i, fraction * n - i

    def fraction_to_point(self, fraction):
        i, u = self._locate(fraction)
        p0 = self.points[i]
        p1 = self.points[i + 1]
        return add(p0, scale3(sub(p1, p0), u))

    def fraction_to_point_and_derivative(self, fraction):
        i, u = self._locate(fraction)
        n = self.segment_count()
        d = sub(self.points[i + 1], self.points[i])
        return self.fraction_to_point(fraction), [d[0] * n, d[1] * n, d[2] * n, 0.0]

    def fragments(self) -> Iterator[Tuple[int, list, list, float, float]]:
        """Yield ``(index, point0, point1, fraction0, fraction1)`` for each
        segment of the line string, zero-length segments included."""

        n = self.segment_count()
        for i in range(n):
            yield i, self.points[i], self.points[i + 1], i / n, (i + 1) / n

    def isdegenerate(self):
        return all(dist(self.points[i], self.points[i + 1]) < epsilon
                   for i in range(self.segment_count()))


## arcs
## ----

class Arc(CurvePrimitive):
    """Circular or elliptical arc ``C + U cos(theta) + V sin(theta)``.

    ``theta`` runs over ``sweep`` as the fraction runs from 0 to 1.  The
    arc is circular when ``U`` and ``V`` are perpendicular and of equal
    length, elliptical otherwise.
    """

    curvetype = 'arc'

    def __init__(self, center, vector0, vector90, sweep: AngleSweep = None):
        if not ispoint(center):
            raise ValueError('bad center passed to Arc(): {}'.format(center))
        if sweep is None:
            sweep = AngleSweep.full_circle()
        if not isinstance(sweep, AngleSweep):
            raise ValueError('bad sweep passed to Arc(): {}'.format(sweep))
        self.center = point(center)
        self.vector0 = _freevector(vector0)
        self.vector90 = _freevector(vector90)
        self.sweep = sweep

    @classmethod
    def circular(cls, center, radius, start=0, end=360, normal=None, samplereverse=False):
        """Build an arc the way yapCAD's ``arc()`` does: angles in
        degrees, counter-clockwise about ``normal`` (``+z`` by default),
        ``start=0, end=360`` for a full circle.  ``samplereverse`` runs
        the fraction from the end angle back to the start angle.
        """

        if not isgoodnum(radius):
            raise ValueError('bad radius passed to Arc.circular(): {}'.format(radius))
        if radius < 0:
            raise ValueError('negative radius not allowed for arc')
        if normal is None:
            n = [0.0, 0.0, 1.0, 1.0]
        else:
            n = unit(normal)
            if not n:
                raise ValueError('bad (zero-length) plane vector for arc')

        ## in-plane axes; for n = +z these are the x and y axes
        if abs(n[2]) > 0.9:
            u = unit(cross([0, 1, 0, 1], n))
        else:
            u = unit(cross([0, 0, 1, 1], n))
        v = cross(n, u)

        if start == 0 and end == 360:
            s, e = 0.0, 360.0
        else:
            s = start % 360.0
            e = end % 360.0
            if e < s:
                e += 360.0
        sweep = AngleSweep.from_degrees(s, e)
        if samplereverse:
            sweep = sweep.reversed()
        return cls(center, scale3(u, radius), scale3(v, radius), sweep)

    def __repr__(self):
        return 'Arc({}, {}, {}, {})'.format(vstr(self.center), self.vector0[:3],
                                            self.vector90[:3], self.sweep)

    def dispatch(self, handler):
        return handler.handle_arc(self)

    def radians_to_point(self, theta: float) -> list:
        c = cos(theta)
        s = sin(theta)
        return add(self.center, add(scale3(self.vector0, c), scale3(self.vector90, s)))

    def fraction_to_point(self, fraction):
        return self.radians_to_point(self.sweep.fraction_to_radians(fraction))

    def fraction_to_point_and_derivative(self, fraction):
        theta = self.sweep.fraction_to_radians(fraction)
        c = cos(theta)
        s = sin(theta)
        d = scale3(add(scale3(self.vector0, -s), scale3(self.vector90, c)), self.sweep.sweep)
        return self.radians_to_point(theta), [d[0], d[1], d[2], 0.0]

    def normal(self):
        """Unit normal of the arc plane, or ``False`` for a flat arc."""

        return unit(cross(self.vector0, self.vector90))

    def isdegenerate(self):
        return mag(cross(self.vector0, self.vector90)) < epsilon * epsilon \
            or self.sweep.isempty()

    def isfullcircle(self) -> bool:
        return self.sweep.isfullcircle()

    def plane_intersection_radians(self, origin, normal) -> List[float]:
        """Angles at which the full ellipse of the arc crosses the plane
        through ``origin`` with normal ``normal``."""

        alpha = (self.center[0] - origin[0]) * normal[0] \
            + (self.center[1] - origin[1]) * normal[1] \
            + (self.center[2] - origin[2]) * normal[2]
        beta = self.vector0[0] * normal[0] + self.vector0[1] * normal[1] + self.vector0[2] * normal[2]
        gamma = self.vector90[0] * normal[0] + self.vector90[1] * normal[1] + self.vector90[2] * normal[2]
        return [theta for _, _, theta in implicit_line_unit_circle(alpha, beta, gamma)]


## collections
## -----------

class CurveCollection:
    """Ordered collection of primitives and nested collections."""

    curvetype = 'collection'

    def __init__(self, children=()):
        self.children = []
        for child in children:
            self.add(child)

    def add(self, child) -> None:
        if not isinstance(child, (CurvePrimitive, CurveCollection)):
            raise ValueError('bad child passed to {}: {}'.format(type(self).__name__, child))
        self.children.append(child)

    def __len__(self):
        return len(self.children)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.children)

    def dispatch(self, handler):
        return handler.handle_curve_collection(self)

    def collect_primitives(self) -> List[CurvePrimitive]:
        """Leaf primitives in depth-first traversal order."""

        leaves = []
        for child in self.children:
            if isinstance(child, CurveCollection):
                leaves.extend(child.collect_primitives())
            else:
                leaves.append(child)
        return leaves


class Path(CurveCollection):
    """Open chain of curves, head to tail."""


class Loop(CurveCollection):
    """Closed chain of curves."""


__all__ = [
    'CurveHandler',
    'CurvePrimitive',
    'LineSegment',
    'LineString',
    'Arc',
    'CurveCollection',
    'Path',
    'Loop',
]
