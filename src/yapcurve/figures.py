"""Conversion of yapCAD figure lists into curve primitives.

yapCAD represents geometry as plain lists: a line is two points, an arc
is ``[center, [radius, start, end, -1], <normal>]``, a polyline is three
or more points, a NURBS curve is ``['nurbs', poles, meta]`` and a
geometry list is a list of any of these.  :func:`tocurve` turns such a
figure into the matching primitive or collection so it can be passed to
the intersection engine.
"""

from __future__ import annotations

from yapcurve.bspline import BSplineCurve, BSplineCurveH
from yapcurve.curves import Arc, CurveCollection, CurvePrimitive, LineSegment, LineString, Path
from yapcurve.geom import isarc, isline, ispoly


def isnurbs(figure) -> bool:
    """Return ``True`` if *figure* is a yapCAD NURBS definition."""

    return isinstance(figure, list) and len(figure) == 3 and figure[0] == 'nurbs' \
        and isinstance(figure[2], dict)


def _nurbs2curve(figure):
    _, poles, meta = figure
    degree = int(meta['degree'])
    knots = meta.get('knots')
    weights = meta.get('weights')
    if weights is None or all(w == 1.0 for w in weights):
        return BSplineCurve(list(poles), degree, knots)
    return BSplineCurveH(list(poles), list(weights), degree, knots)


def _arc2curve(figure):
    center = figure[0]
    r, start, end, w = figure[1]
    normal = figure[2] if len(figure) == 3 else None
    return Arc.circular(center, r, start, end, normal=normal, samplereverse=(w == -2))


def tocurve(figure):
    """Convert a yapCAD figure into a primitive or :class:`Path`.

    Primitives and collections are returned unchanged.
    """

    if isinstance(figure, (CurvePrimitive, CurveCollection)):
        return figure
    if isline(figure):
        return LineSegment(figure[0], figure[1])
    if isarc(figure):
        return _arc2curve(figure)
    if ispoly(figure):
        return LineString(figure)
    if isnurbs(figure):
        return _nurbs2curve(figure)
    if isinstance(figure, list) and all(isinstance(f, list) for f in figure):
        return Path([tocurve(f) for f in figure])
    raise ValueError('bad figure passed to tocurve(): {}'.format(figure))


__all__ = ['isnurbs', 'tocurve']
