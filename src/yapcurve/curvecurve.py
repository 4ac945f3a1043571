"""Public entry points for curve-curve intersection.

Each query takes two operands and an extension specification for each
(see :mod:`yapcurve.extend`).  An operand is a curve primitive, a
:class:`~yapcurve.curves.CurveCollection` or a yapCAD figure list, which
is converted with :func:`yapcurve.figures.tocurve`.

If geometry B is a collection, the engine is re-targeted at each of its
leaf primitives in traversal order and the results are concatenated.
Like the pieces of a line string, only the first leaf extends at its
start and only the last extends at its end.
Geometry A is dispatched as is, so a collection passed as A contributes
nothing.  For example, the diagonals of a 2 by 2 square meet at the
middle of each::

    a = LineSegment(point(0, 0), point(2, 2))
    b = LineSegment(point(0, 2), point(2, 0))
    pair = intersectXY(a, False, b, False)[0]
    # pair.detailA.fraction == pair.detailB.fraction == 0.5
"""

from __future__ import annotations

from loguru import logger

from yapcurve.curves import CurveCollection
from yapcurve.extend import fragment_extension, resolve_mode
from yapcurve.figures import tocurve
from yapcurve.intersectxy import CurveCurveIntersectXY
from yapcurve.intersectxyz import CurveCurveIntersectXYZ
from yapcurve.location import IntersectionResults, LocationArrays
from yapcurve.xform import Matrix

logtag = '[CURVECURVE]'


def _check_extend(extend) -> None:
    ## raises ValueError for a malformed specification
    resolve_mode(extend, 0)
    resolve_mode(extend, 1)


def _leaves(geometry) -> list:
    if isinstance(geometry, CurveCollection):
        return geometry.collect_primitives()
    return [geometry]


def _run(engine, geometryA, geometryB, extendB) -> IntersectionResults:
    leaves = _leaves(geometryB)
    if isinstance(geometryB, CurveCollection):
        logger.debug(f"{logtag} fanning out over {len(leaves)} leaves of geometry B")
    results = IntersectionResults()
    for k, leaf in enumerate(leaves):
        engine.reset_geometry(leaf, fragment_extension(extendB, k, len(leaves)))
        geometryA.dispatch(engine)
        results.extend(engine.grab_results())
    logger.debug(f"{logtag} {type(engine).__name__} found {len(results)} pairs")
    return results


def _prepare(geometryA, extendA, geometryB, extendB):
    _check_extend(extendA)
    _check_extend(extendB)
    return tocurve(geometryA), tocurve(geometryB)


def intersectXY(geometryA, extendA, geometryB, extendB) -> IntersectionResults:
    """Intersections of the two operands as seen along the z axis.

    Fractions refer to each curve's own parameterization; points are on
    the original (unprojected) curves, so the z values of the two
    locations in a pair may differ.
    """

    A, B = _prepare(geometryA, extendA, geometryB, extendB)
    return _run(CurveCurveIntersectXY(extendA, None, extendB), A, B, extendB)


def intersectProjectedXY(transform, geometryA, extendA, geometryB, extendB) -> IntersectionResults:
    """Intersections of the two operands after the world-to-local
    ``transform`` (a :class:`~yapcurve.xform.Matrix` or a 4x4 nested
    list) is applied, viewed along the local z axis.

    The transform may be affine or a perspective projection.  Reported
    fractions and points are on the untransformed curves.
    """

    if not isinstance(transform, Matrix):
        transform = Matrix(transform)
    A, B = _prepare(geometryA, extendA, geometryB, extendB)
    if transform.isidentity():
        transform = None
    elif not transform.isaffine():
        logger.debug(f"{logtag} perspective projection")
    return _run(CurveCurveIntersectXY(extendA, None, extendB, transform), A, B, extendB)


def intersectXYZ(geometryA, extendA, geometryB, extendB) -> IntersectionResults:
    """True spatial intersections of the two operands: each pair's
    points coincide within ``epsilon``."""

    A, B = _prepare(geometryA, extendA, geometryB, extendB)
    return _run(CurveCurveIntersectXYZ(extendA, None, extendB), A, B, extendB)


def intersectXYArrays(geometryA, extendA, geometryB, extendB) -> LocationArrays:
    """:func:`intersectXY` as two parallel lists of locations."""

    return intersectXY(geometryA, extendA, geometryB, extendB).arrays()


def intersectXYZArrays(geometryA, extendA, geometryB, extendB) -> LocationArrays:
    """:func:`intersectXYZ` as two parallel lists of locations."""

    return intersectXYZ(geometryA, extendA, geometryB, extendB).arrays()


__all__ = [
    'intersectXY',
    'intersectProjectedXY',
    'intersectXYZ',
    'intersectXYArrays',
    'intersectXYZArrays',
]
