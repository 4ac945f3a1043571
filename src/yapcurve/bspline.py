"""B-spline curve primitives.

Both flavors share the yapCAD NURBS conventions: a degree, a knot vector
of length ``len(poles) + degree + 1`` (clamped uniform by default) and
the fraction ``f`` mapping onto the knot value
``knots[degree] + f * (knots[-degree - 1] - knots[degree])``.

The intersection engine works span by span, so each curve converts
itself once, at construction, into a list of :class:`BezierSpan` objects
holding homogeneous poles ``[w*x, w*y, w*z, w]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import comb
from typing import List, Optional, Sequence, Tuple

import numpy as np

from yapcurve.curves import CurvePrimitive
from yapcurve.geom import isgoodnum, ispoint, point, vstr


@dataclass(frozen=True)
class BezierSpan:
    """One polynomial piece of a B-spline, over knots ``[knot0, knot1]``."""

    knot0: float
    knot1: float
    poles: List[list]

    @property
    def order(self) -> int:
        return len(self.poles)


def _clamped_knots(count: int, degree: int) -> List[float]:
    interior = count - degree - 1
    knots = [0.0] * (degree + 1)
    knots += [i / (interior + 1) for i in range(1, interior + 1)]
    knots += [1.0] * (degree + 1)
    return knots


def _nip(i: int, p: int, u: float, knots: Sequence[float]) -> float:
    if p == 0:
        if knots[i] <= u < knots[i + 1] or (u == knots[-1] and knots[i] < knots[i + 1] == knots[-1]):
            return 1.0
        return 0.0

    left = 0.0
    denom = knots[i + p] - knots[i]
    if denom != 0.0:
        left = (u - knots[i]) / denom * _nip(i, p - 1, u, knots)

    right = 0.0
    denom = knots[i + p + 1] - knots[i + 1]
    if denom != 0.0:
        right = (knots[i + p + 1] - u) / denom * _nip(i + 1, p - 1, u, knots)

    return left + right


def _homogeneous_point(hpoles: Sequence[list], knots: Sequence[float], degree: int, u: float) -> List[float]:
    result = [0.0, 0.0, 0.0, 0.0]
    for i, hp in enumerate(hpoles):
        basis = _nip(i, degree, u, knots)
        if basis == 0.0:
            continue
        for k in range(4):
            result[k] += basis * hp[k]
    return result


def _bezier_spans(hpoles: Sequence[list], knots: Sequence[float], degree: int) -> List[BezierSpan]:
    """Bezier form of every nonempty knot span in the active domain.

    Each span is sampled at ``degree + 1`` interior parameters and the
    Bernstein coefficients are recovered with a small linear solve, which
    is exact because the homogeneous curve is a polynomial on a span.
    """

    u0 = knots[degree]
    u1 = knots[len(hpoles)]
    taus = [(j + 0.5) / (degree + 1) for j in range(degree + 1)]
    basis = np.array([[comb(degree, k) * t ** k * (1.0 - t) ** (degree - k)
                       for k in range(degree + 1)] for t in taus])
    spans = []
    for j in range(degree, len(hpoles)):
        k0 = knots[j]
        k1 = knots[j + 1]
        if k1 <= k0 or k0 < u0 or k1 > u1:
            continue
        values = np.array([_homogeneous_point(hpoles, knots, degree, k0 + t * (k1 - k0))
                           for t in taus])
        poles = np.linalg.solve(basis, values)
        spans.append(BezierSpan(k0, k1, [[float(x) for x in row] for row in poles]))
    return spans


def _decasteljau(poles: Sequence[Sequence[float]], t: float) -> List[float]:
    b = [list(p) for p in poles]
    n = len(b)
    for r in range(1, n):
        for i in range(n - r):
            b[i] = [(1.0 - t) * x + t * y for x, y in zip(b[i], b[i + 1])]
    return b[0]


class BSplineCurve(CurvePrimitive):
    """Polynomial (non-rational) B-spline curve."""

    curvetype = 'bspline'

    def __init__(self, poles: Sequence[list], degree: int, knots: Optional[Sequence[float]] = None):
        self._setup(poles, [1.0] * len(poles) if isinstance(poles, (list, tuple)) else None,
                    degree, knots)

    def _setup(self, poles, weights, degree, knots):
        if not isinstance(poles, (list, tuple)) or weights is None:
            raise ValueError('bad poles passed to {}'.format(type(self).__name__))
        if isinstance(degree, bool) or not isinstance(degree, int) or degree < 1:
            raise ValueError('bad degree: {}'.format(degree))
        if len(poles) < degree + 1:
            raise ValueError('degree {} B-spline needs at least {} poles'.format(degree, degree + 1))
        for p in poles:
            if not ispoint(p):
                raise ValueError('bad pole: {}'.format(p))
        if len(weights) != len(poles):
            raise ValueError('weight count does not match pole count')
        for w in weights:
            if not isgoodnum(w) or w <= 0.0:
                raise ValueError('bad weight: {}'.format(w))
        if knots is None:
            knots = _clamped_knots(len(poles), degree)
        knots = [float(k) for k in knots]
        if len(knots) != len(poles) + degree + 1:
            raise ValueError('expected {} knots, got {}'.format(len(poles) + degree + 1, len(knots)))
        if any(knots[i + 1] < knots[i] for i in range(len(knots) - 1)):
            raise ValueError('knots must be nondecreasing')

        self.poles = [point(p) for p in poles]
        self.weights = [float(w) for w in weights]
        self.degree = degree
        self.knots = knots
        hpoles = [[p[0] * w, p[1] * w, p[2] * w, w] for p, w in zip(self.poles, self.weights)]
        self._spans = _bezier_spans(hpoles, knots, degree)

    def __repr__(self):
        return '{}({}, degree={})'.format(type(self).__name__, vstr(self.poles), self.degree)

    def dispatch(self, handler):
        return handler.handle_bspline_curve(self)

    def domain(self) -> Tuple[float, float]:
        return self.knots[self.degree], self.knots[len(self.poles)]

    def spans(self) -> List[BezierSpan]:
        return self._spans

    def span_fraction(self, span: BezierSpan, t: float) -> float:
        """Curve fraction of local parameter ``t`` on ``span``."""

        u0, u1 = self.domain()
        return (span.knot0 + t * (span.knot1 - span.knot0) - u0) / (u1 - u0)

    def isdegenerate(self):
        u0, u1 = self.domain()
        return u1 <= u0 or not self._spans

    def _span_at(self, fraction: float) -> Tuple[BezierSpan, float]:
        u0, u1 = self.domain()
        u = u0 + fraction * (u1 - u0)
        span = self._spans[-1]
        for s in self._spans:
            if u < s.knot1:
                span = s
                break
        return span, (u - span.knot0) / (span.knot1 - span.knot0)

    def fraction_to_point(self, fraction):
        if self.isdegenerate():
            return point(self.poles[0])
        span, t = self._span_at(fraction)
        h = _decasteljau(span.poles, t)
        return [h[0] / h[3], h[1] / h[3], h[2] / h[3], 1.0]

    def fraction_to_point_and_derivative(self, fraction):
        if self.isdegenerate():
            return point(self.poles[0]), [0.0, 0.0, 0.0, 0.0]
        span, t = self._span_at(fraction)
        h = _decasteljau(span.poles, t)
        n = span.order - 1
        hodograph = [[n * (b - a) for a, b in zip(span.poles[i], span.poles[i + 1])]
                     for i in range(n)]
        dh = _decasteljau(hodograph, t)
        u0, u1 = self.domain()
        dtdf = (u1 - u0) / (span.knot1 - span.knot0)
        w = h[3]
        d = [(dh[k] * w - h[k] * dh[3]) / (w * w) * dtdf for k in range(3)]
        return [h[0] / w, h[1] / w, h[2] / w, 1.0], d + [0.0]


class BSplineCurveH(BSplineCurve):
    """Rational B-spline: poles with positive weights."""

    curvetype = 'bsplineh'

    def __init__(self, poles: Sequence[list], weights: Sequence[float], degree: int,
                 knots: Optional[Sequence[float]] = None):
        if not isinstance(weights, (list, tuple)):
            raise ValueError('bad weights passed to BSplineCurveH')
        self._setup(poles, weights, degree, knots)

    def dispatch(self, handler):
        return handler.handle_bspline_curve_h(self)


__all__ = ['BezierSpan', 'BSplineCurve', 'BSplineCurveH']
