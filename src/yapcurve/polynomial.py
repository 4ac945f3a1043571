"""Closed-form root finding and small linear systems used by the
intersection solvers.

The solvers reduce each curve pair to one of a few algebraic problems:

* a line ``alpha + beta*cos(t) + gamma*sin(t) = 0`` against the unit
  circle,
* the unit circle against a homogeneous ellipse, which is a quartic in
  the tangent half-angle,
* a polynomial in Bernstein form over a Bezier span,
* a 2x2 linear system for a pair of lines.

Roots are found with numpy; the line/unit-circle discriminant is
computed in extended precision with mpmath, the same way the yapCAD
line/arc intersection computes its quadratic.
"""

from __future__ import annotations

from math import atan, atan2, comb, cos, hypot, pi, sin
from typing import List, Optional, Sequence, Tuple

import mpmath as mpm
import numpy as np
from numpy.polynomial import polynomial as P

from yapcurve.geom import anglePiPi, conditionaldivide, cross3, dot, dot3, sub

## relative tolerance on the discriminant below which a line is taken
## to be tangent to the unit circle
tangenttol = 1.0e-12

## imaginary part (relative) below which a polynomial root is taken as
## real
imagtol = 1.0e-7


## line against the unit circle
## ----------------------------

def implicit_line_unit_circle(alpha: float, beta: float, gamma: float,
                              tol: float = tangenttol) -> List[Tuple[float, float, float]]:
    """Intersections of the line ``alpha + beta*c + gamma*s = 0`` with the
    unit circle ``c*c + s*s = 1``.

    Returns a list of ``(c, s, radians)`` triples: none, one (tangency)
    or two.
    """

    a = mpm.mpf(alpha)
    b = mpm.mpf(beta)
    g = mpm.mpf(gamma)
    delta2 = b * b + g * g
    if delta2 <= mpm.mpf(1.0e-28):
        return []
    lam = -a / delta2
    d2 = 1 - a * a / delta2
    c0 = lam * b
    s0 = lam * g
    if mpm.fabs(d2) <= tol:
        r = mpm.sqrt(c0 * c0 + s0 * s0)
        c = float(c0 / r)
        s = float(s0 / r)
        return [(c, s, atan2(s, c))]
    if d2 < 0:
        return []
    mu = mpm.sqrt(d2 / delta2)
    result = []
    for c, s in ((c0 - mu * g, s0 + mu * b), (c0 + mu * g, s0 - mu * b)):
        c = float(c)
        s = float(s)
        result.append((c, s, atan2(s, c)))
    return result


## unit circle against a homogeneous ellipse
## -----------------------------------------

def _ellipse_terms(cx, cy, cw, ux, uy, uw, vx, vy, vw):
    a = cx * cx + cy * cy - cw * cw
    acc = ux * ux + uy * uy - uw * uw
    ass = vx * vx + vy * vy - vw * vw
    acs = 2.0 * (ux * vx + uy * vy - uw * vw)
    ac = 2.0 * (ux * cx + uy * cy - uw * cw)
    asi = 2.0 * (vx * cx + vy * cy - vw * cw)
    return a, ac, asi, acc, acs, ass


def unit_circle_ellipse_intersection(cx, cy, cw, ux, uy, uw, vx, vy, vw) -> List[Tuple[float, float]]:
    """Intersections of the unit circle with the homogeneous ellipse
    ``X(t) = C + U cos(t) + V sin(t)`` over ``[x, y, w]``.

    Returns a list of ``(ellipseradians, circleradians)``.  A point of the
    ellipse is on the circle when ``x*x + y*y - w*w == 0``; substituting
    the tangent half-angle ``z = tan(t/2)`` gives a quartic in ``z``.  The
    angle ``t = pi`` has no finite ``z`` and is tested directly.
    Coincident conics give no isolated intersections.
    """

    a, ac, asi, acc, acs, ass = _ellipse_terms(cx, cy, cw, ux, uy, uw, vx, vy, vw)
    scale = max(abs(a), abs(ac), abs(asi), abs(acc), abs(acs), abs(ass))
    if scale == 0.0:
        return []

    def f(t):
        c = cos(t)
        s = sin(t)
        return a + ac * c + asi * s + acc * c * c + acs * c * s + ass * s * s

    def df(t):
        c = cos(t)
        s = sin(t)
        return -ac * s + asi * c - 2.0 * acc * c * s + acs * (c * c - s * s) + 2.0 * ass * s * c

    c4 = a - ac + acc
    c3 = 2.0 * asi - 2.0 * acs
    c2 = 2.0 * a - 2.0 * acc + 4.0 * ass
    c1 = 2.0 * asi + 2.0 * acs
    c0 = a + ac + acc
    if max(abs(c4), abs(c3), abs(c2), abs(c1), abs(c0)) <= 1.0e-14 * scale:
        return []

    angles = []
    if abs(c4) <= 1.0e-12 * scale:
        c4 = 0.0
        angles.append(pi)
    coffs = np.array([c0, c1, c2, c3, c4])
    coffs = P.polytrim(coffs, tol=1.0e-14 * scale)
    if len(coffs) > 1:
        for z in P.polyroots(coffs):
            if abs(z.imag) <= imagtol * (1.0 + abs(z.real)):
                angles.append(2.0 * atan(z.real))

    result = []
    for t in _merge_angles([_polish(f, df, t) for t in angles]):
        if abs(f(t)) > 1.0e-8 * scale:
            continue
        c = cos(t)
        s = sin(t)
        x = cx + ux * c + vx * s
        y = cy + uy * c + vy * s
        w = cw + uw * c + vw * s
        if w < 0.0:
            x, y = -x, -y
        result.append((t, atan2(y, x)))
    return result


def _polish(f, df, t, iterations=3):
    for _ in range(iterations):
        d = df(t)
        if d == 0.0:
            break
        step = f(t) / d
        if abs(step) > 0.1:
            break
        t -= step
    return anglePiPi(t)


def _merge_angles(angles, tol=1.0e-7):
    result = []
    for t in sorted(angles):
        if result and abs(anglePiPi(t - result[-1])) <= tol:
            continue
        result.append(t)
    if len(result) > 1 and abs(anglePiPi(result[0] - result[-1])) <= tol:
        result.pop()
    return result


## polynomials in Bernstein form
## -----------------------------

def bernstein_eval(coffs: Sequence[float], t: float) -> float:
    """de Casteljau evaluation of a Bernstein polynomial at ``t``."""

    b = list(coffs)
    n = len(b)
    for r in range(1, n):
        for i in range(n - r):
            b[i] = (1.0 - t) * b[i] + t * b[i + 1]
    return b[0]


def bernstein_product(a: Sequence[float], b: Sequence[float]) -> List[float]:
    """Bernstein coefficients of the product of two Bernstein polynomials."""

    m = len(a) - 1
    n = len(b) - 1
    result = [0.0] * (m + n + 1)
    for i in range(m + 1):
        for j in range(n + 1):
            result[i + j] += comb(m, i) * comb(n, j) * a[i] * b[j]
    for k in range(m + n + 1):
        result[k] /= comb(m + n, k)
    return result


def bernstein_to_power(coffs: Sequence[float]) -> np.ndarray:
    """Power basis coefficients, lowest order first."""

    n = len(coffs) - 1
    result = np.zeros(n + 1)
    for k, ck in enumerate(coffs):
        if ck == 0.0:
            continue
        term = P.polymul([0.0] * k + [1.0], P.polypow([1.0, -1.0], n - k))
        result[:len(term)] += comb(n, k) * ck * term
    return result


def bernstein_roots(coffs: Sequence[float], tol: float = 1.0e-9) -> List[float]:
    """Real roots in ``[0, 1]`` of a polynomial in Bernstein form, sorted.

    A polynomial that is identically zero has no isolated roots.
    """

    scale = max(abs(c) for c in coffs)
    if scale == 0.0:
        return []
    ## convex hull property: no sign change, no root.  Coefficients at
    ## noise level count as zero so roots at the span ends survive.
    small = 1.0e-12 * scale
    if all(c > small for c in coffs) or all(c < -small for c in coffs):
        return []
    power = P.polytrim(bernstein_to_power(coffs), tol=1.0e-14 * scale)
    if len(power) < 2:
        return []
    dpower = P.polyder(power)
    roots = []
    for z in P.polyroots(power):
        if abs(z.imag) > imagtol * (1.0 + abs(z.real)):
            continue
        t = z.real
        if t < -tol or t > 1.0 + tol:
            continue
        for _ in range(2):
            d = P.polyval(t, dpower)
            if d == 0.0:
                break
            t -= P.polyval(t, power) / d
        t = min(1.0, max(0.0, t))
        if abs(bernstein_eval(coffs, t)) > 1.0e-8 * scale:
            continue
        roots.append(t)
    roots.sort()
    merged = []
    for t in roots:
        if merged and t - merged[-1] <= tol:
            continue
        merged.append(t)
    return merged


## small linear systems
## --------------------

def solve2x2(a00, a01, a10, a11, b0, b1) -> Optional[Tuple[float, float]]:
    """Solve ``[[a00, a01], [a10, a11]] x = [b0, b1]``, or ``None`` if the
    system is singular."""

    det = a00 * a11 - a01 * a10
    x0 = conditionaldivide(b0 * a11 - a01 * b1, det)
    x1 = conditionaldivide(a00 * b1 - b0 * a10, det)
    if x0 is None or x1 is None:
        return None
    return x0, x1


def line_fraction_h(a0: Sequence[float], a1: Sequence[float], x: Sequence[float]) -> Optional[float]:
    """Fraction ``u`` at which ``(1-u)*a0 + u*a1`` is projectively closest
    to ``x``, all as ``[x, y, w]`` triples.  Exact when ``x`` is on the
    line."""

    p = cross3(a0, x)
    d = cross3([a1[0] - a0[0], a1[1] - a0[1], a1[2] - a0[2]], x)
    dd = dot3(d, d)
    if dd == 0.0:
        return None
    return -dot3(p, d) / dd


def line_line_fractions_h(a0, a1, b0, b1) -> Optional[Tuple[float, float]]:
    """Fractions on two projective lines (``[x, y, w]`` endpoints) at their
    crossing, or ``None`` for parallel or coincident lines."""

    hA = cross3(a0, a1)
    hB = cross3(b0, b1)
    pa0 = dot3(hB, a0)
    pa1 = dot3(hB, a1)
    pb0 = dot3(hA, b0)
    pb1 = dot3(hA, b1)
    fa = conditionaldivide(pa0, pa0 - pa1)
    fb = conditionaldivide(pb0, pb0 - pb1)
    if fa is None or fb is None:
        return None
    return fa, fb


def point_line_fraction(p0, p1, x) -> Optional[float]:
    """Fraction of the foot of the perpendicular from ``x`` onto the
    unbounded line through ``p0`` and ``p1``."""

    d = sub(p1, p0)
    return conditionaldivide(dot(sub(x, p0), d), dot(d, d))


def closest_approach_3d(a0, a1, b0, b1) -> Optional[Tuple[float, float]]:
    """Fractions of the closest approach of two unbounded 3D lines, or
    ``None`` for parallel lines."""

    u = sub(a1, a0)
    v = sub(b1, b0)
    w = sub(b0, a0)
    uu = dot(u, u)
    uv = dot(u, v)
    vv = dot(v, v)
    cu = dot(w, u)
    cv = dot(w, v)
    return solve2x2(uu, -uv, uv, -vv, cu, cv)


__all__ = [
    'implicit_line_unit_circle',
    'unit_circle_ellipse_intersection',
    'bernstein_eval',
    'bernstein_product',
    'bernstein_to_power',
    'bernstein_roots',
    'solve2x2',
    'line_fraction_h',
    'line_line_fractions_h',
    'point_line_fraction',
    'closest_approach_3d',
]
