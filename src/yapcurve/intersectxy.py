"""Planar curve-curve intersection.

:class:`CurveCurveIntersectXY` finds the points where two curves cross
when viewed along the z axis, optionally after a world-to-local
transformation.  All of the solvers work on projective ``[x, y, w]``
triples, so the same code handles plain XY, affine frames and
perspective projections; fractions are always reported in each curve's
own parameter space.

Supported pairs are every combination of segments, line strings, arcs
and B-splines except B-spline x B-spline, which contributes nothing.
"""

from __future__ import annotations

from math import atan2, hypot, isfinite

import numpy as np
from loguru import logger

from yapcurve.engine import Fragment, IntersectionEngine, segment_fragments
from yapcurve.extend import accept_sweep_radians
from yapcurve.geom import (
    clamp,
    cross3,
    distxy,
    dot3,
    epsilon,
    fractiontol,
    interpolate,
    xyw,
)
from yapcurve.location import CurveCurveApproach, IntervalRole
from yapcurve.polynomial import (
    bernstein_eval,
    bernstein_product,
    bernstein_roots,
    implicit_line_unit_circle,
    line_fraction_h,
    line_line_fractions_h,
    unit_circle_ellipse_intersection,
)

## condition number above which a projected arc frame is treated as
## singular (an arc seen edge-on)
maxframecondition = 1.0e12

_LINEAR = ('segment', 'linestring')
_SPLINE = ('bspline', 'bsplineh')


def _lerp3(a, u, b):
    return [interpolate(a[0], u, b[0]), interpolate(a[1], u, b[1]), interpolate(a[2], u, b[2])]


def _xydistance_to_line(h, p):
    """Distance in the projected plane from ``[x, y, w]`` point ``p`` to
    the line with coefficients ``h``."""

    den = abs(p[2]) * hypot(h[0], h[1])
    if den == 0.0:
        return float('inf')
    return abs(dot3(h, p)) / den


class CurveCurveIntersectXY(IntersectionEngine):
    """XY intersection engine.

    ``transform`` is an optional world-to-local :class:`~yapcurve.xform.Matrix`
    applied to both curves before they are compared.
    """

    logtag = '[CCI-XY]'

    def __init__(self, extendA, geometryB, extendB, transform=None):
        super().__init__(extendA, geometryB, extendB)
        self._transform = transform

    ## projection
    ## ----------

    def _project_point(self, p):
        if self._transform is not None:
            p = self._transform.mul(list(p))
        return xyw(p)

    def _project_vector(self, v):
        v = [v[0], v[1], v[2], 0.0]
        if self._transform is not None:
            v = self._transform.mul(v)
        return xyw(v)

    def _arc_frame(self, arc):
        """3x3 matrix whose columns are the projected axes and center."""

        return np.column_stack([self._project_vector(arc.vector0),
                                self._project_vector(arc.vector90),
                                self._project_point(arc.center)]).astype(float)

    def _frame_inverse(self, frame):
        condition = np.linalg.cond(frame)
        if not isfinite(condition) or condition > maxframecondition:
            return None
        try:
            return np.linalg.inv(frame)
        except np.linalg.LinAlgError:
            return None

    ## dispatch
    ## --------

    def handle_line_segment(self, segment):
        self._handle_linear(segment)

    def handle_line_string(self, linestring):
        self._handle_linear(linestring)

    def _handle_linear(self, curveA):
        B = self._geometryB
        if self._degenerate(curveA) or self._degenerate(B):
            return
        for fa in segment_fragments(curveA, self._extendA):
            if B.curvetype in _LINEAR:
                for fb in segment_fragments(B, self._extendB):
                    self._segment_segment(fa, fb)
            elif B.curvetype == 'arc':
                self._segment_arc(fa, B, self._extendB, False)
            elif B.curvetype in _SPLINE:
                self._segment_bspline(fa, B, False)
            else:
                self._unsupported(curveA)
                return

    def handle_arc(self, arc):
        B = self._geometryB
        if self._degenerate(arc) or self._degenerate(B):
            return
        if B.curvetype in _LINEAR:
            for fb in segment_fragments(B, self._extendB):
                self._segment_arc(fb, arc, self._extendA, True)
        elif B.curvetype == 'arc':
            self._arc_arc(arc, self._extendA, B, self._extendB, False)
        elif B.curvetype in _SPLINE:
            self._arc_bspline(arc, self._extendA, B, False)
        else:
            self._unsupported(arc)

    def handle_bspline_curve(self, bspline):
        B = self._geometryB
        if self._degenerate(bspline) or self._degenerate(B):
            return
        if B.curvetype in _LINEAR:
            for fb in segment_fragments(B, self._extendB):
                self._segment_bspline(fb, bspline, True)
        elif B.curvetype == 'arc':
            self._arc_bspline(B, self._extendB, bspline, True)
        else:
            # TODO: bspline x bspline needs a subdivision or Newton solver
            self._unsupported(bspline)

    def handle_bspline_curve_h(self, bspline):
        self.handle_bspline_curve(bspline)

    ## solvers
    ## -------

    def _segment_segment(self, fa: Fragment, fb: Fragment):
        a0 = self._project_point(fa.point0)
        a1 = self._project_point(fa.point1)
        b0 = self._project_point(fb.point0)
        b1 = self._project_point(fb.point1)
        fractions = line_line_fractions_h(a0, a1, b0, b1)
        if fractions is None:
            self._coincident_segments(fa, fb, a0, a1, b0, b1)
            return
        ua, ub = fractions
        ra = self._fragment_fraction(fa, ua)
        rb = self._fragment_fraction(fb, ub)
        if ra is None or rb is None:
            return
        d = distxy(_lerp3(a0, ua, a1), _lerp3(b0, ub, b1))
        if d is False or d > epsilon:
            logger.debug(f"{self.logtag} segment solve disagrees by {d}")
            return
        self._record(fa.curve, ra[0], fb.curve, rb[0], False, ra[1], rb[1])

    def _coincident_segments(self, fa, fb, a0, a1, b0, b1):
        """Overlap of two collinear segments on their nominal domains."""

        hA = cross3(a0, a1)
        if _xydistance_to_line(hA, b0) > epsilon or _xydistance_to_line(hA, b1) > epsilon:
            return
        tb0 = line_fraction_h(a0, a1, b0)
        tb1 = line_fraction_h(a0, a1, b1)
        if tb0 is None or tb1 is None:
            return
        lo = max(0.0, min(tb0, tb1))
        hi = min(1.0, max(tb0, tb1))
        if hi < lo - fractiontol:
            return
        if hi - lo <= fractiontol:
            hits = [(lo, IntervalRole.ISOLATED, CurveCurveApproach.INTERSECTION)]
        else:
            hits = [(lo, IntervalRole.INTERVAL_START, CurveCurveApproach.COINCIDENT),
                    (hi, IntervalRole.INTERVAL_END, CurveCurveApproach.COINCIDENT)]
        for ua, role, approach in hits:
            ub = line_fraction_h(b0, b1, _lerp3(a0, ua, a1))
            if ub is None:
                continue
            ub = clamp(ub)
            self._record(fa.curve, interpolate(fa.fraction0, ua, fa.fraction1),
                         fb.curve, interpolate(fb.fraction0, ub, fb.fraction1),
                         False, role, role, approach)

    def _segment_arc(self, fragment: Fragment, arc, extendArc, reversed):
        a0 = self._project_point(fragment.point0)
        a1 = self._project_point(fragment.point1)
        h = cross3(a0, a1)
        if hypot(h[0], h[1]) == 0.0:
            return
        c = self._project_point(arc.center)
        u = self._project_vector(arc.vector0)
        v = self._project_vector(arc.vector90)
        for cosine, sine, theta in implicit_line_unit_circle(dot3(h, c), dot3(h, u), dot3(h, v)):
            fractionArc = accept_sweep_radians(extendArc, theta, arc.sweep)
            if fractionArc is None:
                continue
            x = [c[k] + u[k] * cosine + v[k] * sine for k in range(3)]
            local = line_fraction_h(a0, a1, x)
            if local is None:
                continue
            r = self._fragment_fraction(fragment, local)
            if r is None:
                continue
            self._record(fragment.curve, r[0], arc, fractionArc, reversed, r[1])

    def _arc_arc(self, arcA, extendA, arcB, extendB, reversed):
        frameA = self._arc_frame(arcA)
        frameB = self._arc_frame(arcB)
        ## the better conditioned frame becomes the unit circle
        if np.linalg.cond(frameB) < np.linalg.cond(frameA):
            arcA, arcB = arcB, arcA
            extendA, extendB = extendB, extendA
            frameA, frameB = frameB, frameA
            reversed = not reversed
        inverse = self._frame_inverse(frameA)
        if inverse is None:
            logger.debug(f"{self.logtag} singular arc frame")
            return
        local = inverse @ frameB
        ux, uy, uw = local[:, 0]
        vx, vy, vw = local[:, 1]
        cx, cy, cw = local[:, 2]
        for thetaB, thetaA in unit_circle_ellipse_intersection(cx, cy, cw, ux, uy, uw, vx, vy, vw):
            fractionA = accept_sweep_radians(extendA, thetaA, arcA.sweep)
            fractionB = accept_sweep_radians(extendB, thetaB, arcB.sweep)
            if fractionA is None or fractionB is None:
                continue
            self._record(arcA, fractionA, arcB, fractionB, reversed)

    def _segment_bspline(self, fragment: Fragment, bspline, reversed):
        a0 = self._project_point(fragment.point0)
        a1 = self._project_point(fragment.point1)
        h = cross3(a0, a1)
        if hypot(h[0], h[1]) == 0.0:
            return
        spans = bspline.spans()
        for k, span in enumerate(spans):
            poles = [self._project_point(p) for p in span.poles]
            altitudes = [dot3(h, p) for p in poles]
            for t in bernstein_roots(altitudes):
                if k < len(spans) - 1 and t >= 1.0 - fractiontol:
                    continue
                x = [bernstein_eval([p[i] for p in poles], t) for i in range(3)]
                local = line_fraction_h(a0, a1, x)
                if local is None:
                    continue
                r = self._fragment_fraction(fragment, local)
                if r is None:
                    continue
                self._record(fragment.curve, r[0], bspline, bspline.span_fraction(span, t),
                             reversed, r[1])

    def _arc_bspline(self, arc, extendArc, bspline, reversed):
        inverse = self._frame_inverse(self._arc_frame(arc))
        if inverse is None:
            logger.debug(f"{self.logtag} singular arc frame")
            return
        spans = bspline.spans()
        for k, span in enumerate(spans):
            local = [inverse @ np.array(self._project_point(p), dtype=float) for p in span.poles]
            xs = [float(p[0]) for p in local]
            ys = [float(p[1]) for p in local]
            ws = [float(p[2]) for p in local]
            xx = bernstein_product(xs, xs)
            yy = bernstein_product(ys, ys)
            ww = bernstein_product(ws, ws)
            onCircle = [a + b - c for a, b, c in zip(xx, yy, ww)]
            for t in bernstein_roots(onCircle):
                if k < len(spans) - 1 and t >= 1.0 - fractiontol:
                    continue
                x = bernstein_eval(xs, t)
                y = bernstein_eval(ys, t)
                if bernstein_eval(ws, t) < 0.0:
                    x, y = -x, -y
                fractionArc = accept_sweep_radians(extendArc, atan2(y, x), arc.sweep)
                if fractionArc is None:
                    continue
                self._record(arc, fractionArc, bspline, bspline.span_fraction(span, t), reversed)


__all__ = ['CurveCurveIntersectXY']
