"""Spatial curve-curve intersection.

:class:`CurveCurveIntersectXYZ` finds true 3D intersections of segments,
line strings and arcs.  A candidate is only recorded if the points on
the two curves coincide within ``epsilon``.  B-splines are not
supported here and contribute nothing.
"""

from __future__ import annotations

from math import isfinite

import numpy as np
from loguru import logger

from yapcurve.engine import Fragment, IntersectionEngine, segment_fragments
from yapcurve.extend import accept_sweep_radians
from yapcurve.geom import add, cross, dist, dot, epsilon, mag, scale3, sub, unit
from yapcurve.polynomial import (
    closest_approach_3d,
    point_line_fraction,
    unit_circle_ellipse_intersection,
)

## above this |cos| between a line and the arc normal, the plane used to
## cut the arc is built from the arc's vector0 instead of its normal
preferredcosine = 0.9

## |nA x nB| below which two arc planes are parallel
parallelsine = 1.0e-10

_LINEAR = ('segment', 'linestring')


def _lerp(a, u, b):
    return add(a, scale3(sub(b, a), u))


class CurveCurveIntersectXYZ(IntersectionEngine):
    logtag = '[CCI-XYZ]'

    def _accept_pair(self, pair):
        return dist(pair.detailA.point, pair.detailB.point) <= epsilon

    def handle_line_segment(self, segment):
        self._handle_linear(segment)

    def handle_line_string(self, linestring):
        self._handle_linear(linestring)

    def _handle_linear(self, curveA):
        B = self._geometryB
        if B.curvetype not in _LINEAR and B.curvetype != 'arc':
            self._unsupported(curveA)
            return
        if self._degenerate(curveA) or self._degenerate(B):
            return
        for fa in segment_fragments(curveA, self._extendA):
            if B.curvetype == 'arc':
                self._segment_arc(fa, B, self._extendB, False)
            else:
                for fb in segment_fragments(B, self._extendB):
                    self._segment_segment(fa, fb)

    def handle_arc(self, arc):
        B = self._geometryB
        if B.curvetype not in _LINEAR and B.curvetype != 'arc':
            self._unsupported(arc)
            return
        if self._degenerate(arc) or self._degenerate(B):
            return
        if B.curvetype == 'arc':
            self._arc_arc(arc, self._extendA, B, self._extendB, False)
        else:
            for fb in segment_fragments(B, self._extendB):
                self._segment_arc(fb, arc, self._extendA, True)

    def handle_bspline_curve(self, bspline):
        self._unsupported(bspline)

    def handle_bspline_curve_h(self, bspline):
        self._unsupported(bspline)

    ## solvers
    ## -------

    def _segment_segment(self, fa: Fragment, fb: Fragment):
        fractions = closest_approach_3d(fa.point0, fa.point1, fb.point0, fb.point1)
        if fractions is None:
            return
        ua, ub = fractions
        if dist(_lerp(fa.point0, ua, fa.point1), _lerp(fb.point0, ub, fb.point1)) > epsilon:
            return
        ra = self._fragment_fraction(fa, ua)
        rb = self._fragment_fraction(fb, ub)
        if ra is None or rb is None:
            return
        self._record(fa.curve, ra[0], fb.curve, rb[0], False, ra[1], rb[1])

    def _line_arc_candidates(self, origin, direction, arc):
        """``(radians, point)`` where the full ellipse of ``arc`` meets a
        plane through the line ``origin + t*direction``.

        The plane contains the line and the arc normal, or the arc's
        vector0 when the line is too close to the normal.
        """

        normal = arc.normal()
        d = unit(direction)
        if not normal or not d:
            return []
        preferred = normal
        if abs(dot(d, normal)) > preferredcosine:
            preferred = unit(arc.vector0)
        cut = unit(cross(d, preferred))
        if not cut:
            return []
        return [(theta, arc.radians_to_point(theta))
                for theta in arc.plane_intersection_radians(origin, cut)]

    def _segment_arc(self, fragment: Fragment, arc, extendArc, reversed):
        p0 = fragment.point0
        p1 = fragment.point1
        for theta, x in self._line_arc_candidates(p0, sub(p1, p0), arc):
            local = point_line_fraction(p0, p1, x)
            if local is None or dist(x, _lerp(p0, local, p1)) > epsilon:
                continue
            fractionArc = accept_sweep_radians(extendArc, theta, arc.sweep)
            if fractionArc is None:
                continue
            r = self._fragment_fraction(fragment, local)
            if r is None:
                continue
            self._record(fragment.curve, r[0], arc, fractionArc, reversed, r[1])

    def _arc_arc(self, arcA, extendA, arcB, extendB, reversed):
        normalA = arcA.normal()
        normalB = arcB.normal()
        if not normalA or not normalB:
            return
        direction = cross(normalA, normalB)
        if mag(direction) <= parallelsine:
            if abs(dot(sub(arcB.center, arcA.center), normalA)) > epsilon:
                logger.debug(f"{self.logtag} arcs on parallel planes")
                return
            self._coplanar_arc_arc(arcA, extendA, arcB, extendB, reversed)
            return

        ## line of intersection of the two planes
        hA = dot(normalA, arcA.center)
        hB = dot(normalB, arcB.center)
        dd = dot(direction, direction)
        origin = scale3(add(scale3(cross(normalB, direction), hA),
                            scale3(cross(direction, normalA), hB)), 1.0 / dd)
        candidatesB = self._line_arc_candidates(origin, direction, arcB)
        for thetaA, xA in self._line_arc_candidates(origin, direction, arcA):
            fractionA = accept_sweep_radians(extendA, thetaA, arcA.sweep)
            if fractionA is None:
                continue
            for thetaB, xB in candidatesB:
                if dist(xA, xB) > epsilon:
                    continue
                fractionB = accept_sweep_radians(extendB, thetaB, arcB.sweep)
                if fractionB is None:
                    continue
                self._record(arcA, fractionA, arcB, fractionB, reversed)

    def _coplanar_arc_arc(self, arcA, extendA, arcB, extendB, reversed):
        def frame(arc):
            n = arc.normal()
            return np.column_stack([arc.vector0[:3], arc.vector90[:3], n[:3]]).astype(float)

        frameA = frame(arcA)
        frameB = frame(arcB)
        if np.linalg.cond(frameB) < np.linalg.cond(frameA):
            arcA, arcB = arcB, arcA
            extendA, extendB = extendB, extendA
            frameA = frameB
            reversed = not reversed
        condition = np.linalg.cond(frameA)
        if not isfinite(condition) or condition > 1.0e12:
            logger.debug(f"{self.logtag} singular arc frame")
            return
        inverse = np.linalg.inv(frameA)
        c = inverse @ np.array(sub(arcB.center, arcA.center)[:3], dtype=float)
        u = inverse @ np.array(arcB.vector0[:3], dtype=float)
        v = inverse @ np.array(arcB.vector90[:3], dtype=float)
        for thetaB, thetaA in unit_circle_ellipse_intersection(c[0], c[1], 1.0,
                                                               u[0], u[1], 0.0,
                                                               v[0], v[1], 0.0):
            fractionA = accept_sweep_radians(extendA, thetaA, arcA.sweep)
            fractionB = accept_sweep_radians(extendB, thetaB, arcB.sweep)
            if fractionA is None or fractionB is None:
                continue
            self._record(arcA, fractionA, arcB, fractionB, reversed)


__all__ = ['CurveCurveIntersectXYZ']
