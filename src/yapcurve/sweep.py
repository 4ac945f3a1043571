"""Angular sweeps for arcs.

An :class:`AngleSweep` is the periodic parameter domain of an arc: a
start angle and an end angle in radians.  A positive sweep runs
counter-clockwise, a negative sweep clockwise.  Fractions map linearly
onto the sweep, so fraction 0 is the start angle and fraction 1 the end
angle; fractions outside ``[0, 1]`` continue around the full circle.
"""

from __future__ import annotations

from math import radians

from yapcurve.geom import angle02Pi, anglePiPi, isalmostequalradians, pi2, radiantol


class AngleSweep:
    """Start and end angle (radians) of an arc."""

    __slots__ = ('start', 'end')

    def __init__(self, start: float = 0.0, end: float = pi2):
        self.start = float(start)
        self.end = float(end)

    @classmethod
    def from_degrees(cls, start: float, end: float) -> 'AngleSweep':
        return cls(radians(start), radians(end))

    @classmethod
    def full_circle(cls) -> 'AngleSweep':
        return cls(0.0, pi2)

    def __repr__(self):
        return 'AngleSweep({}, {})'.format(self.start, self.end)

    @property
    def sweep(self) -> float:
        return self.end - self.start

    def isfullcircle(self) -> bool:
        return abs(abs(self.sweep) - pi2) <= radiantol

    def isempty(self) -> bool:
        return abs(self.sweep) <= radiantol

    def fraction_period(self) -> float:
        """Fraction change for one full turn around the circle."""

        return pi2 / abs(self.sweep)

    def fraction_to_radians(self, fraction: float) -> float:
        return self.start + fraction * self.sweep

    def radians_to_signed_periodic_fraction(self, r: float) -> float:
        """Fraction of angle ``r``, taking the periodic branch nearest the
        middle of the sweep.  The result lies in ``[0, 1]`` when ``r`` is
        inside the sweep and outside it otherwise.
        """

        if isalmostequalradians(r, self.start):
            return 0.0
        if isalmostequalradians(r, self.end):
            return 1.0
        sweep = self.sweep
        delta = anglePiPi(r - self.start - 0.5 * sweep)
        return 0.5 + delta / sweep

    def radians_to_positive_periodic_fraction(self, r: float) -> float:
        """Fraction of angle ``r`` measured forward from the start, in
        ``[0, 2*pi/|sweep|)``."""

        if isalmostequalradians(r, self.start):
            return 0.0
        if isalmostequalradians(r, self.end):
            return 1.0
        sweep = self.sweep
        delta = r - self.start
        if sweep > 0.0:
            return angle02Pi(delta) / sweep
        return angle02Pi(-delta) / -sweep

    def is_radians_in_sweep(self, r: float) -> bool:
        if (r - self.start) * (r - self.end) <= 0.0:
            return True
        if self.isfullcircle():
            return True
        return self.radians_to_positive_periodic_fraction(r) <= 1.0

    def reversed(self) -> 'AngleSweep':
        return AngleSweep(self.end, self.start)


__all__ = ['AngleSweep']
