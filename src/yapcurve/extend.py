"""Extension policy for curve ends.

Intersection queries can treat either end of a curve as extendable, so
that intersections on the continuation of the curve beyond its nominal
``[0, 1]`` fraction domain are reported.  The caller describes this with
an *extension specification*, which is one of

* ``None`` or ``False``: no extension at either end,
* ``True``: on-curve extension at both ends,
* a :class:`CurveExtendMode`: the same mode at both ends,
* a two element tuple or list of the above, giving the mode for the
  start (index 0) and the end (index 1) separately.

Every solver in the intersection engine goes through the functions in
this module to decide what happens to a candidate whose fraction lies
outside ``[0, 1]``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from yapcurve.geom import clamp, fractiontol
from yapcurve.sweep import AngleSweep


class CurveExtendMode(Enum):
    """Behavior at one end of a curve."""

    NONE = 0
    ON_TANGENT = 1
    ON_CURVE = 2


def resolve_mode(extend, endindex: int) -> CurveExtendMode:
    """Return the mode that ``extend`` specifies for end ``endindex``."""

    if endindex not in (0, 1):
        raise ValueError('bad end index: {}'.format(endindex))
    if extend is None or extend is False:
        return CurveExtendMode.NONE
    if extend is True:
        return CurveExtendMode.ON_CURVE
    if isinstance(extend, CurveExtendMode):
        return extend
    if isinstance(extend, (tuple, list)) and len(extend) == 2:
        value = extend[endindex]
        if isinstance(value, (tuple, list)):
            raise ValueError('nested extension specification: {}'.format(extend))
        return resolve_mode(value, endindex)
    raise ValueError('bad extension specification: {}'.format(extend))


def extends(extend, endindex: int) -> bool:
    return resolve_mode(extend, endindex) is not CurveExtendMode.NONE


def correct_fraction(extend, fraction: float) -> float:
    """Clamp ``fraction`` onto the nominal domain at any end that does not
    extend; fractions on an extendable side are returned unchanged."""

    if fraction < 0.0:
        if not extends(extend, 0):
            return 0.0
    elif fraction > 1.0:
        if not extends(extend, 1):
            return 1.0
    return fraction


def resolve_radians_to_sweep_fraction(extend, r: float, sweep: AngleSweep) -> float:
    """Convert angle ``r`` into a fraction of ``sweep``.

    Inside the sweep this is the plain fraction in ``[0, 1]``.  Outside
    the sweep the result depends on which ends extend: with both ends
    extending the signed periodic fraction is kept as is, with one end
    extending the fraction is shifted by one period toward that end, and
    with neither end extending it is clamped into ``[0, 1]``.
    """

    fraction = sweep.radians_to_signed_periodic_fraction(r)
    if sweep.is_radians_in_sweep(r):
        return clamp(fraction)
    extend0 = extends(extend, 0)
    extend1 = extends(extend, 1)
    if extend0 and extend1:
        return fraction
    if extend0:
        if fraction > 1.0:
            fraction -= sweep.fraction_period()
        return fraction
    if extend1:
        if fraction < 0.0:
            fraction += sweep.fraction_period()
        return fraction
    return clamp(fraction)


def accept_fraction(extend, fraction: float) -> Optional[float]:
    """Return ``fraction`` if the extension policy admits it, else ``None``.

    A fraction within ``fractiontol`` of 0 or 1 is snapped onto the end.
    A fraction beyond an end that does not extend is rejected, since the
    policy could only place it on the curve by clamping.
    """

    if abs(fraction) <= fractiontol:
        return 0.0
    if abs(fraction - 1.0) <= fractiontol:
        return 1.0
    if correct_fraction(extend, fraction) != fraction:
        return None
    return fraction


def accept_sweep_radians(extend, r: float, sweep: AngleSweep) -> Optional[float]:
    """Resolve angle ``r`` on ``sweep`` and return its fraction if the
    extension policy admits it, else ``None``."""

    fraction = resolve_radians_to_sweep_fraction(extend, r, sweep)
    if sweep.is_radians_in_sweep(r):
        return fraction
    if not (extends(extend, 0) or extends(extend, 1)):
        return None
    return accept_fraction(extend, fraction)


def fragment_extension(extend, index: int, count: int) -> tuple:
    """Per-end extension of fragment ``index`` of ``count`` pieces of a
    curve: only the first piece extends at its start and only the last
    piece extends at its end."""

    mode0 = resolve_mode(extend, 0) if index == 0 else CurveExtendMode.NONE
    mode1 = resolve_mode(extend, 1) if index == count - 1 else CurveExtendMode.NONE
    return (mode0, mode1)


__all__ = [
    'CurveExtendMode',
    'resolve_mode',
    'extends',
    'correct_fraction',
    'resolve_radians_to_sweep_fraction',
    'accept_fraction',
    'accept_sweep_radians',
    'fragment_extension',
]
