import pytest
from math import radians
from yapcurve.geom import close, pi, pi2
from yapcurve.sweep import AngleSweep
## unit tests for yapcurve sweep.py

class TestAngleSweep:
    """angular sweeps of arcs"""

    def test_create(self):
        s = AngleSweep.from_degrees(90,270)
        assert close(s.start,pi/2)
        assert close(s.end,3*pi/2)
        assert close(s.sweep,pi)
        assert AngleSweep.full_circle().isfullcircle()
        assert not s.isfullcircle()
        assert AngleSweep(1.0,1.0).isempty()
        assert close(s.fraction_period(),2.0)

    def test_fraction_to_radians(self):
        s = AngleSweep.from_degrees(90,270)
        assert close(s.fraction_to_radians(0.0),pi/2)
        assert close(s.fraction_to_radians(0.5),pi)
        assert close(s.fraction_to_radians(1.5),2*pi)
        r = s.reversed()
        assert close(r.fraction_to_radians(0.0),3*pi/2)
        assert close(r.sweep,-pi)

    def test_in_sweep(self):
        s = AngleSweep.from_degrees(350,370)
        assert s.is_radians_in_sweep(radians(5))
        assert s.is_radians_in_sweep(radians(-5))
        assert s.is_radians_in_sweep(radians(350))
        assert not s.is_radians_in_sweep(radians(20))
        assert not s.is_radians_in_sweep(radians(180))
        cw = AngleSweep.from_degrees(90,0)
        assert cw.is_radians_in_sweep(radians(45))
        assert cw.is_radians_in_sweep(radians(45)+pi2)
        assert not cw.is_radians_in_sweep(radians(-45))
        assert AngleSweep.full_circle().is_radians_in_sweep(-2.0)

    def test_signed_fraction(self):
        s = AngleSweep.from_degrees(350,370)
        print("fraction at 5 degrees: {}".format(s.radians_to_signed_periodic_fraction(radians(5))))
        assert close(s.radians_to_signed_periodic_fraction(radians(5)),0.75)
        assert s.radians_to_signed_periodic_fraction(radians(-10)) == 0.0
        assert s.radians_to_signed_periodic_fraction(radians(10)) == 1.0
        ## outside the sweep, the branch nearest the middle
        assert close(s.radians_to_signed_periodic_fraction(radians(20)),1.5)
        assert close(s.radians_to_signed_periodic_fraction(radians(340)),-0.5)

    def test_positive_fraction(self):
        s = AngleSweep.from_degrees(0,90)
        assert close(s.radians_to_positive_periodic_fraction(radians(45)),0.5)
        assert close(s.radians_to_positive_periodic_fraction(radians(-90)),3.0)
        cw = AngleSweep.from_degrees(90,0)
        assert close(cw.radians_to_positive_periodic_fraction(radians(45)),0.5)
        assert close(cw.radians_to_positive_periodic_fraction(radians(180)),3.0)
