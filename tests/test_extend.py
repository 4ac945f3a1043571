import pytest
from math import radians
from yapcurve.geom import close
from yapcurve.sweep import AngleSweep
from yapcurve.extend import *
## unit tests for yapcurve extend.py

NONE = CurveExtendMode.NONE
TANGENT = CurveExtendMode.ON_TANGENT
CURVE = CurveExtendMode.ON_CURVE

class TestResolve:
    """extension specifications"""

    def test_modes(self):
        assert resolve_mode(None,0) is NONE
        assert resolve_mode(False,1) is NONE
        assert resolve_mode(True,0) is CURVE
        assert resolve_mode(TANGENT,1) is TANGENT
        assert resolve_mode((None,TANGENT),0) is NONE
        assert resolve_mode((None,TANGENT),1) is TANGENT
        assert resolve_mode([True,False],0) is CURVE
        assert extends((None,TANGENT),1)
        assert not extends((None,TANGENT),0)

    def test_bad(self):
        with pytest.raises(ValueError):
            resolve_mode('yes',0)
        with pytest.raises(ValueError):
            resolve_mode((None,None,None),0)
        with pytest.raises(ValueError):
            resolve_mode(((None,None),None),0)
        with pytest.raises(ValueError):
            resolve_mode(None,2)

class TestFractions:
    def test_correct(self):
        assert correct_fraction(None,-0.5) == 0.0
        assert correct_fraction(None,1.5) == 1.0
        assert correct_fraction(None,0.5) == 0.5
        assert correct_fraction((TANGENT,None),-0.5) == -0.5
        assert correct_fraction((TANGENT,None),1.5) == 1.0
        assert correct_fraction(True,1.5) == 1.5

    def test_accept(self):
        assert accept_fraction(None,0.5) == 0.5
        assert accept_fraction(None,1.0+1.0e-12) == 1.0
        assert accept_fraction(None,-1.0e-12) == 0.0
        assert accept_fraction(None,1.5) is None
        assert accept_fraction((None,TANGENT),1.5) == 1.5
        assert accept_fraction((None,TANGENT),-0.5) is None

    def test_fragments(self):
        assert fragment_extension(True,0,3) == (CURVE,NONE)
        assert fragment_extension(True,1,3) == (NONE,NONE)
        assert fragment_extension(True,2,3) == (NONE,CURVE)
        assert fragment_extension(True,0,1) == (CURVE,CURVE)
        assert fragment_extension(None,0,1) == (NONE,NONE)

class TestSweepFractions:
    """resolution of angles against a sweep of 90 degrees"""

    sweep = AngleSweep.from_degrees(0,90)

    def test_inside(self):
        for extend in (None,True,(TANGENT,None)):
            assert close(resolve_radians_to_sweep_fraction(extend,radians(45),self.sweep),0.5)
            assert close(accept_sweep_radians(extend,radians(45),self.sweep),0.5)

    def test_outside(self):
        r = radians(120)
        ## signed branch: 1 + 30/90
        assert close(resolve_radians_to_sweep_fraction(True,r,self.sweep),1.0+1.0/3.0)
        ## only the start extends: one period back
        assert close(resolve_radians_to_sweep_fraction((CURVE,None),r,self.sweep),1.0/3.0-4.0+1.0)
        assert close(resolve_radians_to_sweep_fraction((None,CURVE),r,self.sweep),1.0+1.0/3.0)
        assert resolve_radians_to_sweep_fraction(None,r,self.sweep) == 1.0
        assert accept_sweep_radians(None,r,self.sweep) is None
        assert close(accept_sweep_radians((None,CURVE),r,self.sweep),4.0/3.0)
        assert close(accept_sweep_radians((CURVE,None),r,self.sweep),-8.0/3.0)

    def test_wraparound(self):
        s = AngleSweep.from_degrees(350,370)
        assert close(accept_sweep_radians(None,radians(5),s),0.75)
