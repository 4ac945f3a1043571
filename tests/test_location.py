import pytest
from yapcurve.geom import point
from yapcurve.curves import LineSegment
from yapcurve.location import *
## unit tests for yapcurve location.py

a = LineSegment(point(0,0),point(2,0))
b = LineSegment(point(1,-1),point(1,1))

def makepair(fa=0.5, fb=0.5):
    return CurveLocationPair(CurveLocation(a,fa,a.fraction_to_point(fa)),
                             CurveLocation(b,fb,b.fraction_to_point(fb)))

class TestLocation:
    def test_flags(self):
        loc = CurveLocation(a,0.5,point(1,0))
        assert loc.role is IntervalRole.ISOLATED
        assert loc.isisolated
        assert not loc.isextrapolated
        assert CurveLocation(a,1.5,point(3,0)).isextrapolated
        assert CurveLocation(a,-0.5,point(-1,0)).isextrapolated
        assert CurveLocation(a,0.5,point(1,0),IntervalRole.ISOLATED_AT_VERTEX).isisolated
        assert not CurveLocation(a,0.5,point(1,0),IntervalRole.INTERVAL_START).isisolated
        print(repr(loc))
        assert 'LineSegment' in repr(loc)

    def test_pair(self):
        p = makepair(0.5,0.25)
        assert p.approach is CurveCurveApproach.INTERSECTION
        s = p.swapped()
        assert s.detailA is p.detailB and s.detailB is p.detailA
        assert s.detailA.curve is b

class TestResults:
    def test_sequence(self):
        r = IntersectionResults()
        assert not r
        assert len(r) == 0
        r.append(makepair(0.5,0.5))
        r.append(makepair(0.25,0.75))
        assert r
        assert len(r) == 2
        assert r[1].detailA.fraction == 0.25
        assert [p.detailB.fraction for p in r] == [0.5,0.75]
        other = IntersectionResults()
        other.extend(r)
        other.extend(r)
        assert len(other) == 4

    def test_arrays(self):
        r = IntersectionResults([makepair(0.5,0.5),makepair(0.25,0.75)])
        arrays = r.arrays()
        assert len(arrays.dataA) == len(arrays.dataB) == 2
        assert arrays.dataA[1] is r[1].detailA
        assert arrays.dataB[1] is r[1].detailB

    def test_swapped(self):
        r = IntersectionResults([makepair(0.5,0.25)])
        s = r.swapped()
        assert s[0].detailA.curve is b
        assert s[0].detailA.fraction == 0.25
        assert r[0].detailA.curve is a
