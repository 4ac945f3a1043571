import pytest
from math import sqrt
from yapcurve.geom import *
from yapcurve.curves import Arc, LineSegment, LineString, Path
from yapcurve.bspline import BSplineCurve, BSplineCurveH
from yapcurve.figures import isnurbs, tocurve
from yapcurve.curvecurve import intersectXY
## unit tests for conversion of yapCAD figure lists

class TestToCurve:
    def test_line(self):
        c = tocurve([point(0,0),point(1,1)])
        assert isinstance(c,LineSegment)
        assert vclose(c.point1,point(1,1))

    def test_poly(self):
        c = tocurve([point(0,0),point(1,0),point(1,1),point(0,0)])
        assert isinstance(c,LineString)
        assert c.segment_count() == 3

    def test_arc(self):
        c = tocurve([point(2.5,2.5),[2.5,90,270,-1]])
        assert isinstance(c,Arc)
        assert vclose(c.start_point(),point(2.5,5))
        r = tocurve([point(2.5,2.5),[2.5,90,270,-2]])
        assert vclose(r.start_point(),point(2.5,0))
        n = tocurve([point(0,0),[1,0,360,-1],point(0,1,0)])
        assert vclose(n.normal(),point(0,1,0))

    def test_nurbs(self):
        poles = [point(0,0),point(1,2),point(2,0)]
        fig = ['nurbs',poles,{'degree':2}]
        assert isnurbs(fig)
        assert not isnurbs(['nurbs',poles])
        c = tocurve(fig)
        assert type(c) is BSplineCurve
        w = tocurve(['nurbs',[point(1,0),point(1,1),point(0,1)],
                     {'degree':2,'weights':[1.0,sqrt(2)/2,1.0]}])
        assert type(w) is BSplineCurveH
        assert close(mag(w.fraction_to_point(0.3)),1.0)
        flat = tocurve(['nurbs',poles,{'degree':2,'weights':[1.0,1.0,1.0],
                                       'knots':[0,0,0,1,1,1]}])
        assert type(flat) is BSplineCurve

    def test_geomlist(self):
        l = [point(0,0),point(1,1)]
        a = [point(0,0),[1,0,360,-1]]
        c = tocurve([l,[a,l]])
        assert isinstance(c,Path)
        leaves = c.collect_primitives()
        assert [type(x).__name__ for x in leaves] == ['LineSegment','Arc','LineSegment']

    def test_passthrough(self):
        s = LineSegment(point(0,0),point(1,1))
        assert tocurve(s) is s
        p = Path([s])
        assert tocurve(p) is p

    def test_bad(self):
        with pytest.raises(ValueError):
            tocurve('circle')
        with pytest.raises(ValueError):
            tocurve([point(0,0),'foo'])
        with pytest.raises(ValueError):
            tocurve([[point(0,0),point(1,1)],[1,2]])


class TestFigureIntersection:
    """the yapCAD line/arc intersection examples, through the engine"""

    def test_line_arc(self):
        l = [point(5,0),point(0,5)]
        a = [point(2.5,2.5),[2.5,90,270,-1]]
        r = intersectXY(l,False,a,False)
        print("line arc: {}".format(r.pairs))
        assert len(r) == 1
        assert vclose(r[0].detailA.point,point(0.7322330470336311,4.267766952966369))
        assert vclose(r[0].detailB.point,point(0.7322330470336311,4.267766952966369))

    def test_line_circle(self):
        l = [point(5,0),point(0,5)]
        c = [point(2.5,2.5),[2.5,0,360,-1]]
        r = intersectXY(l,False,c,False)
        assert len(r) == 2
        pts = sorted(p.detailA.point[0] for p in r)
        assert close(pts[0],0.7322330470336311)
        assert close(pts[1],4.267766952966369)

    def test_poly_circle(self):
        sq = [point(-1,-1),point(1,-1),point(1,1),point(-1,1),point(-1,-1)]
        c = [point(1,1),[1,0,360,-1]]
        r = intersectXY(sq,False,c,False)
        assert len(r) == 2
        for p in r:
            assert close(dist(p.detailA.point,point(1,1)),1.0)
