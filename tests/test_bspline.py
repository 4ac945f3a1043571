import pytest
from math import sqrt
from yapcurve.geom import *
from yapcurve.bspline import *
## unit tests for yapcurve bspline.py

class TestBSpline:
    """polynomial B-splines and their Bezier spans"""

    def test_quadratic(self):
        b = BSplineCurve([point(0,0),point(1,2),point(2,0)],2)
        assert b.curvetype == 'bspline'
        assert b.knots == [0.0,0.0,0.0,1.0,1.0,1.0]
        assert b.domain() == (0.0,1.0)
        assert len(b.spans()) == 1
        span = b.spans()[0]
        assert span.order == 3
        print("span poles: {}".format(span.poles))
        for p, q in zip(span.poles,[[0,0,0,1],[1,2,0,1],[2,0,0,1]]):
            assert vclose(p,q) and close(p[3],q[3])
        assert vclose(b.fraction_to_point(0.0),point(0,0))
        assert vclose(b.fraction_to_point(0.5),point(1,1))
        assert vclose(b.fraction_to_point(1.0),point(2,0))
        p, d = b.fraction_to_point_and_derivative(0.5)
        assert vclose(d,point(2,0))
        p, d = b.fraction_to_point_and_derivative(0.0)
        assert vclose(d,point(2,4))

    def test_spans(self):
        ## cubic with one interior knot at 0.5
        poles = [point(0,0),point(1,1),point(2,-1),point(3,1),point(4,0)]
        b = BSplineCurve(poles,3)
        assert b.knots == [0.0,0.0,0.0,0.0,0.5,1.0,1.0,1.0,1.0]
        spans = b.spans()
        assert len(spans) == 2
        assert spans[0].knot0 == 0.0 and spans[0].knot1 == 0.5
        assert spans[1].knot0 == 0.5 and spans[1].knot1 == 1.0
        ## spans are continuous at the shared knot
        assert vclose(spans[0].poles[-1],spans[1].poles[0])
        assert close(b.span_fraction(spans[1],0.5),0.75)
        assert vclose(b.fraction_to_point(0.0),point(0,0))
        assert vclose(b.fraction_to_point(1.0),point(4,0))

    def test_explicit_knots(self):
        b = BSplineCurve([point(0,0),point(1,1),point(2,0)],1,[0,0,1,2,2])
        assert b.domain() == (0.0,2.0)
        assert len(b.spans()) == 2
        assert vclose(b.fraction_to_point(0.25),point(0.5,0.5))
        assert vclose(b.fraction_to_point(0.75),point(1.5,0.5))

    def test_bad(self):
        with pytest.raises(ValueError):
            BSplineCurve([point(0,0),point(1,1)],2)
        with pytest.raises(ValueError):
            BSplineCurve([point(0,0),point(1,1),point(2,0)],0)
        with pytest.raises(ValueError):
            BSplineCurve([point(0,0),point(1,1),point(2,0)],2,[0,0,1,1])
        with pytest.raises(ValueError):
            BSplineCurve([point(0,0),point(1,1),point(2,0)],2,[0,0,1,0,1,1])
        with pytest.raises(ValueError):
            BSplineCurve([point(0,0),[1,1],point(2,0)],2)

class TestRational:
    """homogeneous (rational) B-splines"""

    quarter = [point(1,0),point(1,1),point(0,1)]
    weights = [1.0,sqrt(2)/2,1.0]

    def test_circle(self):
        b = BSplineCurveH(self.quarter,self.weights,2)
        assert b.curvetype == 'bsplineh'
        for u in (0.0,0.1,0.25,0.5,0.8,1.0):
            p = b.fraction_to_point(u)
            assert close(mag(p),1.0)
        assert vclose(b.fraction_to_point(0.5),point(sqrt(2)/2,sqrt(2)/2))

    def test_derivative(self):
        b = BSplineCurveH(self.quarter,self.weights,2)
        p, d = b.fraction_to_point_and_derivative(0.5)
        ## tangent to the circle
        assert close(dot(p,d),0.0)
        h = 1.0e-6
        q0 = b.fraction_to_point(0.5-h)
        q1 = b.fraction_to_point(0.5+h)
        fd = scale3(sub(q1,q0),0.5/h)
        assert vclose(d,fd)

    def test_bad(self):
        with pytest.raises(ValueError):
            BSplineCurveH(self.quarter,[1.0,1.0],2)
        with pytest.raises(ValueError):
            BSplineCurveH(self.quarter,[1.0,-1.0,1.0],2)
        with pytest.raises(ValueError):
            BSplineCurveH(self.quarter,1.0,2)
