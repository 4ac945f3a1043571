import pytest
from yapcurve.xform import *
## unit tests for yapcurve xform.py

class TestXform:
    """unit tests for matrix operations"""

    def test_matrix(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        fooT = Matrix(foo,True)
        bar = Matrix([[1,0,0,1],[0,1,0,1],[0,0,1,1],[0,0,0,1]])
        baz = geom.vect(1,2,3)
        I = Matrix()
        assert(I.mul(bar).m == bar.m)
        assert(I.mul(foo).m == foo.m)
        assert(I.mul(fooT).m == fooT.mul(I).m)
        assert(foo.mul(bar).m == [[1,2,3,10],[5,6,7,26],[9,10,11,42],[13,14,15,58]])
        assert(foo.mul(baz) == [18, 46, 74, 102])
        assert(I.mul(baz) == baz)
        w = foo.mul(baz)
        assert geom.vclose(geom.scale4(w,1.0/w[3]),
                           [18.0/102.0, 46.0/102.0, 74.0/102.0, 1.0])
        with pytest.raises(ValueError):
            Matrix([1,2,3])

    def test_predicates(self):
        assert Matrix().isidentity()
        assert not Translation([1,0,0]).isidentity()
        assert Translation([1,2,3]).isaffine()
        assert Rotation([0,0,1],30).isaffine()
        assert not Perspective(10.0).isaffine()
        assert Matrix().tolist() == [[1,0,0,0],[0,1,0,0],[0,0,1,0],[0,0,0,1]]

    def test_inverse(self):
        T = Translation([1,2,3])
        assert T.inverse().mul(T).isidentity()
        R = Rotation([1,1,0],37)
        assert R.mul(R.inverse()).isidentity()
        with pytest.raises(ValueError):
            Scale(1,1,0).inverse()

    def test_transforms(self):
        p = geom.point(1,0,0)
        print("rotated: {}".format(geom.vstr(Rotation([0,0,1],90).mul(p))))
        assert geom.vclose(Rotation([0,0,1],90).mul(p),geom.point(0,1,0))
        assert geom.vclose(Translation([1,2,3]).mul(p),geom.point(2,2,3))
        assert geom.vclose(Translation([1,2,3],inverse=True).mul(p),geom.point(0,-2,-3))
        assert geom.vclose(Scale(2).mul(p),geom.point(2,0,0))
        ## a free vector is not translated
        assert Translation([1,2,3]).mul([1,0,0,0]) == [1,0,0,0]

    def test_perspective(self):
        P = Perspective(10.0)
        assert geom.vclose(P.mul(geom.point(1,1,0)),geom.point(1,1,0))
        q = P.mul(geom.point(1,1,5))
        assert geom.close(q[3],0.5)
        assert geom.vclose(geom.scale4(q,1.0/q[3]),geom.point(2,2,10))
        with pytest.raises(ValueError):
            Perspective(0)
