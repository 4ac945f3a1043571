## foundational vector and scalar operations for yapcurve
## Born on 29 July, 2020
## Copyright (c) 2020 Richard DeVaul

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""foundational vector and scalar operations for **yapcurve**

====================
OVERVIEW
====================

The yapcurve.geom module provides the constants, scalar operations and
vector operations that the curve primitives and the intersection
engine are built on.  It follows the **yapCAD** representation of
geometry, so that figures built with yapCAD can be handed to the
intersection engine directly.

constants
=========

yapcurve.geom provides the "constants" ``epsilon`` and ``pi2`` (2*pi),
along with the parametric tolerances ``fractiontol`` and
``radiantol`` and the division guard ``largefraction``.  Redefine
these at your peril.

vectors
=======

vectors are defined as a list of four numbers, i.e. ``[x,y,z,w]``

When vectors are interpreted as three-dimensional coordinates the
"extra" w coordinate is a normalization factor, and ``[x,y,z,w]``
corresponds to the same 3D coordinate as ``[x/w,y/w,z/w,1]``.  Free
vectors, such as the axes of an arc, are given ``w=0`` when they are
pushed through a transformation matrix, so that translation does not
apply to them.

The intersection engine works in the projective plane, dropping the z
coordinate and keeping ``[x,y,w]`` triples.  The ``xyw()``,
``cross3()`` and ``dot3()`` functions operate on such triples.  A line
through two projective points ``a`` and ``b`` has the coefficients
``cross3(a,b)``, and a point ``p`` lies on it when
``dot3(cross3(a,b),p) == 0``.

figures
=======

Lines, arcs, polylines and geometry lists follow the yapCAD
conventions, *e.g.* ``[point(0,0),point(1,1)]`` is a line and
``[center,[radius,start,end,-1]]`` is an arc with angles in degrees.
The predicates ``isline()``, ``isarc()``, ``iscircle()`` and ``ispoly()``
recognize them.

"""

from math import *
import copy

## constants
epsilon=0.000005
pi2 = 2.0*pi

## parametric tolerances: fractions within fractiontol of 0 or 1 are
## snapped onto the end, and angles within radiantol of a sweep limit
## are treated as the limit
fractiontol = 1.0e-10
radiantol = 1.0e-10

## ratio limit for conditionaldivide()
largefraction = 1.0e12

## operations on scalars
## -----------------------

## utility function to determine if argument is a "real" python
## number, since booleans are considered ints (True=1 and False=0 for
## integer arithmetic) but 1 and 0 are not considered boolean

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

## utilty function to determine if scalars a and b are the same to
## within epsilon
def close(a,b):
    """ are two scalars the same within epsilon
    """
    return abs(a-b) < epsilon

def interpolate(a,u,b):
    """ linear interpolation, ``a`` at `u=0` and ``b`` at `u=1`"""
    return a + u*(b-a)

def clamp(x,lo=0.0,hi=1.0):
    """ clamp ``x`` into the interval `[lo, hi]`"""
    return max(lo,min(hi,x))

def conditionaldivide(num,den,limit=None):
    """Return ``num/den``, or ``None`` if the quotient would exceed
    ``limit`` (``largefraction`` by default) in magnitude.  Zero over
    zero is also ``None``.

    """
    if limit is None:
        limit = largefraction
    if abs(den)*limit <= abs(num) or den == 0.0:
        return None
    return num/den

## map an angle onto the interval [-pi, pi]
def anglePiPi(r):
    """ map angle ``r`` (radians) onto `[-pi, pi]`"""
    return r - pi2*floor((r+pi)/pi2)

## map an angle onto the interval [0, 2 pi)
def angle02Pi(r):
    """ map angle ``r`` (radians) onto `[0, 2 pi)`"""
    x = r % pi2
    if x >= pi2:
        x -= pi2
    return x

def isalmostequalradians(a,b,tol=None):
    """are two angles the same, allowing for a whole number of periods
    between them?

    """
    if tol is None:
        tol = radiantol
    return abs(anglePiPi(a-b)) <= tol


## operations on vectors
## ------------------------


def vect(a=False,b=False,c=False,d=False):
    """Convenience function for making a homogeneous coordinates 4 vector
from practically anything
    """
    r = [0,0,0,1]
    if isgoodnum(a):
        r[0]=a
        if isgoodnum(b):
            r[1]=b
            if isgoodnum(c):
                r[2]=c
                if isgoodnum(d):
                    r[3]=d
    elif isinstance(a,(tuple,list)):
        for i in range(min(4,len(a))):
            x=a[i]
            if isgoodnum(x):
                r[i]=x
    return r

## determine if two vectors are the same, to within epsilon
def vclose(a,b):
    return close(mag(sub(a,b)),0)

## check to see if argument is a proper vector for our purposes
def isvect(x):
    """
    check to see if argument is a proper vector for our purposes
    """
    return isinstance(x,list) and len(x) == 4 and isgoodnum(x[0]) and isgoodnum(x[1]) and isgoodnum(x[2]) and isgoodnum(x[3])

## R^3 -> R^3 functions: ignore w component
## ------------------------------------------------
def add(a,b):
    """ 3 vector, `a + b`"""
    return [a[0]+b[0],a[1]+b[1],a[2]+b[2],1.0]

def sub(a,b):
    """ 3 vector, `a - b`"""
    return [a[0]-b[0],a[1]-b[1],a[2]-b[2],1.0]

def scale3(a,c):
    """ 3 vector, vector ''a'' times scalar ``c``, `a * c`"""
    return [a[0]*c,a[1]*c,a[2]*c,1.0]

## Compute the cross generalized product of a x b, assuming that both
## fall into the w=1 hyperplane
def cross(a,b):
    """Compute the cross generalized product of a x b, assuming that both
    fall into the w=1 hyperplane

    """

    return [ a[1]*b[2] - a[2]*b[1],
             a[2]*b[0] - a[0]*b[2],
             a[0]*b[1] - a[1]*b[0],
             1.0 ]

## return unit vector in the direction of a, or False if a has zero
## length
def unit(a):
    """ unit 3 vector in the direction of ``a``, or ``False`` if ``a`` is too short"""
    m = mag(a)
    if m < epsilon*epsilon:
        return False
    return scale3(a,1.0/m)

## R^4 -> R^4 functions: operate on w component
def scale4(a,c):
    """ 4 vector ``a`` times scalar ``c``"""
    return [a[0]*c,a[1]*c,a[2]*c,a[3]*c]

## R^3 -> R functions -- ignore w component
## ----------------------------------------
def dot(a,b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]

def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0]*a[0]+a[1]*a[1]+a[2]*a[2])

def dist(a,b):  # compute distance between two points a & b
    """ compute the euclidean disgtance between two 3 vector points ``a`` and ``b``"""
    return mag(sub(a,b))

## R^4 -> R functions
## ----------------------------------------
def dot4(a,b):
    """ 4 vect dot product"""
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]+a[3]*b[3]

## projective plane operations on [x, y, w] triples
## ----------------------------------------------

def xyw(a):
    """ drop the z coordinate of 4 vector ``a``, returning ``[x, y, w]``"""
    return [a[0],a[1],a[3]]

def cross3(a,b):
    """ cross product of two ``[x, y, w]`` triples"""
    return [ a[1]*b[2] - a[2]*b[1],
             a[2]*b[0] - a[0]*b[2],
             a[0]*b[1] - a[1]*b[0] ]

def dot3(a,b):
    """ dot product of two ``[x, y, w]`` triples"""
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]

## normalize an [x, y, w] triple to [x/w, y/w], or False if w is zero
def normalizexy(a):
    if a[2] == 0.0:
        return False
    return [a[0]/a[2],a[1]/a[2]]

## distance in the projected xy plane between two [x, y, w] triples,
## or False if either is at infinity
def distxy(a,b):
    pa = normalizexy(a)
    pb = normalizexy(b)
    if not pa or not pb:
        return False
    return hypot(pa[0]-pb[0],pa[1]-pb[1])


# pretty printing string formatter for vectors, lines, and polygons.
# You can use this anywhere you use str(), since it will fall back to
# str() if the argument isn't a vector, line, or polygon.
def vstr(a):
    """ utility function for recursively checking and formatting lists
    """
    def _isallvect(foo):
        if not isinstance(foo,list):
            return False
        if len(foo)==1:
            return isinstance(foo[0],list) and \
                (isvect(foo[0]) or _isallvect(foo[0]))
        else:
            return (isvect(foo[0]) or _isallvect(foo[0])) and \
                _isallvect(foo[1:])
    def _makestr(foo):
        if len(foo) ==1:
            return vstr(foo[0])
        else:
            return vstr(foo[0]) + ", " + _makestr(foo[1:])
    if not isinstance(a,list):
        return str(a) # fall back to default string formatting
    # NOTE: 3 vectors that happen to fall into the z=0 plane will be
    # formatted as though they were 2 vectors.
    if isvect(a):
        if abs(a[3]-1.0) > epsilon: # not in w=1
            return "[{}, {}, {}, {}]".format(a[0],a[1],a[2],a[3])
        elif abs(a[2]) > epsilon: # not in z=0
            return "[{}, {}, {}]".format(a[0],a[1],a[2])
        else: # in x-y plane
            return "[{}, {}]".format(a[0],a[1])
    elif len(a)>0 and _isallvect(a):
        return "["+_makestr(a)+"]"
    else:
        return str(a)


## FIGURES
## =======
## points
## --------------------

## points are defined as vectors that lie in a positive, non-zero
## hyperplane, i.e. [x, y, z, w] such that w > 0.

def point(x=False,y=False,z=False,w=False):
    """Point creation from point or scalars"""
    if ispoint(x):
        return copy.deepcopy(x)
    r = [0,0,0,1]
    if isgoodnum(x):
        r[0]=x
        if isgoodnum(y):
            r[1]=y
            if isgoodnum(z):
                r[2]=z
                if isgoodnum(w):
                    r[3]=w
    if r[3] > 0:
        return r
    else:
        raise ValueError('bad w argument to point()')


def ispoint(x):
    """ is it a point?"""
    if isvect(x) and x[3] > 0.0:
        return True
    return False

## lines, arcs, polys and geometry lists, in the yapCAD list
## representation
## ---------------------------------------------------------

def isline(l):
    """ is it a line? """
    return isinstance(l,list) and len(l) == 2 \
        and ispoint(l[0]) and ispoint(l[1])

## arcs are [center, [radius, start, end, w], <normal>] where w is -1
## for ordinary arcs and -2 for sample-reversed arcs
def isarc(a):
    """ is it an arc? """
    if not isinstance(a,list):
        return False
    n = len(a)
    if n < 2 or n > 3:
        return False
    if not (ispoint(a[0]) and isvect(a[1])):
        return False
    if a[1][3] not in (-1,-2):           # is psuedovector marked?
        return False
    if a[1][0] < 0:
        return False
    if n == 3 and ( not ispoint(a[2]) or abs(mag(a[2])-1.0) > epsilon):
        return False
    return True

## the special integer values start=0, end=360 flag a true full
## circle
def iscircle(a):
    """ is it a circle? """
    return isarc(a) and a[1][1] == 0 and a[1][2] == 360

def ispoly(a):
    """is ``a`` a poly?"""
    return isinstance(a,list) and len(a) > 2 and \
        len(list(filter(lambda x: not ispoint(x),a))) == 0

