"""
The 3D rotation Lie group SO(3) and its Lie algebra so(3).

quat: 4 parameters (w, x, y, z), hamilton convention, no singularities
dcm: 9 parameters, no singularities

All maps accept casadi.DM (or lists / numpy arrays) and return casadi.DM,
or accept casadi.SX / casadi.MX and return symbolic expressions, so the
same code can be evaluated or code generated.
"""
import casadi as ca

from .lie_group import LieGroup
from .util import SMALL_EPS, angle, as_expr, promote, series_dict


# see: https://ethaneade.com/lie.pdf


def wedge(v):
    """
    Take Lie algebra components and builds a Lie algebra element.
    :param v: 3 vector
    :return: The skew symmetric matrix, hat(v) @ p == cross(v, p)
    """
    v = as_expr(v)
    assert v.shape == (3, 1)
    X = type(v)(3, 3)
    X[0, 1] = -v[2]
    X[0, 2] = v[1]
    X[1, 0] = v[2]
    X[1, 2] = -v[0]
    X[2, 0] = -v[1]
    X[2, 1] = v[0]
    return X


def vee(X):
    """
    Takes a Lie algebra element and extracts components
    :param X: Lie algebra element, a skew symmetric matrix
    :return: 3 vector
    """
    X = as_expr(X)
    assert X.shape == (3, 3)
    v = type(X)(3, 1)
    v[0, 0] = X[2, 1]
    v[1, 0] = X[0, 2]
    v[2, 0] = X[1, 0]
    return v


def bracket(a, b):
    """
    The Lie bracket, vee(hat(a) hat(b) - hat(b) hat(a)), which for so(3)
    is the cross product.
    """
    a, b = promote(a, b)
    assert a.shape == (3, 1)
    assert b.shape == (3, 1)
    return ca.cross(a, b)


def d_bracket_ab_by_d_a(b):
    """
    Jacobian of bracket(a, b) with respect to a.
    """
    return -wedge(b)


def generator(i):
    """
    The i-th generator of so(3), hat of the i-th unit vector.
    """
    if i not in range(3):
        raise IndexError("so(3) generator index must be 0, 1 or 2, got {}".format(i))
    e = ca.DM.zeros(3, 1)
    e[i] = 1
    return wedge(e)


hat = wedge
lie_bracket = bracket


class _SO3Base(LieGroup):
    def vee(self, X):
        return vee(X)

    def wedge(self, v):
        return wedge(v)

    def bracket(self, a, b):
        return bracket(a, b)

    def ad(self, v):
        return wedge(v)


class _Quat(_SO3Base):
    def __init__(self):
        super().__init__(group_params=4, algebra_params=3, group_shape=(4, 1))

    def identity(self) -> ca.DM:
        return ca.DM([1, 0, 0, 0])

    def product(self, a, b):
        """
        The product of two quaternions using the hamilton
        convention, so that Dcm(A)*Dcm(B) = Dcm(A*B).
        """
        a, b = promote(a, b)
        self.check_group_shape(a)
        self.check_group_shape(b)
        r1 = a[0]
        v1 = a[1:]
        r2 = b[0]
        v2 = b[1:]
        res = type(a)(4, 1)
        res[0] = r1 * r2 - ca.dot(v1, v2)
        res[1:] = r1 * v2 + r2 * v1 + ca.cross(v1, v2)
        return res

    def normalize(self, q):
        q = as_expr(q)
        self.check_group_shape(q)
        # scaled first, the norm of large quaternions overflows
        q = q / ca.mmax(ca.fabs(q))
        return q / ca.norm_2(q)

    def inv(self, q):
        q = self.normalize(q)
        return ca.vertcat(q[0], -q[1:])

    def exp(self, v):
        """
        The exponential map from the Lie algebra element components to the Lie group.
        :param v: axis times angle
        :return: The unit quaternion (cos(theta/2), sin(theta/2) v/theta)
        """
        v = as_expr(v)
        self.check_algebra_shape(v)
        theta_sq, theta = angle(v)
        c = series_dict["cos(x/2)"](theta_sq, theta)
        s = series_dict["sin(x/2)/x"](theta_sq, theta)
        return ca.vertcat(c, s * v)

    def log_and_theta(self, q):
        """
        The inverse exponential map from the Lie group to the Lie algebra element components.

        q and -q are the same rotation, the hemisphere with non negative scalar
        part is used so that theta lies in [0, pi].
        :param q: The quaternion, need not be normalized.
        :return: (v, theta), with norm(v) == theta
        """
        q = self.normalize(q)
        q = ca.if_else(q[0] < 0, -q, q)
        w = q[0]
        u = q[1:]
        n_sq = ca.dot(u, u)
        small = n_sq < SMALL_EPS**2
        one = type(n_sq)(1)

        # 2 atan(n/w)/n = 2/w - 2 n^2/(3 w^3) + ..., w is near 1 when n is small
        w_small = ca.if_else(small, w, one)
        k_small = 2 / w_small - 2 * n_sq / (3 * w_small**3)

        # placeholder n when small, keeps derivatives of this branch finite
        n = ca.sqrt(ca.if_else(small, one, n_sq))
        k = 2 * ca.atan2(n, w) / n

        theta = 2 * ca.atan2(ca.sqrt(n_sq), w)
        return ca.if_else(small, k_small, k) * u, theta

    def act(self, q, p):
        """
        Rotates the vector p.
        """
        q, p = promote(q, p)
        self.check_group_shape(q)
        assert p.shape == (3, 1)
        q = self.normalize(q)
        w = q[0]
        u = q[1:]
        t = 2 * ca.cross(u, p)
        return p + w * t + ca.cross(u, t)

    def kinematics(self, q, w):
        """
        The kinematic equation relating the time derivative of quat given the current quat and the angular velocity
        in the body frame.
        :param q: The quaternion
        :param w: The angular velocity in the body frame.
        :return: The time derivative of the quat.
        """
        q, w = promote(q, w)
        self.check_group_shape(q)
        self.check_algebra_shape(w)
        return 0.5 * self.product(q, ca.vertcat(type(w).zeros(1, 1), w))

    def Ad(self, q):
        return self.to_dcm(q)

    def to_dcm(self, q):
        """
        Converts a unit quaternion to a DCM.
        """
        q = as_expr(q)
        self.check_group_shape(q)
        R = type(q)(3, 3)
        a = q[0]
        b = q[1]
        c = q[2]
        d = q[3]
        aa = a * a
        ab = a * b
        ac = a * c
        ad = a * d
        bb = b * b
        bc = b * c
        bd = b * d
        cc = c * c
        cd = c * d
        dd = d * d
        R[0, 0] = aa + bb - cc - dd
        R[0, 1] = 2 * (bc - ad)
        R[0, 2] = 2 * (bd + ac)
        R[1, 0] = 2 * (bc + ad)
        R[1, 1] = aa + cc - bb - dd
        R[1, 2] = 2 * (cd - ab)
        R[2, 0] = 2 * (bd - ac)
        R[2, 1] = 2 * (cd + ab)
        R[2, 2] = aa + dd - bb - cc
        return R

    def from_dcm(self, R):
        """
        Converts a direction cosine matrix to a quaternion, picking the
        best conditioned of the four extraction formulas.
        """
        R = as_expr(R)
        assert R.shape == (3, 3)
        b1 = 0.5 * ca.sqrt(1 + R[0, 0] + R[1, 1] + R[2, 2])
        b2 = 0.5 * ca.sqrt(1 + R[0, 0] - R[1, 1] - R[2, 2])
        b3 = 0.5 * ca.sqrt(1 - R[0, 0] + R[1, 1] - R[2, 2])
        b4 = 0.5 * ca.sqrt(1 - R[0, 0] - R[1, 1] + R[2, 2])

        q1 = ca.vertcat(
            b1,
            (R[2, 1] - R[1, 2]) / (4 * b1),
            (R[0, 2] - R[2, 0]) / (4 * b1),
            (R[1, 0] - R[0, 1]) / (4 * b1),
        )
        q2 = ca.vertcat(
            (R[2, 1] - R[1, 2]) / (4 * b2),
            b2,
            (R[0, 1] + R[1, 0]) / (4 * b2),
            (R[0, 2] + R[2, 0]) / (4 * b2),
        )
        q3 = ca.vertcat(
            (R[0, 2] - R[2, 0]) / (4 * b3),
            (R[0, 1] + R[1, 0]) / (4 * b3),
            b3,
            (R[1, 2] + R[2, 1]) / (4 * b3),
        )
        q4 = ca.vertcat(
            (R[1, 0] - R[0, 1]) / (4 * b4),
            (R[0, 2] + R[2, 0]) / (4 * b4),
            (R[1, 2] + R[2, 1]) / (4 * b4),
            b4,
        )
        return ca.if_else(
            ca.trace(R) > 0,
            q1,
            ca.if_else(
                ca.logic_and(R[0, 0] > R[1, 1], R[0, 0] > R[2, 2]),
                q2,
                ca.if_else(R[1, 1] > R[2, 2], q3, q4),
            ),
        )


Quat = _Quat()


class _Dcm(_SO3Base):
    def __init__(self):
        super().__init__(group_params=9, algebra_params=3, group_shape=(3, 3))

    def identity(self) -> ca.DM:
        return ca.DM.eye(3)

    def product(self, a, b):
        a, b = promote(a, b)
        self.check_group_shape(a)
        self.check_group_shape(b)
        return a @ b

    def inv(self, a):
        a = as_expr(a)
        self.check_group_shape(a)
        return a.T

    def exp(self, v):
        """
        Rodrigues formula, I + sin(theta)/theta X + (1 - cos(theta))/theta^2 X^2
        """
        v = as_expr(v)
        self.check_algebra_shape(v)
        theta_sq, theta = angle(v)
        X = wedge(v)
        A = series_dict["sin(x)/x"](theta_sq, theta)
        B = series_dict["(1 - cos(x))/x^2"](theta_sq, theta)
        return type(X).eye(3) + A * X + B * X @ X

    def log_and_theta(self, R):
        return Quat.log_and_theta(Quat.from_dcm(R))

    def kinematics(self, R, w):
        R, w = promote(R, w)
        self.check_group_shape(R)
        self.check_algebra_shape(w)
        return R @ wedge(w)

    def Ad(self, R):
        R = as_expr(R)
        self.check_group_shape(R)
        return R

    def from_quat(self, q):
        return Quat.to_dcm(q)


Dcm = _Dcm()


class SO3:
    """
    A rotation, stored as a unit quaternion (w, x, y, z).

    The quaternion is normalized on construction, so every product and
    inverse is renormalized as well. Elements are never modified in place.

    >>> R = SO3.exp([0.2, 0.5, 0.0]) * SO3.exp([ca.pi, 0, 0])
    >>> omega, theta = R.log_and_theta()
    """

    def __init__(self, q=None):
        if q is None:
            q = Quat.identity()
        q = as_expr(q)
        Quat.check_group_shape(q)
        if isinstance(q, ca.DM) and float(ca.mmax(ca.fabs(q))) == 0:
            raise ValueError("cannot build a rotation from the zero quaternion")
        self._q = Quat.normalize(q)

    def __repr__(self):
        return "SO3({:s})".format(str(self._q))

    @classmethod
    def identity(cls) -> "SO3":
        return cls()

    @property
    def unit_quaternion(self):
        return self._q

    def matrix(self):
        """
        The orthonormal rotation matrix.
        """
        return Quat.to_dcm(self._q)

    def adjoint(self):
        """
        Adjoint of the group element, hat(R v) = R hat(v) R^T. For SO(3) this
        is the rotation matrix itself.
        """
        return Quat.Ad(self._q)

    def compose(self, other: "SO3") -> "SO3":
        return SO3(Quat.product(self._q, other._q))

    def act(self, p):
        return Quat.act(self._q, p)

    def __mul__(self, other):
        if isinstance(other, SO3):
            return self.compose(other)
        return self.act(other)

    def inverse(self) -> "SO3":
        return SO3(Quat.inv(self._q))

    def derivative(self, w):
        """
        The time derivative of the unit quaternion.
        :param w: The angular velocity in the body frame.
        """
        return Quat.kinematics(self._q, w)

    @classmethod
    def exp(cls, omega) -> "SO3":
        """
        The exponential map, omega is the rotation axis times the angle in radians.
        """
        return cls(Quat.exp(omega))

    def log(self):
        """
        The logarithm map, the inverse of exp with the angle in [0, pi].
        """
        return Quat.log(self._q)

    def log_and_theta(self):
        """
        :return: (omega, theta) where theta = norm(omega) is in [0, pi]
        """
        return Quat.log_and_theta(self._q)

    @classmethod
    def from_matrix(cls, R) -> "SO3":
        return cls(Quat.from_dcm(R))

    hat = staticmethod(wedge)
    vee = staticmethod(vee)
    lie_bracket = staticmethod(bracket)
    d_lie_bracket_ab_by_d_a = staticmethod(d_bracket_ab_by_d_a)
    generator = staticmethod(generator)
