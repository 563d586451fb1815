import casadi as ca
import numpy as np
import sympy

from ..symbolic import taylor_series_near_zero

# switch to taylor series below this angle, also the default tolerance
# used when checking identities
SMALL_EPS = 1e-10


def as_expr(x):
    """
    Converts lists, tuples and numpy arrays to casadi.DM, vectors become
    columns. Casadi types are returned unchanged.
    """
    if isinstance(x, (ca.SX, ca.MX, ca.DM)):
        return x
    a = np.array(x, dtype=float)
    if a.ndim == 0:
        return ca.DM(float(a))
    if a.ndim == 1:
        a = a.reshape(-1, 1)
    return ca.DM(a)


def expr_type(*args):
    """
    The casadi type able to hold all arguments, SX and MX win over DM.
    """
    types = set(type(a) for a in args)
    if ca.MX in types:
        return ca.MX
    if ca.SX in types:
        return ca.SX
    return ca.DM


def promote(*args):
    """
    Converts all arguments to a common casadi type, see expr_type.
    """
    args = [as_expr(a) for a in args]
    Expr = expr_type(*args)
    return [Expr(a) for a in args]


def angle(v, eps=SMALL_EPS):
    """
    The squared norm and the norm of v, the arguments of the series_dict
    functions.

    Below eps the norm is the one of a placeholder unit vector. The series
    only depends on the squared norm there, so derivatives at v = 0 stay
    finite. The norm is scaled by the largest element so it does not
    overflow.
    """
    theta_sq = ca.dot(v, v)
    unit_x = type(v)(ca.DM([1, 0, 0]))
    v_safe = ca.if_else(theta_sq < eps**2, unit_x, v)
    m = ca.mmax(ca.fabs(v_safe))
    return theta_sq, m * ca.norm_2(v_safe / m)


x = sympy.symbols("x")

# coefficient functions of (x**2, x), with taylor series approx near origin,
# every eps must be at least SMALL_EPS, see angle
series_dict = {
    "cos(x/2)": taylor_series_near_zero(
        x, sympy.cos(x / 2), order=4, eps=SMALL_EPS, name="c_quat_exp_w"),
    "sin(x/2)/x": taylor_series_near_zero(
        x, sympy.sin(x / 2) / x, order=4, eps=SMALL_EPS, name="c_quat_exp_v"),
    "sin(x)/x": taylor_series_near_zero(
        x, sympy.sin(x) / x, order=6, eps=SMALL_EPS, name="c_dcm_a"),
    # 1 - cos(x) rounds to 0 below ~1e-8, keep the series up to 1e-4
    "(1 - cos(x))/x^2": taylor_series_near_zero(
        x, (1 - sympy.cos(x)) / x**2, order=6, eps=1e-4, name="c_dcm_b"),
}

# delete temp variable used to create functions
del x
