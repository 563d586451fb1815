import casadi as ca
import numpy as np

from pyso3.lie.util import SMALL_EPS, angle, as_expr, expr_type, promote, series_dict

tol = 1e-15


def test_small_eps():
    assert SMALL_EPS == 1e-10


def test_quat_series():
    c_w = series_dict["cos(x/2)"]
    c_v = series_dict["sin(x/2)/x"]
    assert float(c_w(0, 1)) == 1
    assert float(c_v(0, 1)) == 0.5
    assert abs(float(c_v(1e-22, 1e-11)) - 0.5) < tol
    assert abs(float(c_v(1e-10, 1e-5)) - (0.5 - 1e-10 / 48)) < tol
    assert abs(float(c_v(1.0, 1.0)) - np.sin(0.5)) < tol
    assert abs(float(c_w(1.0, 1.0)) - np.cos(0.5)) < tol


def test_dcm_series():
    A = series_dict["sin(x)/x"]
    B = series_dict["(1 - cos(x))/x^2"]
    assert float(A(0, 1)) == 1
    assert float(B(0, 1)) == 0.5
    assert abs(float(A(4.0, 2.0)) - np.sin(2.0) / 2.0) < tol
    assert abs(float(B(4.0, 2.0)) - (1 - np.cos(2.0)) / 4.0) < tol


def test_dcm_series_cancellation():
    B = series_dict["(1 - cos(x))/x^2"]
    for x in [1e-8, 1e-6, 1e-5]:
        assert abs(float(B(x**2, x)) - 0.5) < 1e-9


def test_angle():
    theta_sq, theta = angle(ca.DM([3, 0, -4]))
    assert float(theta_sq) == 25
    assert abs(float(theta) - 5) < tol
    theta_sq, theta = angle(ca.DM([0, 0, 0]))
    assert float(theta_sq) == 0
    assert float(theta) == 1
    theta_sq, theta = angle(ca.DM([1e200, 0, 0]))
    assert float(theta) == 1e200


def test_as_expr():
    assert as_expr([1, 2, 3]).shape == (3, 1)
    assert as_expr(np.eye(3)).shape == (3, 3)
    assert as_expr(2.0).shape == (1, 1)
    x = ca.SX.sym("x", 3)
    assert as_expr(x) is x


def test_promote():
    x = ca.SX.sym("x", 3)
    assert expr_type(ca.DM([1]), x) is ca.SX
    assert expr_type(ca.DM([1]), [1, 2]) is ca.DM
    a, b = promote([1, 2, 3], x)
    assert isinstance(a, ca.SX)
    assert isinstance(b, ca.SX)
