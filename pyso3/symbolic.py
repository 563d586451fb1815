import logging

import casadi as ca
import sympy

logger = logging.getLogger(__name__)


def taylor_series_near_zero(x, f, order=6, eps=1e-7, name="f"):
    """
    Takes an even sympy function and near zero approximates it by a taylor
    series. The resulting function is converted to a casadi function.

    The casadi function takes (x_sq, x). The series is a polynomial in
    x_sq = x**2 and is used when x_sq < eps**2, otherwise f(x) is used.
    Callers pass a placeholder x, e.g. 1, whenever the series is selected,
    which keeps the derivative of the discarded branch finite at x = 0.

    @x: sympy independent variable
    @f: sympy function, f(-x) == f(x)
    @order: order of the series, the O(x**order) term is dropped
    @eps: tolerance for using series
    @name: name of the casadi function
    @return: casadi.Function
    """
    x_sq = sympy.Symbol(str(x) + "_sq", nonnegative=True)
    f_series = f.series(x, 0, order).removeO()
    if sympy.expand(f_series.subs(x, -x) - f_series) != 0:
        raise ValueError("{:s}: series {:s} is not even".format(name, str(f_series)))
    f_series = sympy.expand(f_series.subs(x, sympy.sqrt(x_sq)))
    logger.debug("%s: f = %s, series = %s", name, f, f_series)
    symbols = {str(x): ca.SX.sym(str(x)), str(x_sq): ca.SX.sym(str(x_sq))}
    f_series, _ = sympy_to_casadi(f=f_series, symbols=symbols)
    f, _ = sympy_to_casadi(f=f, symbols=symbols)
    x_ca = symbols[str(x)]
    x_sq_ca = symbols[str(x_sq)]
    return ca.Function(
        name, [x_sq_ca, x_ca], [ca.if_else(x_sq_ca < eps**2, f_series, f)],
        ["x_sq", "x"], ["f"])


def sympy_to_casadi(f, symbols=None):
    """
    Converts a sympy expression to a casadi SX expression.

    @f: sympy expression
    @symbols: dict of casadi symbols by name, new symbols are added to it
    @return: (casadi expression, symbols)
    """
    if symbols is None:
        symbols = {}
    return _sympy_parser(f=f, symbols=symbols), symbols


def _sympy_parser(f, symbols, depth=0):
    prs = lambda f: _sympy_parser(f=f, symbols=symbols, depth=depth + 1)
    f_type = type(f)
    logger.debug("%s %s type %s", "-" * depth, f, f_type)
    if f_type == sympy.core.add.Add:
        s = 0
        for arg in f.args:
            s += prs(arg)
        return s
    elif f_type == sympy.core.mul.Mul:
        prod = 1
        for arg in f.args:
            prod *= prs(arg)
        return prod
    elif f_type == sympy.core.power.Pow:
        base, power = f.args
        base_ca = prs(base)
        if power == sympy.S.Half:
            return ca.sqrt(base_ca)
        else:
            return base_ca ** prs(power)
    elif f_type == sympy.core.symbol.Symbol:
        if str(f) not in symbols:
            symbols[str(f)] = ca.SX.sym(str(f))
        return symbols[str(f)]
    elif f_type == int:
        return f
    elif f_type == sympy.core.numbers.Integer:
        return int(f)
    elif f_type == sympy.core.numbers.Rational:
        return prs(f.p) / prs(f.q)
    elif f_type == sympy.core.numbers.One:
        return 1
    elif f_type == sympy.core.numbers.Zero:
        return 0
    elif f_type == sympy.core.numbers.NegativeOne:
        return -1
    elif f_type == sympy.core.numbers.Half:
        return 0.5
    elif f_type == sympy.sin:
        return ca.sin(prs(f.args[0]))
    elif f_type == sympy.cos:
        return ca.cos(prs(f.args[0]))
    else:
        raise NotImplementedError("unhandled type {:s}: {:s}".format(str(f_type), str(f)))
