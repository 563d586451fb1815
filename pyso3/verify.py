"""
Numerical checks of the SO(3) exp/log, group and bracket identities.

Run with ``python -m pyso3.verify``, the exit status is non zero if any
check fails.
"""
import argparse
import logging
import sys

import casadi as ca
import numpy as np
import scipy.linalg

from .lie.so3 import SO3
from .lie.util import SMALL_EPS

logger = logging.getLogger(__name__)


def sample_rotations():
    """
    Rotations covering the near identity and near pi cases as well as
    conjugated rotations A exp(pi x) A^-1.
    """
    return [
        SO3([0.1e-11, 0.0, 1.0, 0.0]),
        SO3([-1, 0.00001, 0.0, 0.0]),
        SO3.exp([0.2, 0.5, 0.0]),
        SO3.exp([0.2, 0.5, -1.0]),
        SO3.exp([0.0, 0.0, 0.0]),
        SO3.exp([0.0, 0.0, 0.00001]),
        SO3.exp([np.pi, 0, 0]),
        SO3.exp([0.2, 0.5, 0.0]) * SO3.exp([np.pi, 0, 0]) * SO3.exp([-0.2, -0.5, -0.0]),
        SO3.exp([0.3, 0.5, 0.1]) * SO3.exp([np.pi, 0, 0]) * SO3.exp([-0.3, -0.5, -0.1]),
    ]


def sample_tangents():
    return [
        [0, 0, 0],
        [1, 0, 0],
        [0, 1, 0],
        [np.pi / 2, np.pi / 2, 0.0],
        [-1, 1, 0],
        [20, -1, 0],
        [30, 5, -1],
    ]


def _bad(nrm, eps):
    nrm = float(nrm)
    return np.isnan(nrm) or nrm > eps


def explog_failures(rotations=None, eps=SMALL_EPS):
    """
    Checks exp(log(R)) == R with theta in [-pi, pi], R * p == matrix(R) p
    and R R^-1 == I.

    @return: list of failure messages, empty if all checks pass
    """
    if rotations is None:
        rotations = sample_rotations()
    failures = []
    p = ca.DM([1, 2, 4])
    for i, R in enumerate(rotations):
        R1 = R.matrix()
        omega, theta = R.log_and_theta()
        R2 = SO3.exp(omega).matrix()
        nrm = ca.norm_fro(R1 - R2)
        if _bad(nrm, eps):
            failures.append("SO3 - exp(log(SO3)), test case {:d}, residual {:g}".format(i, float(nrm)))

        theta = float(theta)
        logger.debug("test case %d: theta %g, exp(log) residual %g", i, theta, float(nrm))
        if np.isnan(theta) or theta > np.pi or theta < -np.pi:
            failures.append("log theta not in [-pi, pi], test case {:d}, theta {:g}".format(i, theta))

        nrm = ca.norm_2(R * p - R1 @ p)
        if _bad(nrm, eps):
            failures.append("transform vector, test case {:d}, residual {:g}".format(i, float(nrm)))

        nrm = ca.norm_fro(R1 @ R.inverse().matrix() - ca.DM.eye(3))
        if _bad(nrm, eps):
            failures.append("inverse, test case {:d}, residual {:g}".format(i, float(nrm)))

    for msg in failures:
        logger.error(msg)
    return failures


def bracket_failures(tangents=None, eps=SMALL_EPS):
    """
    Checks the closed form bracket against the matrix commutator and the
    closed form exp against the matrix exponential of hat(omega).

    @return: list of failure messages, empty if all checks pass
    """
    if tangents is None:
        tangents = sample_tangents()
    failures = []
    for i, a in enumerate(tangents):
        for j, b in enumerate(tangents):
            res1 = SO3.lie_bracket(a, b)
            mat = SO3.hat(a) @ SO3.hat(b) - SO3.hat(b) @ SO3.hat(a)
            res2 = SO3.vee(mat)
            nrm = ca.norm_2(res1 - res2)
            if _bad(nrm, eps):
                failures.append("lie bracket, test case {:d}, {:d}, residual {:g}".format(i, j, float(nrm)))

        exp_x = SO3.exp(a).matrix()
        expmap_hat_x = scipy.linalg.expm(SO3.hat(a).full())
        nrm = np.linalg.norm(exp_x.full() - expmap_hat_x)
        logger.debug("test case %d: expm residual %g", i, nrm)
        if _bad(nrm, eps):
            failures.append("expmap(hat(x)) - exp(x), test case {:d}, residual {:g}".format(i, nrm))

    for msg in failures:
        logger.error(msg)
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--eps", type=float, default=SMALL_EPS, help="tolerance for all checks")
    parser.add_argument("-v", "--verbose", action="store_true", help="log passing checks too")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    failures = explog_failures(eps=args.eps) + bracket_failures(eps=args.eps)
    if failures:
        logger.error("failed: %d checks", len(failures))
        return 1
    logger.info("all checks passed, eps %g", args.eps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
