import casadi as ca
import abc
from typing import Tuple


class LieGroup(abc.ABC):
    """
    Operations of one parametrization of the rotation group SO(3).

    Elements are stored as casadi columns or matrices, so the same object
    works on numeric DM and on symbolic SX/MX expressions. Two
    parametrizations exist: Quat keeps the 4 elements of a unit
    quaternion (w, x, y, z) in a (4, 1) column, Dcm keeps the 9 elements
    of a rotation matrix as a (3, 3) matrix. Both share the 3 parameter
    Lie algebra, the axis times angle vector whose wedge is the skew
    symmetric matrix.
    """

    def __init__(self, group_params: int, algebra_params: int, group_shape: Tuple[int, int]):
        """
        @param group_params: number of stored elements, 4 for Quat, 9 for Dcm
        @param algebra_params: number of Lie algebra components, 3
        @param group_shape: storage shape, (4, 1) for Quat, (3, 3) for Dcm
        """
        self.group_params = group_params
        self.algebra_params = algebra_params
        self.group_shape = group_shape

    def check_group_shape(self, a):
        """
        Asserts a is stored as group_shape, plain vectors are accepted
        for column storage
        """
        assert a.shape == self.group_shape or a.shape == (self.group_shape[0],)

    def check_algebra_shape(self, v):
        assert v.shape == (self.algebra_params, 1) or v.shape == (self.algebra_params,)

    @abc.abstractmethod
    def identity(self) -> ca.DM:
        ...

    @abc.abstractmethod
    def product(self, a, b):
        """
        Composition a b, the rotation b applied first
        """
        ...

    @abc.abstractmethod
    def inv(self, a):
        ...

    @abc.abstractmethod
    def exp(self, v):
        """
        Axis times angle to group element
        """
        ...

    @abc.abstractmethod
    def log_and_theta(self, a):
        """
        Group element to (axis times angle, angle), the angle in [0, pi]
        """
        ...

    def log(self, a):
        return self.log_and_theta(a)[0]

    @abc.abstractmethod
    def vee(self, X):
        ...

    @abc.abstractmethod
    def wedge(self, v):
        ...

    @abc.abstractmethod
    def ad(self, v):
        ...

    @abc.abstractmethod
    def Ad(self, a):
        """
        Adjoint, the 3x3 matrix acting on algebra components, for SO(3) the
        rotation matrix of a
        """
        ...
