"""Python Casadi based SO(3) Lie group library"""

from .lie.so3 import SO3
from .lie.util import SMALL_EPS

__version__ = "0.1.0"
