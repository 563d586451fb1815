from .so3 import SO3, Quat, Dcm, hat, vee, wedge, bracket, lie_bracket
from .util import SMALL_EPS
