#!/usr/bin/env python
"""Python Casadi based SO(3) Lie group library

This is a library for the 3D rotation group SO(3), its exponential
and logarithm maps and Lie algebra operators, written against the
Casadi framework so every map can be evaluated numerically or
differentiated and code generated symbolically.
"""

from setuptools import setup, find_packages
import sys

if sys.version_info < (3, 6):
    raise SystemExit("requires  Python >= 3.6")

DOCLINES = __doc__.split("\n")

CLASSIFIERS = """\
Development Status :: 3 - Alpha
Intended Audience :: Science/Research
Intended Audience :: Developers
License :: OSI Approved :: BSD License
Programming Language :: Python
Programming Language :: Python :: 3
Topic :: Software Development
Topic :: Scientific/Engineering :: Mathematics
Topic :: Scientific/Engineering :: Physics
Operating System :: Microsoft :: Windows
Operating System :: POSIX
Operating System :: Unix
Operating System :: MacOS
"""

# pylint: disable=invalid-name

package_name = "pyso3"

setup(
    name=package_name,
    description=DOCLINES[0],
    long_description="\n".join(DOCLINES[2:]),
    license="BSD 3-Clause",
    classifiers=[_f for _f in CLASSIFIERS.split("\n") if _f],
    platforms=["Windows", "Linux", "Solaris", "Mac OS-X", "Unix"],
    python_requires=">=3.6",
    install_requires=[
        "scipy",
        "numpy",
        "casadi",
        "sympy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["pyso3-verify=pyso3.verify:main"],
    },
    packages=find_packages(include=["pyso3", "pyso3.*"]),
    version="0.1.0",
    zip_safe=True,
)
