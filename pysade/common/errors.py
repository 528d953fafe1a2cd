# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class SadeError(Exception):
    """Base class for error raised by pysade"""


class SadeWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class SadeRuntimeError(RuntimeError, SadeError):
    """Runtime error raised by pysade"""


class SadeValueError(ValueError, SadeError):
    """Value error raised by pysade"""


class ConfigurationError(SadeValueError):
    """Raised at construction when an algorithm is given invalid settings"""


class CompatibilityError(SadeValueError):
    """Raised before any evolution when the problem or the population
    cannot be handled by the algorithm (constraints, several objectives,
    stochastic problem, population too small...)
    """


class InvalidProblemError(SadeValueError):
    """Raised when a problem is ill-defined (eg: inconsistent bounds) or
    returns a fitness of unexpected size
    """


# warnings


class SadeRuntimeWarning(RuntimeWarning, SadeWarning):
    """Runtime warning raised by pysade"""


class MemoryResetWarning(SadeRuntimeWarning):
    """Sent when adapted parameters are reinitialized despite memory being activated"""
