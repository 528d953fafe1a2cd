# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import Algorithm  # abstract class, for type checking
from .base import LogLine
from .base import StopReason
from .base import registry
from .population import Population
from .sade import SADE
from .sade import SelfAdaptiveDE
from .sade import make_algorithm
from . import callbacks
