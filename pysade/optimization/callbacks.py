# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import logging
import pysade.common.typing as tp
from . import base

global_logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------------------


class GenerationPrinter:
    """Printer to register as "generation" callback in an algorithm, for printing
    the progress table (this is what is used when the verbosity is strictly positive).

    Parameters
    ----------
    header_interval: int
        number of printed lines before the column names are printed again
    stream: file-like or None
        where to print (defaults to the standard output at the time of printing)

    Example (verbosity 1)
    -------
    .. code-block:: text

        Gen:        Fevals:          Best:             F:            CR:            dx:            df:
          1             20        3.49117       0.525211       0.286294        7.40221        28.1749
          2             40        2.84911       0.525211       0.286294        6.99301        24.9386
    """

    columns = ("Gen:", "Fevals:", "Best:", "F:", "CR:", "dx:", "df:")

    def __init__(self, header_interval: int = 50, stream: tp.Optional[tp.Any] = None) -> None:
        assert header_interval > 0
        self._header_interval = int(header_interval)
        self._stream = stream
        self._count = 0

    def __call__(self, algorithm: base.Algorithm, line: base.LogLine) -> None:
        stream = sys.stdout if self._stream is None else self._stream
        if not self._count % self._header_interval:
            header = f"{self.columns[0]:>7}" + "".join(f"{name:>15}" for name in self.columns[1:])
            print("\n" + header, file=stream)
        print(self.format_line(line), file=stream)
        self._count += 1

    @staticmethod
    def format_line(line: base.LogLine) -> str:
        values = (line.fevals, line.best, line.F, line.CR, line.dx, line.df)
        return f"{line.gen:>7}" + "".join(f"{val:>15.6g}" for val in values)


# -------------------------------------------------------------------------------------


class GenerationLogger:
    """Logger to register as "generation" and/or "stop" callback in an algorithm,
    for logging its progress through the logging module.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval: int
        number of generations between two logs
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval: int = 1,
    ) -> None:
        assert log_interval > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval = int(log_interval)

    def __call__(self, algorithm: base.Algorithm, record: tp.Union[base.LogLine, base.StopReason]) -> None:
        if isinstance(record, base.StopReason):
            self._logger.log(self._log_level, "%s stopped (%s)", algorithm.get_name(), record.value)
        elif not (record.gen - 1) % self._log_interval:
            self._logger.log(
                self._log_level,
                "Generation %s after %s evaluations: best fitness is %s (F=%s, CR=%s, dx=%s, df=%s)",
                *record,
            )


# -------------------------------------------------------------------------------------


class LogRecorder:
    """Records all the lines and stop reasons it is called with, for later inspection"""

    def __init__(self) -> None:
        self.lines: tp.List[base.LogLine] = []
        self.stops: tp.List[base.StopReason] = []

    def __call__(self, algorithm: base.Algorithm, record: tp.Union[base.LogLine, base.StopReason]) -> None:
        if isinstance(record, base.StopReason):
            self.stops.append(record)
        else:
            self.lines.append(record)
