# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import functools
from . import errors


X = tp.TypeVar("X")


class _Entry(tp.NamedTuple):
    obj: tp.Any
    info: tp.Dict[tp.Hashable, tp.Any]


# pylint does not understand Dict[str, X],
# so we reimplement the MutableMapping interface
class Registry(tp.MutableMapping[str, X]):
    """Name-indexed mapping used for the benchmark functions of
    :code:`pysade.functions.corefuncs` (registered with their classical search box
    as information) and for the configured algorithms of :code:`pysade.optimization`
    (registered through :code:`set_name(name, register=True)`).

    Names are unique: registering a name twice raises a SadeRuntimeError.
    """

    def __init__(self) -> None:
        super().__init__()
        self._entries: tp.Dict[str, _Entry] = {}

    def register(self, obj: X, info: tp.Optional[tp.Dict[tp.Hashable, tp.Any]] = None) -> X:
        """Decorator registering a function under its own name"""
        name = getattr(obj, "__name__", obj.__class__.__name__)
        self.register_name(name, obj, info)
        return obj

    def register_name(self, name: str, obj: X, info: tp.Optional[tp.Dict[tp.Hashable, tp.Any]] = None) -> None:
        if name in self._entries:
            raise errors.SadeRuntimeError(f'Encountered a name collision "{name}"')
        if info is not None:
            assert isinstance(info, dict)
        self._entries[name] = _Entry(obj, {} if info is None else info)

    def unregister(self, name: str) -> None:
        """Removes a registered object and its information, if present"""
        self._entries.pop(name, None)

    def register_with_info(self, **info: tp.Any) -> tp.Callable[[X], X]:
        """Decorator registering a function along with information about it,
        eg: :code:`@registry.register_with_info(bounds=(-5.12, 5.12))`
        """
        return functools.partial(self.register, info=info)

    def get_info(self, name: str) -> tp.Dict[tp.Hashable, tp.Any]:
        if name not in self._entries:
            raise errors.SadeValueError(f'"{name}" is not registered (available: {sorted(self._entries)}).')
        return self._entries[name].info

    def __getitem__(self, key: str) -> X:
        return self._entries[key].obj  # type: ignore

    def __setitem__(self, key: str, value: X) -> None:
        info = self._entries[key].info if key in self._entries else {}
        self._entries[key] = _Entry(value, info)

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> tp.Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self._entries)})"
