# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
from unittest import TestCase
import numpy as np
from . import decorators
from . import errors


class DecoratorTests(TestCase):

    def test_registry(self) -> None:
        functions: decorators.Registry[tp.Callable[[], int]] = decorators.Registry()
        other: decorators.Registry[tp.Callable[[], int]] = decorators.Registry()

        @functions.register
        def dummy() -> int:
            return 12

        np.testing.assert_equal(dummy(), 12)
        np.testing.assert_array_equal(list(functions.keys()), ["dummy"])
        np.testing.assert_array_equal(list(other.keys()), [])
        functions.unregister("dummy")
        functions.unregister("other_dummy_that_does_not_exist")
        np.testing.assert_array_equal(list(functions.keys()), [])

    def test_info_registry(self) -> None:
        functions: decorators.Registry[tp.Callable[[], int]] = decorators.Registry()

        @functions.register_with_info(scheme="jDE")
        def dummy_info() -> int:
            return 10

        np.testing.assert_equal(dummy_info(), 10)
        np.testing.assert_equal(functions.get_info("dummy_info"), {"scheme": "jDE"})
        np.testing.assert_raises(errors.SadeValueError, functions.get_info, "no_dummy")

    def test_registry_error(self) -> None:
        functions: decorators.Registry[tp.Any] = decorators.Registry()

        @functions.register
        def dummy() -> int:
            return 12

        np.testing.assert_raises(errors.SadeRuntimeError, functions.register, dummy)
        functions.register_name("other", dummy)
        assert set(functions) == {"dummy", "other"}

    def test_registry_unregister_info(self) -> None:
        functions: decorators.Registry[tp.Callable[[], int]] = decorators.Registry()
        functions.register_name("dummy", lambda: 1, info={"bounds": (-1.0, 1.0)})
        np.testing.assert_equal(functions.get_info("dummy"), {"bounds": (-1.0, 1.0)})
        assert repr(functions) == "Registry(['dummy'])"
        functions.unregister("dummy")
        functions.register_name("dummy", lambda: 2)
        np.testing.assert_equal(functions["dummy"](), 2)
        np.testing.assert_equal(functions.get_info("dummy"), {})
        with self.assertRaisesRegex(errors.SadeValueError, r"available: \['dummy'\]"):
            functions.get_info("blublu")
