# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
from pathlib import Path
import numpy as np
from . import testing


@testing.parametrized(
    single=(3, 9),
    negative=(-2, 4),
    zero=(0, 0),
)
def test_parametrized(value: int, expected: int) -> None:
    assert value ** 2 == expected


def test_parametrized_ids() -> None:
    deco = testing.parametrized(b=(1, 2), a=(3, 4))
    assert deco.ids == ["a", "b"]
    assert deco.params == ((3, 4), (1, 2))


def test_printed_assert_equal() -> None:
    testing.printed_assert_equal(0, 0)
    np.testing.assert_raises(AssertionError, testing.printed_assert_equal, 0, 1)


def test_assert_markdown_links_not_broken() -> None:
    folder = Path(__file__).parents[2].expanduser().absolute()
    assert (folder / "README.md").exists(), f"Wrong root folder: {folder}"
    assert testing._get_all_markdown_links(folder), "There should be at least one hyperlink!"
    testing.assert_markdown_links_not_broken(folder)


def test_broken_markdown_link(tmp_path: Path) -> None:
    (tmp_path / "doc.md").write_text("See [here](missing.md) and [there](https://github.com)")
    links: tp.List[tp.Any] = testing._get_all_markdown_links(tmp_path)
    assert len(links) == 2
    np.testing.assert_raises(AssertionError, testing.assert_markdown_links_not_broken, tmp_path)
