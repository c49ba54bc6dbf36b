import pytest

from zenlang.func_attr import FunctionAttribute


def test_naked_is_known():
    assert FunctionAttribute.map("naked") is FunctionAttribute.NAKED


@pytest.mark.parametrize("name", ["Naked", "inline", "", " naked"])
def test_unknown_names_map_to_none(name):
    assert FunctionAttribute.map(name) is None