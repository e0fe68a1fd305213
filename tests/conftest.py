"""Pytest configuration and fixtures."""

import copy
import itertools

import jsonpatch
import pytest

from shapediff import compile_differ, get_json_patch, identical, reverse, run_patch
from shapediff.errors import NonJsonValueError
from shapediff.validation import validate_json_value


def is_json(value) -> bool:
    """True when the value is plain JSON (no tuples, no non-string keys)."""
    try:
        encoded = validate_json_value(value, [])
    except NonJsonValueError:
        return False
    return encoded == value and _same_containers(encoded, value)


def _same_containers(a, b) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, list):
        return all(_same_containers(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return all(_same_containers(a[k], b[k]) for k in a)
    return True


@pytest.fixture
def check_laws():
    """
    Check the differ laws for every ordered pair of sample values.

    - differ(a, a) and differ(a, deepcopy(a)) are Identical
    - applying differ(from, to) to from yields to
    - applying the reversed patch to to yields from
    - reversing twice gives back the same patch
    - when both values are JSON and lowering succeeds, an independent
      RFC 6902 applier reproduces to from from
    """
    def check(shape, values):
        differ = compile_differ(shape)

        for value in values:
            assert differ(value, value).op == identical
            assert differ(value, copy.deepcopy(value)).op == identical

        for from_, to in itertools.product(values, repeat=2):
            patch = differ(from_, to)
            assert run_patch(patch)(from_) == to
            assert run_patch(reverse(patch))(to) == from_
            assert reverse(reverse(patch)) == patch

            result = get_json_patch(patch.op)
            if is_json(from_) and is_json(to) and result.success:
                patched = jsonpatch.apply_patch(
                    copy.deepcopy(from_), result.to_document()
                )
                assert patched == to

    return check
