# tests/conftest.py
import pytest

from pyparsnip.Parsec import Reply


def assert_reply_eq(res1: Reply, res2: Reply):
    """
    Deep comparison of two Replies.
    """
    assert res1.status == res2.status, f"Status mismatch: {res1.status} != {res2.status}"
    if res1.status:
        assert res1.index == res2.index
        assert res1.value == res2.value
    assert res1.furthest == res2.furthest
    assert res1.expected == res2.expected


@pytest.fixture
def run_at():
    def _run(parser, input_data, index=0):
        return parser(input_data, index)

    return _run
