import re
import uuid

import pytest

from brick import trace
from brick.trace import (
    KEY_TRACE_ID,
    Chain,
    Context,
    UUIDTraceIDGenerator,
    append_md_into_ctx,
    gen_trace_id,
    get_md_from_ctx,
    get_trace_id,
    new_chain,
    new_md,
    replace_trace_id_generator,
    set_trace_id,
)

TEST_MOD_1 = "test_mod 1"
TEST_MOD_2 = "test_mod 2"


@pytest.fixture
def restore_generator():
    yield
    replace_trace_id_generator(UUIDTraceIDGenerator())


def test_default_md():
    md = new_md(TEST_MOD_1, "test metadata 1")
    assert md.module() == TEST_MOD_1
    assert "test metadata 1" in str(md)
    assert str(md) == "module: test_mod 1, value: test metadata 1"


def test_default_md_as_dict():
    md = new_md(TEST_MOD_1, "test metadata 1")
    assert md.as_dict() == {"module": "test_mod 1", "value": "test metadata 1"}


def test_default_chain():
    md1 = new_md(TEST_MOD_1, "test metadata 1")
    md2 = new_md(TEST_MOD_2, "test metadata 2")
    chain = new_chain()
    chain.append(md1, md2)
    chain.get()
    mds1 = chain.get()
    chain.clear()
    mds2 = chain.get()
    assert len(mds1) == 2
    assert mds1[0] is md1
    assert mds1[1] is md2
    assert len(mds2) == 0


def test_chain_string():
    chain = new_chain()
    chain.append(new_md(TEST_MOD_1, "test metadata 1"), new_md(TEST_MOD_2, "test metadata 2"))
    assert str(chain) == (
        "[1]{module: test_mod 1, value: test metadata 1} --> "
        "[2]{module: test_mod 2, value: test metadata 2}"
    )
    assert str(new_chain()) == ""


def test_chain_get_returns_copy():
    chain = new_chain()
    chain.append(new_md(TEST_MOD_1, "a"))
    items = chain.get()
    items.append(new_md(TEST_MOD_2, "b"))
    assert len(chain.get()) == 1


def test_metadata_list_log_form():
    chain = new_chain()
    chain.append(new_md(TEST_MOD_1, "test metadata 1"), new_md(TEST_MOD_2, "test metadata 2"))
    assert [md.as_dict() for md in chain.get()] == [
        {"module": "test_mod 1", "value": "test metadata 1"},
        {"module": "test_mod 2", "value": "test metadata 2"},
    ]


def test_trace_id():
    trace_id = gen_trace_id()
    assert re.fullmatch(r"[0-9a-f]{32}", trace_id)
    assert get_trace_id(Context()) == ""

    ctx1 = Context().with_value(KEY_TRACE_ID, trace_id)
    ctx2 = Context(ctx1)
    ctx3 = Context().set(KEY_TRACE_ID, trace_id)
    assert get_trace_id(ctx1) == trace_id
    assert get_trace_id(ctx2) == trace_id
    assert get_trace_id(ctx3) == trace_id

    ctx4 = set_trace_id(ctx3)
    assert get_trace_id(ctx4) != trace_id
    assert re.fullmatch(r"[0-9a-f]{32}", get_trace_id(ctx4))
    ctx5 = set_trace_id(ctx4, trace_id)
    assert get_trace_id(ctx5) == trace_id


def test_non_string_trace_id_reads_as_empty():
    ctx = Context().set(KEY_TRACE_ID, 12345)
    assert get_trace_id(ctx) == ""


def test_set_trace_id_rejects_non_context():
    with pytest.raises(TypeError):
        set_trace_id({}, "abc")


class _MyGenerator:
    def gen_trace_id(self):
        return "test_" + uuid.uuid1().hex


def test_replace_trace_id(restore_generator):
    replace_trace_id_generator(_MyGenerator())
    trace_id = gen_trace_id()
    assert trace_id.startswith("test_")
    ctx = set_trace_id(Context(), trace_id)
    assert get_trace_id(ctx) == trace_id
    assert get_trace_id(set_trace_id(Context())).startswith("test_")


def test_context_with_value_leaves_parent_untouched():
    parent = Context()
    child = parent.with_value("k", "v")
    assert child.get("k") == "v"
    assert parent.get("k") is None


def test_append_md_into_ctx_creates_and_extends_chain():
    ctx = Context()
    assert get_md_from_ctx(ctx) is None
    md1 = new_md(TEST_MOD_1, "one")
    md2 = new_md(TEST_MOD_2, "two")
    assert append_md_into_ctx(ctx, md1) is True
    assert append_md_into_ctx(ctx, md2) is True
    chain = get_md_from_ctx(ctx)
    assert isinstance(chain, Chain)
    assert chain.get() == [md1, md2]


def test_append_md_into_ctx_replaces_foreign_value():
    ctx = Context().set(trace.KEY_TRACE_CHAIN, "not a chain")
    md = new_md(TEST_MOD_1, "one")
    assert append_md_into_ctx(ctx, md) is True
    assert get_md_from_ctx(ctx).get() == [md]


def test_append_md_into_non_context_returns_false():
    assert append_md_into_ctx({}, new_md(TEST_MOD_1, "one")) is False