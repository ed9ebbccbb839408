from brick.mq_producer import (
    DEFAULT_MAX_RETRY_TIMES,
    ProducerTrace,
    default_retry_time_interval,
    new_trace_md,
)
from brick.trace import Context, append_md_into_ctx, get_md_from_ctx


def test_default_intervals():
    assert [default_retry_time_interval(n) for n in range(1, 7)] == [1, 2, 4, 16, 60, 60]


def test_default_max_retry_times_intervals():
    intervals = [default_retry_time_interval(n) for n in range(1, DEFAULT_MAX_RETRY_TIMES + 1)]
    assert intervals == [1, 2]


def test_trace_string_without_error():
    md = new_trace_md("sms", None, "value: 1", 5)
    assert isinstance(md, ProducerTrace)
    assert md.module() == "rabbitmq-producer"
    assert str(md) == "module: rabbitmq-producer | type: sms | body: value: 1 | cost: 5"


def test_trace_string_with_error():
    md = new_trace_md("sms", RuntimeError("closed"), "b", 1)
    assert str(md).endswith(" | err: closed")


def test_trace_as_dict():
    md = new_trace_md("t", None, "body", 9)
    assert md.as_dict() == {"module": "rabbitmq-producer", "type": "t", "body": "body", "cost": 9, "err": ""}
    assert new_trace_md("t", ValueError("x"), "body", 9).as_dict()["err"] == "x"


def test_trace_goes_into_context_chain():
    ctx = Context()
    md = new_trace_md("t", None, "b", 0)
    assert append_md_into_ctx(ctx, md) is True
    assert get_md_from_ctx(ctx).get() == [md]