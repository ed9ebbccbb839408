# brick

Small building blocks for Python services. Everything is pure Python with no
dependencies outside the standard library.

## Modules

### `brick.sets`

- `SafeSet(*items)`: a set whose operations are guarded by a lock. Methods:
  `add`, `delete`, `has`, `contains` (returns the set of the given items that
  are present and whether any were), `clear`, `is_empty`, `to_list`, `clone`,
  `intersection_set`, `union_set` and `complement_set` (the items of the other
  set that are not in this one). It also supports `len()`, `in` and iteration.
- Functions over plain sets: `clone`, `from_list`, `to_list`, `to_safe_set`,
  `intersection_set`, `union_set` and `complement_set(a, b)` (items of `b` not
  in `a`).

### `brick.slices`

- `join(first, second)`, `joins(*sources)`, `combine(sources)`: concatenate
  into a new list.
- `remove_duplicates(src)`: keeps first occurrences, in order.
- `sort_numbers(src, desc=False)`, `sort_strings(src, desc=False)`: sort the
  list in place and return it.
- `to_uint64(src)`, `to_int64(src)`: return the integers as a new list,
  raising `TypeError` for non-integers and `ValueError` for values outside the
  64-bit range.

### `brick.maps`

- `keys(source)` and `values(source)` return the keys or values of a mapping
  as a new list.

### `brick.structs`

- `get_field_values(src, field_name, value_type=object)`: the value of one
  attribute from every object, in order.
- `get_field_values_ex(src, field_name, value_type=object)`: the same, with
  dotted paths such as `"outer.inner"` for nested objects.
- `get_field_map(src, field_name, key_type=object)`: groups the objects by the
  value of one attribute.

These raise `FieldAccessError` when an element is not an object with
attributes, when the field is missing, when a value is not an instance of the
expected type, or when the first element has a `can_convert()` method that
returns false. An empty list or empty field name gives an empty result.

### `brick.trace`

- `Context`: a key-value store with an optional parent; `get`, `set` (returns
  the context) and `with_value` (returns a new child context).
- Trace IDs: `gen_trace_id()` (a hex UUID4 by default), `set_trace_id(ctx,
  *trace_ids)`, `get_trace_id(ctx)` (empty string when unset) and
  `replace_trace_id_generator(gen)` for any object with a `gen_trace_id()`
  method. `UUIDTraceIDGenerator` is the default generator.
- Metadata chains: `Metadata` (abstract), `DefaultMetadata`, `new_md(module,
  value)`, `Chain` / `new_chain()` with `append`, `get`, `clear` and a
  `[1]{...} --> [2]{...}` string form, and `append_md_into_ctx(ctx, md)` /
  `get_md_from_ctx(ctx)` to keep a chain in a `Context`.

### `brick.stack`

- `take_stack(skip=0, depth=StacktraceDepth.FULL)` returns a `StackList` of
  `StackInfo(func, file, line)` frames, innermost first. `StacktraceDepth` has
  `FULL`, `FIRST` and `MAX` (ten frames). `str()` of a `StackList` is JSON.
- `trimmed_path(file)` keeps only the last directory and the file name.

### `brick.jsonutil`

- `marshal_to_string`, `marshal`, `marshal_indent(src, n)`: compact or
  indented JSON with sorted keys and `<`, `>`, `&` escaped.
- `unmarshal_from_string`, `unmarshal`: decode JSON.
- `get(data, *path)`: follow keys and array indexes; `None` if not found.
- `valid(data)`: whether the input is well-formed JSON.

Encoding and decoding failures raise `JSONError`.

### `brick.spinlock`

- `SpinLock`: `acquire`, `release`, `locked`, and use as a context manager.
  It spins with exponential back-off; releasing an unheld lock does nothing.

### `brick.mq_message`, `brick.mq_consumer`, `brick.mq_producer`

- `build_text_msg_for_publish(ctx, body, persistent, *priorities)` returns a
  `Publishing` with content type `text/plain`, delivery mode 2 when persistent
  (otherwise 0), and the context's trace ID as message id.
- `mq_consumer`: `Delivery`, `HandlerContext` (runs a chain of handlers with
  `handle` and `next`, passing exceptions through a recover function, by
  default `default_handler_recover`), `Counter`, `EventError` with the event
  codes `EVENT_CODE_ACK_FAIL`, `EVENT_CODE_NACK_FAIL` and
  `EVENT_CODE_RETRY_INFINITELY`, `RetryHandler` (`infinite_retry`,
  `exceeded_limit`, `clear_retried_times`, `clone_config`, `next_interval`),
  `default_retry_time_interval` (1, 5, 10, 30, then 60 seconds), and trace
  metadata `TraceItem`, `ConsumerTrace` and `new_trace_md`.
- `mq_producer`: `default_retry_time_interval` (1, 2, 4, 16, then 60
  seconds), `ProducerTrace` and `new_trace_md`.

## What this package does not do

The message-queue modules only build messages, run handler chains, decide on
retries and produce trace metadata. The package does not connect to a broker,
publish or consume messages, reconnect, or load configuration; it has no
logging setup of its own beyond the standard `logging` module, and no command
line.

## Installation

```
pip install .
```

## Example

```python
from brick.sets import SafeSet
from brick.trace import Context, set_trace_id, get_trace_id

a = SafeSet("111", "222", "333", "444")
b = SafeSet("222", "333", "444", "555")
print(sorted(a.intersection_set(b).to_list()))  # ['222', '333', '444']

ctx = set_trace_id(Context())
print(get_trace_id(ctx))
```

## Running the tests

```
pip install ".[test]"
pytest
```