"""End-to-end tests for anything() and must_anything().

Critical Invariants:
- No mutable object is shared between original and copy
- Cycles terminate and point into the copy, not back at the original
- Aliasing in the input is preserved in the output
- Any unsupported value anywhere fails the whole copy
"""

import datetime
import io
import queue
import threading
from dataclasses import dataclass, field
from typing import Any

import pytest
from pydantic import BaseModel

from deepclone import (
    CopyResult,
    Kind,
    UnsupportedKindError,
    anything,
    must_anything,
    opaque,
)


@dataclass
class Foo:
    foo: "Foo | None" = None
    bar: int = 0


@dataclass
class Baz:
    text: str


@dataclass
class Holder:
    baz: Baz | None = None


class StringArray(list):
    pass


class Envelope(BaseModel):
    payload: Any = None


class Sized:
    def __new__(cls, size):
        instance = super().__new__(cls)
        instance.size = size
        return instance


@dataclass
class TimeHolder:
    t: datetime.datetime
    t_ptr: Foo | datetime.datetime | None = None
    history: list[datetime.datetime] = field(default_factory=list)


@pytest.mark.parametrize(
    "value",
    [
        '"Now cut that out!"',
        39,
        True,
        False,
        2.14,
        ["Phil Harris", "Rochester van Jones", "Mary Livingstone", "Dennis Day"],
        ("Jell-O", "Grape-Nuts"),
    ],
)
def test_simple_values(value):
    assert must_anything(value) == value


def test_map_of_pointers():
    x = {"foo": Foo(bar=1), "bar": Foo(bar=2)}

    y = must_anything(x)

    for key in ("foo", "bar"):
        assert y[key] is not x[key]
        assert y[key].foo is x[key].foo is None
        assert y[key].bar == x[key].bar


def test_interface_values():
    x = [None]

    y = must_anything(x)

    assert y == x
    assert len(y) == 1
    assert must_anything(None) is None


def test_avoid_infinite_loops():
    """CRITICAL: Self reference copies to a self reference of the copy."""
    x = Foo(bar=4)
    x.foo = x

    y = must_anything(x)

    assert x is not y
    assert x.foo is x
    assert y.foo is y


def test_aliasing_is_preserved():
    """Two paths to one object in the input lead to one object in the output."""
    shared = Foo(bar=1)
    tags = ["a"]
    x = {"left": shared, "right": shared, "tags": [tags, tags]}

    y = must_anything(x)

    assert y["left"] is y["right"]
    assert y["left"] is not shared
    assert y["tags"][0] is y["tags"][1]
    assert y["tags"][0] is not tags


def test_mutual_cycle_through_containers():
    a = Foo(bar=1)
    b = Foo(foo=a, bar=2)
    a.foo = b
    x = [a, b, {"a": a}]

    y = must_anything(x)

    assert y[0].foo is y[1]
    assert y[1].foo is y[0]
    assert y[2]["a"] is y[0]


def test_tuple_reached_through_a_cycle_terminates():
    """Tuples are never tracked; the lists inside them are."""
    inner: list = []
    outer = (inner,)
    inner.append(outer)

    y = must_anything(outer)

    assert y[0][0][0] is y[0]
    assert y[0] is not inner


def func():
    return None


@pytest.mark.parametrize("value", [func, {True: func}, [func], (1, Foo(foo=None, bar=func))])
def test_unsupported_kind(value):
    """CRITICAL: No partial copy when any part is uncopyable."""
    y, err = anything(value)

    assert y is None
    assert isinstance(err, UnsupportedKindError)
    assert err.kind is Kind.FUNC


def test_unsupported_kind_raises_on_must():
    with pytest.raises(UnsupportedKindError, match="FUNC"):
        must_anything(func)


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ({"q": queue.Queue()}, Kind.CHAN),
        (Foo(bar=threading.Lock()), Kind.HANDLE),  # type: ignore[arg-type]
        ((1, [io.StringIO()]), Kind.HANDLE),
        (Envelope(payload=func), Kind.FUNC),
        (Envelope(payload=[threading.Lock()]), Kind.HANDLE),
    ],
)
def test_unsupported_kind_nested_anywhere(value, kind):
    """CRITICAL: Channels and handles fail the copy wherever they sit, models included."""
    y, err = anything(value)

    assert y is None
    assert isinstance(err, UnsupportedKindError)
    assert err.kind is kind
    with pytest.raises(UnsupportedKindError):
        must_anything(value)


def test_unconstructible_value_is_returned_as_error():
    y, err = anything([Sized(3)])

    assert y is None
    assert isinstance(err, UnsupportedKindError)
    assert err.kind is Kind.INTERFACE


def test_model_contents_go_through_the_registry(registry):
    @opaque(registry=registry)
    @dataclass(frozen=True)
    class Money:
        amount: int

    registry[Baz] = lambda value, visited: Baz(value.text.upper())
    money = Money(5)
    original = Envelope(payload={"money": [money], "note": Baz("paid")})

    clone = must_anything(original, registry=registry)

    assert isinstance(clone, Envelope)
    assert clone is not original
    assert clone.payload is not original.payload
    assert clone.payload["money"] is not original.payload["money"]
    assert clone.payload["money"][0] is money
    assert clone.payload["note"] == Baz("PAID")


def test_result_reports_success():
    result = anything({"a": [1]})

    assert isinstance(result, CopyResult)
    assert result.ok
    assert result.error is None
    assert result.unwrap() == {"a": [1]}


def test_entry_points_agree():
    x = {"nodes": [Foo(bar=1), Foo(bar=2)], "when": datetime.date(2016, 1, 1)}

    assert must_anything(x) == anything(x).value == x


def test_copy_nil_value():
    s = Holder(baz=None)

    c, err = anything(s)

    assert err is None
    assert c == s
    assert c.baz is None


def test_nil_and_empty_are_distinct():
    assert must_anything(None) is None

    empty_list: list = []
    empty_dict: dict = {}
    assert must_anything(empty_list) == []
    assert must_anything(empty_list) is not empty_list
    assert must_anything(empty_dict) == {}
    assert must_anything(empty_dict) is not empty_dict


def test_custom_list_type():
    nil_array = None
    empty_array = StringArray()
    array = StringArray(["one", "two", "three"])

    assert must_anything(nil_array) is None

    empty_copy = must_anything(empty_array)
    assert empty_copy == empty_array
    assert type(empty_copy) is StringArray
    assert empty_copy is not empty_array

    array_copy = must_anything(array)
    assert array_copy == array
    assert type(array_copy) is StringArray


def test_time_type():
    """Registered leaves copy by value, without decomposition."""
    src = datetime.datetime(2016, 1, 1, 1, 0, 0, tzinfo=datetime.UTC)

    dst, err = anything(src)

    assert err is None
    assert isinstance(dst, datetime.datetime)
    assert dst == src
    assert dst is src


def test_time_nested_in_struct():
    a_time = datetime.datetime(2016, 1, 1, 1, 0, 0, tzinfo=datetime.UTC)
    another_time = a_time + datetime.timedelta(hours=24)
    src = TimeHolder(t=a_time, t_ptr=another_time, history=[a_time, another_time])

    dst = must_anything(src)

    assert dst == src
    assert dst is not src
    assert dst.history is not src.history
    assert dst.t_ptr is another_time
