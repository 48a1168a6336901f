"""
Runtime support for generated Python accessors.

Generated accessors import everything they use from this module: the
direct storage type names, the Observable base class providing the
access/mutation hooks, and the raw value and JSON helpers the encoded
strategy relies on. The stores here are reference implementations of the
key-value store the accessors are handed.
"""

from __future__ import annotations

import dataclasses
import datetime
import functools
import json
import logging
import numbers
import shelve
import types
import typing
from collections import defaultdict
from collections.abc import Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, Protocol

from dataclasses_json import dataclass_json

logger = logging.getLogger(__name__)

# Direct storage types, spelled the way declarations spell them
String = str
Int = int
Bool = bool
Data = bytes
NSDate = datetime.datetime
NSNumber = numbers.Number


class KeyValueStore(Protocol):
    """What generated accessors need from a store."""

    def value(self, key: str) -> Any: ...

    def set(self, value: Any, key: str) -> None: ...


class InMemoryStore:
    """Dictionary-backed store. Setting None removes the key."""

    def __init__(self, values: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(values or {})

    def value(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, value: Any, key: str) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._values


class ShelveStore:
    """Persistent store on top of a shelve database file."""

    def __init__(self, filename: str):
        self.filename = filename

    def value(self, key: str) -> Any:
        with shelve.open(self.filename) as db:
            return db.get(key)

    def set(self, value: Any, key: str) -> None:
        with shelve.open(self.filename) as db:
            if value is None:
                db.pop(key, None)
            else:
                db[key] = value

    def __contains__(self, key: str) -> bool:
        with shelve.open(self.filename) as db:
            return key in db


class Observable:
    """Base class for objects with store-backed, observable properties.

    `access` records reads for any active `track_access` block and
    `with_mutation` notifies observers of a property once the write inside
    it has completed.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._observers: dict[str, list[Callable[[str], None]]] = defaultdict(list)
        self._trackers: list[set[str]] = []

    def access(self, key: str) -> None:
        for accessed in self._trackers:
            accessed.add(key)

    @contextmanager
    def with_mutation(self, key: str) -> Iterator[None]:
        yield
        for callback in list(self._observers[key]):
            callback(key)

    def observe(self, key: str, callback: Callable[[str], None]) -> None:
        """Call `callback(key)` after every mutation of the property."""
        self._observers[key].append(callback)

    @contextmanager
    def track_access(self) -> Iterator[set[str]]:
        """Collect the names of the properties read inside the block."""
        accessed: set[str] = set()
        self._trackers.append(accessed)
        try:
            yield accessed
        finally:
            self._trackers.remove(accessed)


# Raw value bridging


def _is_enum_class(cls: Any) -> bool:
    return isinstance(cls, type) and not isinstance(cls, types.GenericAlias) and issubclass(cls, Enum)


def _is_raw(value: Any, raw_type: type) -> bool:
    # bool is an int subclass but never an integer raw value
    return isinstance(value, raw_type) and not (raw_type is int and isinstance(value, bool))


def is_raw_representable(cls: Any, raw_type: type) -> bool:
    """Check whether every case of an enum class has a raw value of `raw_type`."""
    if not _is_enum_class(cls):
        return False
    members = list(cls)
    return bool(members) and all(_is_raw(member.value, raw_type) for member in members)


def case_for_raw_value(cls: Any, raw_type: type, stored: Any) -> Any:
    """Return the case of `cls` whose raw value is `stored`, or None."""
    if not is_raw_representable(cls, raw_type) or not _is_raw(stored, raw_type):
        return None
    try:
        return cls(stored)
    except ValueError:
        return None


def has_raw_value(value: Any, raw_type: type) -> bool:
    """Check whether `value` is an enum case with a raw value of `raw_type`."""
    return isinstance(value, Enum) and is_raw_representable(type(value), raw_type)


# JSON blobs


@functools.cache
def _stored_value_type(cls: Any) -> Any:
    """A one-field dataclass_json wrapper, so any codable type decodes recursively."""
    return dataclass_json(dataclasses.make_dataclass("StoredValue", [("value", cls)]))


def _runtime_class(cls: Any) -> type | None:
    """The class values of `cls` are instances of, None for unions and special forms."""
    origin = typing.get_origin(cls) or cls
    if isinstance(origin, type) and origin is not types.UnionType:
        return origin
    return None


def _json_shape(cls: Any) -> type | None:
    """The JSON container a value of `cls` must be stored as, if any."""
    origin = _runtime_class(cls)
    if origin is None:
        return None
    if dataclasses.is_dataclass(origin) or issubclass(origin, Mapping):
        return dict
    if issubclass(origin, (list, tuple, set, frozenset)):
        return list
    return None


def encode_json(value: Any) -> bytes | None:
    """Encode a value as a JSON blob, or None when it cannot be encoded."""
    try:
        payload = _stored_value_type(Any)(value).to_dict(encode_json=True)["value"]
        text = json.dumps(payload)
    except (TypeError, ValueError) as e:
        logger.debug("Cannot encode %r as JSON: %s", value, e)
        return None
    return text.encode("utf-8")


def decode_json(cls: Any, stored: Any) -> Any:
    """Decode a JSON blob into `cls`, or None when it is absent or does not fit.

    Nested dataclasses, containers and enums are rebuilt by dataclasses_json.
    """
    if not isinstance(stored, bytes):
        return None
    try:
        payload = json.loads(stored)
        shape = _json_shape(cls)
        if shape is not None and not isinstance(payload, shape):
            return None
        value = _stored_value_type(cls).from_dict({"value": payload}).value
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        logger.debug("Cannot decode stored JSON as %r: %s", cls, e)
        return None
    origin = _runtime_class(cls)
    if origin is not None and not isinstance(value, origin):
        return None
    return value
