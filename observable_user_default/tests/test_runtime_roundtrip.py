"""
Round-trip tests that execute the generated Python accessors against the
runtime helpers and an in-memory store.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum

import pytest
from dataclasses_json import dataclass_json

from observable_user_default.pipeline import GeneratorConfig, PipelineGenerator
from observable_user_default.runtime import (
    InMemoryStore,
    ShelveStore,
    case_for_raw_value,
    decode_json,
    encode_json,
    has_raw_value,
    is_raw_representable,
)


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"


class Level(Enum):
    LOW = 1
    HIGH = 2


class Mixed(Enum):
    NAME = "name"
    NUMBER = 3


@dataclass_json
@dataclass
class Profile:
    name: str
    tags: list[str] = field(default_factory=list)


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Placement:
    origin: Point
    label: str
    waypoints: list[Point] = field(default_factory=list)


DECLARATIONS = """
@ObservableUserDefault
var count: Int = 0
var nickname: String?
var lastOpened: NSDate?
var ratio: NSNumber = 0.5
var payload: Data?
var isEnabled: Bool = false
var theme: Theme = Theme.LIGHT
var level: Level = Level.LOW
var mixed: Mixed?
var profile: Profile?
var origin: Point = Point(0, 0)
var recent: [String] = []
var scores: [String: Int] = [:]
var weights: [String: Double]?
var route: [Point] = []
var placement: Placement?
var retries: Optional<Int> = 3
@ObservableUserDefault("settings.volume") var volume: Int = 5
"""


def build_settings_class(config=None):
    """Generate a module for DECLARATIONS and execute it."""
    code = PipelineGenerator(config or GeneratorConfig(), "python").generate_module(DECLARATIONS, "Settings")
    namespace = {
        "Theme": Theme,
        "Level": Level,
        "Mixed": Mixed,
        "Profile": Profile,
        "Point": Point,
        "Placement": Placement,
    }
    exec(compile(code, "<generated>", "exec"), namespace)
    return namespace["Settings"]


@pytest.fixture(scope="module")
def settings_class():
    return build_settings_class()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def settings(settings_class, store):
    return settings_class(store)


class TestDirectStorage:
    def test_defaults_when_store_is_empty(self, settings):
        assert settings.count == 0
        assert settings.nickname is None
        assert settings.lastOpened is None
        assert settings.ratio == 0.5
        assert settings.isEnabled is False

    def test_round_trip(self, settings, store):
        now = datetime.datetime(2024, 5, 1, 12, 30)
        settings.count = 3
        settings.nickname = "Bob"
        settings.lastOpened = now
        settings.payload = b"\x00\x01"

        assert settings.count == 3
        assert settings.nickname == "Bob"
        assert settings.lastOpened == now
        assert settings.payload == b"\x00\x01"
        assert store.value("count") == 3

    def test_wrong_stored_type_falls_back_to_default(self, settings, store):
        store.set("three", "count")
        store.set(42, "nickname")

        assert settings.count == 0
        assert settings.nickname is None

    def test_setting_none_removes_key(self, settings, store):
        settings.nickname = "Bob"
        settings.nickname = None

        assert "nickname" not in store
        assert settings.nickname is None

    def test_custom_store_key(self, settings, store):
        settings.volume = 8

        assert store.value("settings.volume") == 8
        assert "volume" not in store
        assert settings.volume == 8


class TestEncodedStorage:
    def test_string_enum_round_trip(self, settings, store):
        assert settings.theme is Theme.LIGHT

        settings.theme = Theme.DARK

        assert store.value("theme") == "dark"
        assert settings.theme is Theme.DARK

    def test_int_enum_round_trip(self, settings, store):
        settings.level = Level.HIGH

        assert store.value("level") == 2
        assert settings.level is Level.HIGH

    def test_unknown_raw_value_falls_back_to_default(self, settings, store):
        store.set("sepia", "theme")

        assert settings.theme is Theme.LIGHT

    def test_mixed_enum_is_json_encoded(self, settings, store):
        settings.mixed = Mixed.NUMBER

        assert store.value("mixed") == b"3"
        assert settings.mixed is Mixed.NUMBER

    def test_dataclass_json_round_trip(self, settings, store):
        profile = Profile(name="Ada", tags=["admin", "ops"])
        settings.profile = profile

        assert isinstance(store.value("profile"), bytes)
        assert settings.profile == profile

    def test_plain_dataclass_round_trip(self, settings):
        settings.origin = Point(3, 4)

        assert settings.origin == Point(3, 4)

    def test_collection_round_trip(self, settings):
        assert settings.recent == []

        settings.recent = ["a", "b"]

        assert settings.recent == ["a", "b"]

    def test_nested_dataclass_round_trip(self, settings, store):
        placement = Placement(origin=Point(1, 2), label="home", waypoints=[Point(3, 4), Point(5, 6)])
        settings.placement = placement

        assert store.value("placement") == (
            b'{"origin": {"x": 1, "y": 2}, "label": "home", "waypoints": [{"x": 3, "y": 4}, {"x": 5, "y": 6}]}'
        )
        assert settings.placement == placement
        assert isinstance(settings.placement.origin, Point)

    def test_list_of_dataclasses_round_trip(self, settings):
        settings.route = [Point(0, 1), Point(2, 3)]

        assert settings.route == [Point(0, 1), Point(2, 3)]
        assert all(isinstance(point, Point) for point in settings.route)

    def test_dictionary_round_trip(self, settings, store):
        assert settings.scores == {}

        settings.scores = {"a": 1, "b": 2}
        settings.weights = {"x": 0.5}

        assert store.value("scores") == b'{"a": 1, "b": 2}'
        assert settings.scores == {"a": 1, "b": 2}
        assert settings.weights == {"x": 0.5}

    def test_container_shape_mismatch_falls_back_to_default(self, settings, store):
        store.set(b'["a", "b"]', "scores")
        store.set(b'{"a": 1}', "recent")
        store.set(b"[1, 2]", "placement")

        assert settings.scores == {}
        assert settings.recent == []
        assert settings.placement is None

    def test_generic_optional_round_trip(self, settings, store):
        assert settings.retries == 3

        settings.retries = 5

        assert store.value("retries") == b"5"
        assert settings.retries == 5

    def test_undecodable_blob_falls_back_to_default(self, settings, store):
        store.set(b"not json", "origin")
        store.set(b"{broken", "profile")

        assert settings.origin == Point(0, 0)
        assert settings.profile is None

    def test_unencodable_value_stores_nothing(self, settings, store):
        settings.recent = ["a"]
        settings.recent = [object()]

        assert "recent" not in store
        assert settings.recent == []


class TestObservation:
    def test_access_is_tracked(self, settings):
        with settings.track_access() as accessed:
            settings.count
            settings.theme

        assert accessed == {"count", "theme"}

    def test_mutation_notifies_observers(self, settings):
        changes = []
        settings.observe("count", changes.append)

        settings.count = 1
        settings.nickname = "Bob"

        assert changes == ["count"]

    def test_observers_see_the_new_value(self, settings):
        seen = []
        settings.observe("theme", lambda key: seen.append(settings.theme))

        settings.theme = Theme.DARK

        assert seen == [Theme.DARK]


def test_configured_store_expression():
    settings_class = build_settings_class(GeneratorConfig(store_expression="self.defaults"))

    class Settings(settings_class):
        def __init__(self, defaults):
            super().__init__(InMemoryStore())
            self.defaults = defaults

    defaults = InMemoryStore()
    settings = Settings(defaults)
    settings.count = 7

    assert defaults.value("count") == 7
    assert "count" not in settings.store


def test_shelve_store_persists(tmp_path):
    filename = str(tmp_path / "defaults")
    settings_class = build_settings_class()

    settings_class(ShelveStore(filename)).theme = Theme.DARK

    assert settings_class(ShelveStore(filename)).theme is Theme.DARK


class TestRuntimeHelpers:
    def test_raw_representable(self):
        assert is_raw_representable(Theme, str)
        assert not is_raw_representable(Theme, int)
        assert is_raw_representable(Level, int)
        assert not is_raw_representable(Mixed, str)
        assert not is_raw_representable(Mixed, int)
        assert not is_raw_representable(list[str], str)
        assert not is_raw_representable(Profile, str)

    def test_bool_is_not_an_integer_raw_value(self):
        assert case_for_raw_value(Level, int, True) is None
        assert case_for_raw_value(Level, int, 1) is Level.LOW

    def test_has_raw_value(self):
        assert has_raw_value(Theme.DARK, str)
        assert not has_raw_value("dark", str)
        assert not has_raw_value(Level.LOW, str)

    def test_json_helpers(self):
        assert encode_json({"a": 1}) == b'{"a": 1}'
        assert encode_json(object()) is None
        assert decode_json(dict[str, int], b'{"a": 1}') == {"a": 1}
        assert decode_json(list[str], b'{"a": 1}') is None
        assert decode_json(Profile, "not bytes") is None
