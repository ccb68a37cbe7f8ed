"""
Unit tests for the registry store.
"""

import json

import pytest

from plugsuite.core.errors import MalformedRegistryError
from plugsuite.core.registry import (
    Author,
    PluginRecord,
    Registry,
    VersionEntry,
    load_registry_file,
)
from plugsuite.core.result import Absent, Found


PREVIOUS = {
    "plugins": [
        {
            "id": "x",
            "name": "X Plugin",
            "short_description": "Short",
            "long_description": "Long",
            "category": "Layout",
            "license": "Apache 2.0",
            "authors": [{"name": "Jane", "email": None, "link": None}],
            "last_update": "May 1, 2025",
            "readme": None,
            "images": None,
            "homepage": None,
            "sourcecode": None,
            "downloads": 42,
            "versions": {
                "1.0": {"last_update": "May 1, 2025", "url": "1.0/x-2.0.0.nbm", "plugin_version": "2.0.0"}
            },
        },
        {"id": "y", "versions": None},
    ]
}


# --- Load ---

def test_load_none_is_empty_registry():
    assert Registry.load(None).plugins == []


def test_load_blank_is_empty_registry():
    assert Registry.load("  \n").plugins == []


def test_load_previous_snapshot():
    registry = Registry.load(json.dumps(PREVIOUS))

    assert [p.id for p in registry.plugins] == ["x", "y"]
    x = registry.plugins[0]
    assert x.authors == [Author(name="Jane")]
    assert x.versions["1.0"].plugin_version == "2.0.0"
    assert registry.plugins[1].versions == {}


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"plugins": null}',
        '{"plugins": [{"name": "missing id"}]}',
        '{"plugins": [{"id": "x", "versions": {"1.0": "oops"}}]}',
    ],
)
def test_load_malformed(text):
    with pytest.raises(MalformedRegistryError, match="Error while reading previous registry"):
        Registry.load(text)


def test_load_registry_file_missing(tmp_path):
    registry = load_registry_file(tmp_path / "plugins.json")
    assert registry.plugins == []


def test_load_registry_file(tmp_path):
    path = tmp_path / "plugins.json"
    path.write_text(json.dumps(PREVIOUS))

    registry = load_registry_file(path)
    assert len(registry.plugins) == 2


# --- Lookup ---

def test_find_by_id_found():
    registry = Registry.load(json.dumps(PREVIOUS))
    lookup = registry.find_by_id("y")

    assert isinstance(lookup, Found)
    assert lookup.is_found()
    assert lookup.index == 1
    assert lookup.value.id == "y"


def test_find_by_id_absent():
    lookup = Registry().find_by_id("nope")

    assert isinstance(lookup, Absent)
    assert not lookup.is_found()
    with pytest.raises(LookupError):
        lookup.unwrap()


def test_find_by_id_first_match_wins():
    registry = Registry(plugins=[PluginRecord(id="x", name="first"), PluginRecord(id="x", name="second")])
    assert registry.find_by_id("x").unwrap().name == "first"


def test_version_for():
    record = PluginRecord(id="x", versions={"1.0": VersionEntry(plugin_version="2.0.0")})

    assert record.version_for("1.0").unwrap().plugin_version == "2.0.0"
    assert isinstance(record.version_for("1.1"), Absent)


# --- Upsert ---

def test_upsert_existing_keeps_fields_and_position():
    registry = Registry.load(json.dumps(PREVIOUS))

    def build(record):
        assert record.name == "X Plugin"
        record.category = "Metric"
        return record

    stored = registry.upsert("x", build)

    assert stored.category == "Metric"
    assert stored.license == "Apache 2.0"
    assert [p.id for p in registry.plugins] == ["x", "y"]


def test_upsert_new_appends_fresh_record():
    registry = Registry.load(json.dumps(PREVIOUS))
    received = []

    def build(record):
        received.append(record)
        record.name = "Z"
        return record

    registry.upsert("z", build)

    assert received[0].id == "z"
    assert received[0].versions == {}
    assert [p.id for p in registry.plugins] == ["x", "y", "z"]


# --- Serialize ---

def test_serialize_keeps_null_fields():
    data = json.loads(Registry(plugins=[PluginRecord(id="x")]).to_json())
    plugin = data["plugins"][0]

    for key in (
        "name", "short_description", "long_description", "category", "license",
        "authors", "last_update", "readme", "images", "homepage", "sourcecode",
    ):
        assert key in plugin
        assert plugin[key] is None
    assert plugin["versions"] == {}


def test_serialize_round_trip_preserves_unknown_fields_and_history():
    registry = Registry.load(json.dumps(PREVIOUS))
    data = json.loads(registry.to_json())

    assert data["plugins"][0]["downloads"] == 42
    assert data["plugins"][0]["versions"]["1.0"] == PREVIOUS["plugins"][0]["versions"]["1.0"]


def test_serialize_is_deterministic():
    registry = Registry.load(json.dumps(PREVIOUS))
    assert registry.to_json() == Registry.load(registry.to_json()).to_json()


def test_save(tmp_path):
    path = tmp_path / "site" / "plugins.json"
    Registry(plugins=[PluginRecord(id="x", name="Ünïcode")]).save(path)

    assert path.exists()
    assert "Ünïcode" in path.read_text(encoding="utf-8")
    assert load_registry_file(path).plugins[0].name == "Ünïcode"
