#!/usr/bin/env python3
"""
Test the load and store subsystems: loading strategies, lookups and the decode cache.
"""

import json
import os

import pytest
import requests

from bundle import build_bundle, save_bundle, bundle_to_json, Entry
from codec import pack_bytes, DecodeError
from load import load_bundle, parse_bundle, parse_bundle_text, LoadStrategy, ParseError, FetchError
from store import BundleStore, NotLoadedError, NotFoundError


TARGET_FILE = "test/test_files/test1.txt"
MISSING_FILE = "test/test_files/nonexistent.txt"


@pytest.fixture
def bundle_file(sample_tree):
    bundle = build_bundle(os.getcwd(), os.path.join("test", "test_files"), [".txt"])
    path = os.path.join("test", "test_bundle.json")
    save_bundle(bundle, path)
    return path


def text_entry(text, last_modified=0):
    return Entry(content=pack_bytes(text.encode("utf-8")), content_type="text/plain; charset=UTF-8", last_modified=last_modified)


# ============================================================
# Lookups
# ============================================================

def test_get_existing_file(bundle_file):
    store = BundleStore.load("./" + bundle_file)
    entry = store.get(TARGET_FILE)

    with open(TARGET_FILE, "r", encoding="utf-8", newline="") as f:
        original = f.read()
    assert entry == Entry(
        content=original,
        content_type="text/plain; charset=UTF-8",
        last_modified=os.stat(TARGET_FILE).st_mtime_ns // 1_000_000,
    )


def test_get_missing_file(bundle_file):
    store = BundleStore.load("./" + bundle_file)
    with pytest.raises(NotFoundError, match="Requested file not found in bundle."):
        store.get(MISSING_FILE)


def test_not_found_is_key_error(bundle_file):
    store = BundleStore.load(bundle_file)
    with pytest.raises(KeyError):
        store.get(MISSING_FILE)


def test_has(bundle_file):
    store = BundleStore.load(bundle_file)
    assert store.has(TARGET_FILE) is True
    assert store.has(MISSING_FILE) is False
    assert TARGET_FILE in store
    assert len(store) == 3


def test_has_is_idempotent(bundle_file):
    store = BundleStore.load(bundle_file)
    assert store.has(TARGET_FILE) == store.has(TARGET_FILE)
    assert store.has(MISSING_FILE) == store.has(MISSING_FILE)
    assert store.paths() == [
        "test/test_files/test1.txt",
        "test/test_files/test2.txt",
        "test/test_files/test3.txt",
    ]


def test_operations_before_load():
    store = BundleStore()
    assert store.is_loaded is False
    assert store.has(TARGET_FILE) is False
    assert store.paths() == []
    assert len(store) == 0

    with pytest.raises(NotLoadedError, match="No bundle loaded."):
        store.get(TARGET_FILE)
    with pytest.raises(NotLoadedError):
        store.preload()
    with pytest.raises(NotLoadedError):
        store.restore("anywhere")


def test_get_is_memoized():
    store = BundleStore({"a.txt": text_entry("alpha")})
    first = store.get("a.txt")
    assert store.get("a.txt") is first
    assert first.content == "alpha"


def test_corrupt_entry_raises_decode_error():
    store = BundleStore({"bad.txt": Entry(content="%%%", content_type="text/plain", last_modified=0)})
    assert store.has("bad.txt")
    with pytest.raises(DecodeError):
        store.get("bad.txt")


def test_preload_decodes_everything():
    store = BundleStore({"a.txt": text_entry("alpha"), "b.txt": text_entry("beta")})
    store.preload()
    assert store.get("a.txt").content == "alpha"
    assert store.get("b.txt").content == "beta"


def test_preload_fails_fast_on_corrupt_entry():
    store = BundleStore({
        "a.txt": text_entry("alpha"),
        "bad.txt": Entry(content="AAAA", content_type="text/plain", last_modified=0),
    })
    with pytest.raises(DecodeError):
        store.preload()


def test_reload_replaces_bundle_and_cache(tmp_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    save_bundle({"page.txt": text_entry("old"), "gone.txt": text_entry("x")}, first)
    save_bundle({"page.txt": text_entry("new")}, second)

    store = BundleStore.load(first)
    assert store.get("page.txt").content == "old"
    assert store.get("gone.txt").content == "x"

    store.import_bundle(second, "local")
    assert store.get("page.txt").content == "new"
    assert not store.has("gone.txt")
    with pytest.raises(NotFoundError):
        store.get("gone.txt")


def test_use_in_memory_bundle(sample_tree):
    store = BundleStore()
    store.use(build_bundle(sample_tree, "test/test_files", [".txt"]))
    assert store.get(TARGET_FILE).content == "Hello from test file one.\n"


# ============================================================
# Loading
# ============================================================

def test_import_local(bundle_file):
    store = BundleStore()
    store.import_bundle(bundle_file, "local")
    assert store.has(TARGET_FILE)


def test_load_local_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_bundle(tmp_path / "missing.json")


def test_load_local_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ParseError):
        load_bundle(path)


@pytest.mark.parametrize("data", [
    [],
    "string",
    {"a.txt": "content"},
    {"a.txt": {"content": "x", "contentType": "text/plain"}},
    {"a.txt": {"content": "x", "contentType": "text/plain", "lastModified": 1, "extra": 1}},
    {"a.txt": {"content": 1, "contentType": "text/plain", "lastModified": 1}},
    {"a.txt": {"content": "x", "contentType": None, "lastModified": 1}},
    {"a.txt": {"content": "x", "contentType": "text/plain", "lastModified": "1"}},
    {"a.txt": {"content": "x", "contentType": "text/plain", "lastModified": True}},
])
def test_parse_bundle_rejects_wrong_shape(data):
    with pytest.raises(ParseError):
        parse_bundle(data)


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_last_modified_is_parse_error(tmp_path, literal):
    text = '{"a.txt": {"content": "AAAA", "contentType": "text/plain", "lastModified": %s}}' % literal
    with pytest.raises(ParseError, match="finite"):
        parse_bundle_text(text)

    path = tmp_path / "bundle.json"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ParseError):
        load_bundle(path)


def test_non_finite_last_modified_from_remote_is_parse_error(monkeypatch):
    payload = {"a.txt": {"content": "AAAA", "contentType": "text/plain", "lastModified": float("nan")}}
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: FakeResponse(200, payload))
    with pytest.raises(ParseError):
        load_bundle("https://example.com/bundle.json", "fetch")


def test_parse_bundle_accepts_empty_object():
    assert parse_bundle({}) == {}


def test_load_strategy_names():
    assert LoadStrategy("local") is LoadStrategy.LOCAL
    assert LoadStrategy("fetch") is LoadStrategy.REMOTE
    assert LoadStrategy("import") is LoadStrategy.MODULE
    assert LoadStrategy("remote") is LoadStrategy.REMOTE
    with pytest.raises(ValueError):
        LoadStrategy("ftp")


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON")
        return self._payload


def test_import_remote(monkeypatch):
    payload = bundle_to_json({"index.txt": text_entry("remote text", 1234)})
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return FakeResponse(200, payload)

    monkeypatch.setattr(requests, "get", fake_get)

    store = BundleStore.load("https://example.com/bundle.json", "fetch")
    entry = store.get("index.txt")
    assert entry.content == "remote text"
    assert entry.last_modified == 1234
    assert calls == [("https://example.com/bundle.json", 30)]


def test_import_remote_http_error(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: FakeResponse(404))

    with pytest.raises(FetchError, match="404") as excinfo:
        BundleStore.load("https://example.com/missing.json", LoadStrategy.REMOTE)
    assert "https://example.com/missing.json" in str(excinfo.value)


def test_import_remote_network_error(monkeypatch):
    def fake_get(url, timeout=None):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "get", fake_get)

    with pytest.raises(FetchError, match="connection refused"):
        load_bundle("https://example.com/bundle.json", "fetch")


def test_import_remote_invalid_body(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: FakeResponse(200))
    with pytest.raises(ParseError):
        load_bundle("https://example.com/bundle.json", "fetch")


def test_import_module(tmp_path, monkeypatch):
    package = tmp_path / "bundled_assets_fixture"
    (package / "data").mkdir(parents=True)
    (package / "__init__.py").write_text("", encoding="utf-8")
    payload = bundle_to_json({"style.css": text_entry("body { color: red }")})
    (package / "data" / "bundle.json").write_text(json.dumps(payload), encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    store = BundleStore.load("bundled_assets_fixture:data/bundle.json", "import")
    assert store.get("style.css").content == "body { color: red }"

    store = BundleStore.load("bundled_assets_fixture/data/bundle.json", LoadStrategy.MODULE)
    assert store.has("style.css")


def test_import_module_missing_package():
    with pytest.raises(ModuleNotFoundError):
        load_bundle("no_such_package_for_bundles:bundle.json", "import")
