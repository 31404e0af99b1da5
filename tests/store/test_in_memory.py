"""Tests for the in memory store."""

import logging
import threading

import pytest

from memkv.entry import Entry
from memkv.exceptions import KeyNotFoundError, PatternError
from memkv.store import InMemoryStore, StoreEvent


SCENARIO = {
    "/app/db/pass": "foo",
    "/app/db/user": "admin",
    "/app/port": "443",
    "/app/upstream/host1": "x",
    "/app/upstream/host1/domain": "y",
}


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def scenario_store(store: InMemoryStore) -> InMemoryStore:
    for key, value in SCENARIO.items():
        store.set(key, value)
    return store


def test_set_and_get(store: InMemoryStore) -> None:
    """Test setting and retrieving an entry."""
    store.set("/myapp/database/username", "admin")
    assert store.get("/myapp/database/username") == Entry(
        "/myapp/database/username", "admin"
    )
    assert store.exists("/myapp/database/username")
    assert len(store) == 1


def test_set_overwrites(store: InMemoryStore) -> None:
    """Test that the last write to a key wins."""
    store.set("/app/port", "80")
    store.set("/app/port", "443")
    assert store.get("/app/port") == Entry("/app/port", "443")
    assert len(store) == 1


def test_empty_value(store: InMemoryStore) -> None:
    """Test that an empty value is stored and distinct from a missing key."""
    store.set("/app/empty", "")
    assert store.get("/app/empty") == Entry("/app/empty", "")
    assert store.exists("/app/empty")


def test_empty_key(store: InMemoryStore) -> None:
    """Test that an empty key is rejected."""
    with pytest.raises(ValueError, match="non-empty"):
        store.set("", "value")


def test_get_missing(store: InMemoryStore) -> None:
    """Test looking up a key that does not exist."""
    with pytest.raises(
        KeyNotFoundError, match="key does not exist: /missing/key"
    ) as exc_info:
        store.get("/missing/key")
    assert exc_info.value.key == "/missing/key"
    assert not store.exists("/missing/key")


def test_get_is_exact(store: InMemoryStore) -> None:
    """Test that exact lookups do not interpret patterns."""
    store.set("/app/db", "1")
    assert not store.exists("/app/*")
    with pytest.raises(KeyNotFoundError):
        store.get("/app/*")


def test_get_value(scenario_store: InMemoryStore) -> None:
    """Test retrieving a value with and without a default."""
    assert scenario_store.get_value("/app/port") == "443"
    assert scenario_store.get_value("/app/port", "80") == "443"
    assert scenario_store.get_value("/app/missing", "80") == "80"
    with pytest.raises(KeyNotFoundError):
        scenario_store.get_value("/app/missing")
    with pytest.raises(KeyNotFoundError):
        scenario_store.get_value("/app/missing", "")


def test_delete(scenario_store: InMemoryStore) -> None:
    """Test deleting a single key."""
    scenario_store.delete("/app/port")
    assert not scenario_store.exists("/app/port")
    with pytest.raises(KeyNotFoundError):
        scenario_store.get("/app/port")
    assert len(scenario_store) == 4

    # Deleting a missing key is a no-op
    scenario_store.delete("/app/port")
    assert len(scenario_store) == 4


def test_delete_is_exact(store: InMemoryStore) -> None:
    """Test that deleting a key does not interpret it as a pattern."""
    store.set("/a*", "1")
    store.set("/ab", "2")
    store.delete("/a*")
    assert not store.exists("/a*")
    assert store.exists("/ab")


def test_purge(scenario_store: InMemoryStore) -> None:
    """Test removing all entries."""
    scenario_store.purge()
    assert len(scenario_store) == 0
    assert not scenario_store.exists("/app/port")
    scenario_store.purge()
    assert len(scenario_store) == 0
    assert scenario_store.get_all("*") == []


def test_get_all(scenario_store: InMemoryStore) -> None:
    """Test glob matching in key order."""
    assert scenario_store.get_all("/app/db/*") == [
        Entry("/app/db/pass", "foo"),
        Entry("/app/db/user", "admin"),
    ]


def test_get_all_star_crosses_separator(scenario_store: InMemoryStore) -> None:
    """Test that a star matches across path segments."""
    result = scenario_store.get_all("/app/*")
    assert [entry.key for entry in result] == sorted(SCENARIO)
    assert scenario_store.get_all("/app/upstream/*") == [
        Entry("/app/upstream/host1", "x"),
        Entry("/app/upstream/host1/domain", "y"),
    ]


def test_get_all_no_match(scenario_store: InMemoryStore) -> None:
    """Test that no matches is an empty result rather than an error."""
    assert scenario_store.get_all("/other/*") == []


@pytest.mark.parametrize(("pattern"), ["[]a]", "/app/[db", "/app/\\"])
def test_get_all_malformed_pattern(
    scenario_store: InMemoryStore, pattern: str
) -> None:
    """Test that a malformed glob raises an error instead of matching nothing."""
    with pytest.raises(PatternError):
        scenario_store.get_all(pattern)


def test_get_all_values(store: InMemoryStore) -> None:
    """Test that values are sorted by value rather than by key."""
    store.set("/a", "zebra")
    store.set("/b", "apple")
    store.set("/c", "mango")
    assert [entry.value for entry in store.get_all("/*")] == ["zebra", "apple", "mango"]
    assert store.get_all_values("/*") == ["apple", "mango", "zebra"]
    assert store.get_all_values("/x/*") == []
    with pytest.raises(PatternError):
        store.get_all_values("[")


def test_get_all_regexp(scenario_store: InMemoryStore) -> None:
    """Test regex matching anywhere in the key."""
    assert scenario_store.get_all_regexp("db/(user|pass)") == [
        Entry("/app/db/pass", "foo"),
        Entry("/app/db/user", "admin"),
    ]
    assert scenario_store.get_all_regexp("host1$") == [
        Entry("/app/upstream/host1", "x"),
    ]
    assert scenario_store.get_all_regexp("^/other") == []


def test_get_all_regexp_malformed(scenario_store: InMemoryStore) -> None:
    """Test that a malformed regex raises an error."""
    with pytest.raises(PatternError):
        scenario_store.get_all_regexp("(db")


def test_list(scenario_store: InMemoryStore) -> None:
    """Test listing files and directories."""
    assert scenario_store.list_children("/app") == ["db", "port", "upstream"]
    assert scenario_store.list_children("/app/") == ["db", "port", "upstream"]
    assert scenario_store.list_children("/app/db") == ["pass", "user"]
    assert scenario_store.list_children("/app/port") == ["port"]
    assert scenario_store.list_children("/") == ["app"]


def test_list_dir(scenario_store: InMemoryStore) -> None:
    """Test listing directories only."""
    assert scenario_store.list_dir("/app") == ["db", "upstream"]
    assert scenario_store.list_dir("/app/db") == []
    assert scenario_store.list_dir("/app/upstream") == ["host1"]
    assert scenario_store.list_dir("/") == ["app"]


def test_list_sibling_prefix(store: InMemoryStore) -> None:
    """Test that keys sharing only a string prefix are not listed."""
    store.set("/a/b/c", "1")
    store.set("/a/bc/d", "2")
    assert store.list_children("/a/b") == ["c"]
    assert store.list_dir("/a") == ["b", "bc"]
    assert store.list_dir("/a/b") == []


def test_list_empty_store(store: InMemoryStore) -> None:
    """Test listing an empty store."""
    assert store.list_children("/app") == []
    assert store.list_dir("/app") == []


@pytest.mark.parametrize(
    ("path"), ["/", "/app", "/app/db", "/app/upstream", "/app/upstream/host1", "/x"]
)
def test_list_contains_list_dir(scenario_store: InMemoryStore, path: str) -> None:
    """Test that directories are always a subset of the full listing."""
    names = set(scenario_store.list_children(path))
    dirs = set(scenario_store.list_dir(path))
    assert names >= dirs
    prefix = path.rstrip("/")
    for name in names - dirs:
        if scenario_store.exists(path) and name == path.rsplit("/", 1)[-1]:
            # A key equal to the path lists its own base name
            continue
        key = f"{prefix}/{name}"
        assert scenario_store.exists(key)
        assert scenario_store.get_all(f"{key}/*") == []


def test_delete_all(scenario_store: InMemoryStore) -> None:
    """Test deleting all entries matching a glob."""
    assert scenario_store.delete_all("/app/db/*") == 2
    assert not scenario_store.exists("/app/db/pass")
    assert not scenario_store.exists("/app/db/user")
    assert scenario_store.list_children("/app") == ["port", "upstream"]
    assert scenario_store.delete_all("/app/db/*") == 0


def test_delete_all_malformed_pattern(scenario_store: InMemoryStore) -> None:
    """Test that a malformed glob deletes nothing."""
    with pytest.raises(PatternError):
        scenario_store.delete_all("[]a]")
    assert len(scenario_store) == len(SCENARIO)


def test_delete_all_regexp(scenario_store: InMemoryStore) -> None:
    """Test deleting all entries matching a regex."""
    assert scenario_store.delete_all_regexp("^/app/upstream/") == 2
    assert scenario_store.list_dir("/app") == ["db"]
    with pytest.raises(PatternError):
        scenario_store.delete_all_regexp("[")


def test_key_set_listener(store: InMemoryStore) -> None:
    """Test listening for writes."""
    events: list[Entry] = []
    remove = store.add_listener(StoreEvent.KEY_SET, events.append)
    store.set("/app/port", "443")
    assert events == [Entry("/app/port", "443")]
    remove()
    store.set("/app/port", "80")
    assert len(events) == 1
    # Removing twice is harmless
    remove()


def test_key_set_listener_flush(scenario_store: InMemoryStore) -> None:
    """Test that flushing replays existing entries in key order."""
    events: list[Entry] = []
    scenario_store.add_listener(StoreEvent.KEY_SET, events.append, flush=True)
    assert [entry.key for entry in events] == sorted(SCENARIO)


def test_key_set_listener_flush_during_writes(store: InMemoryStore) -> None:
    """Test that a flushed listener sees each concurrent write exactly once."""
    keys = [f"/k/{i}" for i in range(500)]
    events: list[Entry] = []
    started = threading.Event()

    def writer() -> None:
        for i, key in enumerate(keys):
            store.set(key, key)
            if i == 50:
                started.set()

    thread = threading.Thread(target=writer)
    thread.start()
    assert started.wait(timeout=30)
    store.add_listener(StoreEvent.KEY_SET, events.append, flush=True)
    thread.join(timeout=30)

    seen = [entry.key for entry in events]
    assert len(seen) == len(set(seen))
    assert sorted(seen) == sorted(keys)


def test_key_deleted_listener(scenario_store: InMemoryStore) -> None:
    """Test listening for removals."""
    events: list[Entry] = []
    scenario_store.add_listener(StoreEvent.KEY_DELETED, events.append)
    scenario_store.delete("/app/port")
    scenario_store.delete("/app/port")
    assert events == [Entry("/app/port", "443")]
    scenario_store.delete_all("/app/db/*")
    assert events[1:] == [
        Entry("/app/db/pass", "foo"),
        Entry("/app/db/user", "admin"),
    ]
    scenario_store.purge()
    assert len(events) == len(SCENARIO)


def test_listener_may_query_store(store: InMemoryStore) -> None:
    """Test that a listener runs outside the lock and can use the store."""
    seen: list[str] = []

    def on_set(entry: Entry) -> None:
        seen.append(store.get_value(entry.key))
        if entry.key == "/a":
            store.set("/b", "copy")

    store.add_listener(StoreEvent.KEY_SET, on_set)
    store.set("/a", "1")
    assert seen == ["1", "copy"]


def test_listener_failure(store: InMemoryStore, caplog: pytest.LogCaptureFixture) -> None:
    """Test that a failing listener does not affect the store or other listeners."""
    events: list[Entry] = []

    def fail(entry: Entry) -> None:
        raise RuntimeError("boom")

    store.add_listener(StoreEvent.KEY_SET, fail)
    store.add_listener(StoreEvent.KEY_SET, events.append)
    with caplog.at_level(logging.ERROR):
        store.set("/app/port", "443")
    assert store.exists("/app/port")
    assert events == [Entry("/app/port", "443")]
    assert "Store listener callback failed" in caplog.text


def test_concurrent_readers_and_writers(store: InMemoryStore) -> None:
    """Test that readers never observe a partially written entry."""
    errors: list[str] = []
    done = threading.Event()

    def writer(worker: int) -> None:
        for i in range(200):
            key = f"/k/{worker}/{i % 20}"
            store.set(key, key)
            if i % 7 == 0:
                store.delete(key)
        store.delete_all(f"/k/{worker}/1*")

    def reader() -> None:
        while not done.is_set():
            for entry in store.get_all("/k/*"):
                if entry.key != entry.value:
                    errors.append(f"Torn entry {entry}")
            keys = [entry.key for entry in store.get_all_regexp("^/k/")]
            if keys != sorted(keys):
                errors.append(f"Unsorted result {keys}")
            store.list_dir("/k")

    readers = [threading.Thread(target=reader) for _ in range(4)]
    writers = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for thread in readers + writers:
        thread.start()
    for thread in writers:
        thread.join(timeout=30)
    done.set()
    for thread in readers:
        thread.join(timeout=30)

    assert not any(thread.is_alive() for thread in readers + writers)
    assert errors == []
    for entry in store.get_all("*"):
        assert entry.key == entry.value
        assert not entry.key.startswith(tuple(f"/k/{n}/1" for n in range(4)))
