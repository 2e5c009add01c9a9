import threading

from src.hris_admin.hris_admin.caching.local_cache import ATTENDANCE_COUNT, SUB_SECTIONS, USERS, LocalDataCache
from src.hris_admin.hris_admin.caching.ttl_cache import TTLCache
from src.hris_admin.hris_admin.core.constants import LOCAL_CACHE_TTL_SECONDS


def _loaders(**overrides):
    loaders = {
        SUB_SECTIONS: lambda: [{"id": 1}, {"id": 2}],
        USERS: lambda: [{"id": 7, "email": "a@b.c"}],
        ATTENDANCE_COUNT: lambda: 42,
    }
    loaders.update(overrides)
    return loaders


def test_initialize_loads_everything_then_marks_ready():
    cache = LocalDataCache(_loaders())
    assert cache.is_ready() is False

    assert cache.initialize() is True

    assert cache.is_ready() is True
    assert cache.sub_sections() == [{"id": 1}, {"id": 2}]
    assert cache.users() == [{"id": 7, "email": "a@b.c"}]
    assert cache.attendance_count() == 42
    status = cache.status()
    assert status["isInitialized"] is True
    assert status["subSectionsCount"] == 2
    assert status["usersCount"] == 1
    assert status["attendanceCount"] == 42


def test_loaders_run_in_parallel():
    barrier = threading.Barrier(2, timeout=5)

    def waits_for_peer():
        barrier.wait()
        return []

    cache = LocalDataCache({SUB_SECTIONS: waits_for_peer, USERS: waits_for_peer})

    assert cache.initialize() is True


def test_failed_loader_leaves_cache_not_ready():
    def boom():
        raise RuntimeError("db down")

    cache = LocalDataCache(_loaders(**{USERS: boom}))

    assert cache.initialize() is False
    assert cache.is_ready() is False
    assert cache.users() is None


def test_clear_resets_ready_flag():
    cache = LocalDataCache(_loaders())
    cache.initialize()

    cache.clear()

    assert cache.is_ready() is False
    assert cache.sub_sections() is None
    assert cache.status()["hasSubSections"] is False


def test_refresh_one_dataset_keeps_old_value_on_error():
    calls = {"n": 0}

    def flaky():
        calls["n"] += 1
        if calls["n"] > 1:
            raise RuntimeError("gone")
        return [{"id": 1}]

    cache = LocalDataCache(_loaders(**{SUB_SECTIONS: flaky}))
    cache.initialize()

    assert cache.refresh_sub_sections() is None
    assert cache.sub_sections() == [{"id": 1}]


def test_entries_lapse_after_thirty_minutes():
    now = [1000.0]
    cache = LocalDataCache(_loaders(), cache=TTLCache(LOCAL_CACHE_TTL_SECONDS, clock=lambda: now[0]))
    cache.initialize()

    now[0] += LOCAL_CACHE_TTL_SECONDS - 1
    assert cache.sub_sections() == [{"id": 1}, {"id": 2}]

    now[0] += 1
    assert cache.sub_sections() is None
    assert cache.users() is None
    assert cache.status()["subSectionsCount"] == 0

    assert cache.refresh_users() == [{"id": 7, "email": "a@b.c"}]
    assert cache.users() == [{"id": 7, "email": "a@b.c"}]
