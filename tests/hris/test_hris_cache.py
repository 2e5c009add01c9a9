from src.hris_admin.hris_admin.caching.ttl_cache import TTLCache
from src.hris_admin.hris_admin.core.exceptions import UpstreamError
from src.hris_admin.hris_admin.hris.cache import HrisDataCache, split_hierarchy

HIERARCHY = [
    {"HIE_CODE": "10", "HIE_NAME": "Operations", "DEF_LEVEL": 3},
    {"HIE_CODE": "11", "HIE_NAME": "Finance", "DEF_LEVEL": "3"},
    {"HIE_CODE": "101", "HIE_NAME_4": "Yard", "DEF_LEVEL": 4},
    {"HIE_CODE": "1", "HIE_NAME": "Company", "DEF_LEVEL": 1},
]


class FakeClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.reads: list[str] = []

    def login(self):
        if self.fail:
            raise UpstreamError("HRIS down")
        return "token"

    def read_data(self, collection, filter_array=None, project="", paginate=False):
        self.reads.append(collection)
        if collection == "company_hierarchy":
            return list(HIERARCHY)
        if collection == "employee":
            return [{"EMP_NUMBER": "E1"}, {"EMP_NUMBER": "E2"}]
        return [{"collection": collection}]

    def has_valid_token(self):
        return not self.fail


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_split_hierarchy_accepts_int_and_str_levels():
    divisions, sections = split_hierarchy(HIERARCHY)

    assert [d["HIE_CODE"] for d in divisions] == ["10", "11"]
    assert [s["HIE_CODE"] for s in sections] == ["101"]


def test_initialize_populates_cache():
    cache = HrisDataCache(FakeClient())

    assert cache.initialize() is True
    assert cache.is_ready() is True
    assert len(cache.divisions()) == 2
    assert len(cache.sections()) == 1
    assert len(cache.employees()) == 2
    assert cache.status()["divisionsCount"] == 2


def test_initialize_failure_is_not_ready():
    cache = HrisDataCache(FakeClient(fail=True))

    assert cache.initialize() is False
    assert cache.is_ready() is False
    assert cache.divisions() is None


def test_divisions_rederived_from_hierarchy_when_derived_entry_missing():
    cache = HrisDataCache(FakeClient())
    cache.initialize()

    cache.clear("divisions")

    assert [d["HIE_CODE"] for d in cache.divisions()] == ["10", "11"]


def test_get_cached_or_fetch_hits_upstream_once_per_filter():
    client = FakeClient()
    cache = HrisDataCache(client, cache=TTLCache(60, clock=FakeClock()))

    cache.get_cached_or_fetch("designation", {"b": 1, "a": 2})
    cache.get_cached_or_fetch("designation", {"a": 2, "b": 1})
    cache.get_cached_or_fetch("designation", {"a": 3})

    assert client.reads == ["designation", "designation"]


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = HrisDataCache(FakeClient(), cache=TTLCache(1800, clock=clock))
    cache.initialize()

    clock.now += 1800

    assert cache.employees() is None
    assert cache.divisions() is None
