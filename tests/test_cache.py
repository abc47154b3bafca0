from fuzzy.mamdani import mamdani_infer
from fuzzy.results import Metrics
from processing.cache import InferenceCache


def test_hits_and_misses(balanced_metrics):
    cache = InferenceCache()
    first = cache.get(balanced_metrics)
    second = cache.get(balanced_metrics)
    assert first is second
    assert (cache.hits, cache.misses) == (1, 1)
    assert len(cache) == 1


def test_nearby_metrics_share_an_entry():
    cache = InferenceCache(decimals=2)
    a = cache.get(Metrics(127.001, 50.0, 70.0, 10.0))
    b = cache.get(Metrics(126.999, 50.0, 70.0, 10.0))
    assert a is b
    assert a.metrics == Metrics(127.0, 50.0, 70.0, 10.0)


def test_cached_result_matches_fresh_inference():
    m = Metrics(93.456, 27.891, 41.5, 33.333)
    cache = InferenceCache(decimals=1)
    assert cache.get(m) == mamdani_infer(m.rounded(1))


def test_least_recently_used_is_evicted():
    calls = []

    def infer(metrics):
        calls.append(metrics)
        return metrics.brightness

    cache = InferenceCache(maxsize=2, infer=infer)
    m1, m2, m3 = (Metrics(b, 50.0, 50.0, 10.0) for b in (10.0, 20.0, 30.0))
    cache.get(m1)
    cache.get(m2)
    cache.get(m1)  # m2 is now the oldest
    cache.get(m3)
    assert len(cache) == 2
    cache.get(m1)
    assert len(calls) == 3
    cache.get(m2)
    assert len(calls) == 4


def test_clear(balanced_metrics):
    cache = InferenceCache()
    cache.get(balanced_metrics)
    cache.clear()
    assert len(cache) == 0
    cache.get(balanced_metrics)
    assert cache.misses == 2
