import threading

import pytest

from searchads.engine import search_engine
from searchads.engine.search_engine import EngineState, SearchAdsEngine, get_instance


@pytest.fixture(autouse=True)
def reset_instance(monkeypatch):
    monkeypatch.setattr(search_engine, "_instance", None)


@pytest.fixture()
def count_ingestions(monkeypatch):
    calls = []
    real_ingest = search_engine.ingest

    def counting_ingest(*args, **kwargs):
        calls.append(args)
        return real_ingest(*args, **kwargs)

    monkeypatch.setattr(search_engine, "ingest", counting_ingest)
    return calls


def test_init_loads_ads_and_serves_queries(relational_store, index_store, ads_file):
    engine = SearchAdsEngine(relational_store, index_store, str(ads_file))
    report = engine.init()

    assert engine.state == EngineState.READY
    assert report.accepted == 3
    assert engine.budget_report.loaded == 0
    assert [ad.ad_id for ad in engine.select_ads("red")] == [7, 9]


def test_init_runs_ingestion_once(relational_store, index_store, ads_file, count_ingestions):
    engine = SearchAdsEngine(relational_store, index_store, str(ads_file))
    first = engine.init()
    second = engine.init()
    assert first is second
    assert len(count_ingestions) == 1


def test_queries_before_init_and_after_shutdown_are_empty(
    relational_store, index_store, ads_file
):
    engine = SearchAdsEngine(relational_store, index_store, str(ads_file))
    assert engine.select_ads("red") == []
    engine.init()
    assert engine.select_ads("red")
    engine.shutdown()
    assert engine.state == EngineState.SHUT_DOWN
    assert engine.select_ads("red") == []


def test_initialization_failure_is_logged_not_raised(relational_store, index_store, tmp_path):
    engine = SearchAdsEngine(relational_store, index_store, str(tmp_path / "missing.json"))
    assert engine.init() is None
    assert engine.state == EngineState.FAILED
    assert engine.init_error
    assert engine.select_ads("red") == []


def test_dedupe_option_is_passed_to_queries(relational_store, index_store, ads_file):
    engine = SearchAdsEngine(relational_store, index_store, str(ads_file), dedupe_results=True)
    engine.init()
    assert [ad.ad_id for ad in engine.select_ads("red shoes")] == [7, 9, 8]


def test_get_instance_ignores_later_arguments(
    relational_store, index_store, ads_file, tmp_path, count_ingestions
):
    first = get_instance(relational_store, index_store, str(ads_file))
    second = get_instance(None, None, str(tmp_path / "other.json"), "budget.json")

    assert first is second
    assert second.ads_data_path == str(ads_file)
    assert len(count_ingestions) == 1


def test_concurrent_first_calls_share_one_instance(
    relational_store, index_store, ads_file, count_ingestions
):
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(get_instance(relational_store, index_store, str(ads_file)))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r is results[0] for r in results)
    assert len(count_ingestions) == 1


def test_init_after_shutdown_does_nothing(relational_store, index_store, ads_file, count_ingestions):
    engine = SearchAdsEngine(relational_store, index_store, str(ads_file))
    engine.shutdown()
    assert engine.init() is None
    assert engine.state == EngineState.SHUT_DOWN
    assert count_ingestions == []
    assert engine.select_ads("red") == []
