import threading
import pytest
from sitecheck.core.errors import CoordinationError, CrawlAborted
from sitecheck.services.linkscan.frontier import Entry, Frontier
from sitecheck.services.linkscan.outcomes import Accessible

def test_claim_counts_in_flight_atomically():
    f = Frontier(workers=2)
    assert f.is_globally_done()
    f.enqueue("/a", "seed")
    assert not f.is_globally_done()

    entry = f.try_claim()
    assert entry == Entry("/a", "seed")
    # queue is empty now, but the claimed URL keeps the crawl alive
    assert f.try_claim() is None
    assert not f.is_globally_done()
    assert f.stats()["in_flight"] == 1

    f.finish(Accessible("seed", "http://example.test/a"))
    assert f.is_globally_done()

def test_visit_is_check_and_insert():
    f = Frontier(workers=16)
    barrier = threading.Barrier(16)
    wins = []
    lock = threading.Lock()

    def contend():
        barrier.wait()
        won = f.visit("http://example.test/shared")
        with lock:
            wins.append(won)

    threads = [threading.Thread(target=contend) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert wins.count(True) == 1
    assert wins.count(False) == 15

def test_visit_respects_limit():
    f = Frontier(workers=1, limit=2)
    assert f.visit("a") and f.visit("b")
    assert not f.visit("c")
    assert f.stats()["visited"] == 2

def test_counter_invariants_fail_loudly():
    f = Frontier(workers=1)
    with pytest.raises(CoordinationError):
        f.mark_done()
    f.mark_in_flight()
    with pytest.raises(CoordinationError):
        f.mark_in_flight()
    f.mark_done()
    assert f.is_globally_done()

def test_next_outcome_drains_then_ends():
    f = Frontier(workers=1)
    f.enqueue("/a", "seed")
    f.try_claim()
    o = Accessible("seed", "http://example.test/a")
    f.finish(o)
    assert f.next_outcome() == o
    assert f.next_outcome() is None

def test_next_outcome_waits_while_work_is_in_flight():
    f = Frontier(workers=1)
    f.enqueue("/a", "seed")
    f.try_claim()
    with pytest.raises(TimeoutError):
        f.next_outcome(timeout=0.05)

    o = Accessible("seed", "http://example.test/a")
    threading.Timer(0.05, f.finish, args=(o,)).start()
    assert f.next_outcome(timeout=2) == o
    assert f.next_outcome(timeout=2) is None

def test_claim_blocks_until_new_work_or_completion():
    f = Frontier(workers=2)
    f.enqueue("/a", "seed")
    assert f.try_claim() is not None

    got = []
    t = threading.Thread(target=lambda: got.append(f.claim()))
    t.start()
    t.join(0.05)
    assert t.is_alive()

    f.enqueue("/b", "/a")
    t.join(2)
    assert got == [Entry("/b", "/a")]

    f.finish()
    f.finish()
    assert f.claim() is None

def test_cancel_drops_pending_and_refuses_new_work():
    f = Frontier(workers=2)
    f.enqueue("/a", "seed")
    f.enqueue("/b", "seed")
    f.try_claim()
    f.cancel()
    assert f.cancelled
    assert f.stats()["pending"] == 0
    f.enqueue("/c", "/a")
    assert f.try_claim() is None
    assert f.claim() is None
    assert not f.is_globally_done()
    f.finish()
    assert f.is_globally_done()

def test_abort_surfaces_to_consumer():
    f = Frontier(workers=1)
    f.enqueue("/a", "seed")
    f.try_claim()
    boom = ValueError("boom")
    f.abort(boom)
    with pytest.raises(CrawlAborted) as exc:
        f.next_outcome()
    assert exc.value.__cause__ is boom
    assert f.claim() is None
