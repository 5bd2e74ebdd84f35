import threading
from concurrent.futures import ThreadPoolExecutor

from contact_watchman.watchers.guard import ClaimSet


def test_claim_then_duplicate_refused():
    claims = ClaimSet()

    assert claims.try_claim("/in/a.csv") is True
    assert claims.try_claim("/in/a.csv") is False
    assert "/in/a.csv" in claims
    assert len(claims) == 1


def test_release_allows_new_claim():
    claims = ClaimSet()
    claims.try_claim("/in/a.csv")

    claims.release("/in/a.csv")

    assert "/in/a.csv" not in claims
    assert claims.try_claim("/in/a.csv") is True


def test_release_unclaimed_is_noop():
    claims = ClaimSet()

    claims.release("/in/never.csv")

    assert len(claims) == 0


def test_distinct_identifiers_independent():
    claims = ClaimSet()

    assert claims.try_claim("/in/a.csv")
    assert claims.try_claim("/in/b.csv")
    assert claims.snapshot() == frozenset({"/in/a.csv", "/in/b.csv"})


def test_concurrent_duplicate_claims_only_one_wins():
    claims = ClaimSet()
    workers = 32
    barrier = threading.Barrier(workers)

    def attempt(_):
        barrier.wait()
        return claims.try_claim("/in/contacts.csv")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    assert results.count(True) == 1
    assert len(claims) == 1
