import pytest

from instant_runoff.simulation import run_many


def test_run_many_counts_every_run(tied_pool):
    """Wins add up to the number of runs."""
    wins = run_many(tied_pool, nb_runs=20, seed=0)
    assert sum(wins.values()) == 20


def test_run_many_same_seed():
    """A seed makes the whole series reproducible."""
    pool = {"p1": ("A",), "p2": ("B",)}
    assert run_many(pool, nb_runs=30, seed=5) == run_many(pool, nb_runs=30, seed=5)


def test_run_many_coin_flip():
    """A complete tie between two candidates is won by both over many runs."""
    wins = run_many({"p1": ("A",), "p2": ("B",)}, nb_runs=200, seed=7, progress=True)
    assert set(wins) == {"A", "B"}


def test_run_many_without_tie(logo_contest):
    """Without a complete tie the winner never changes."""
    assert run_many(logo_contest, nb_runs=10) == {"curvy-wide": 10}


def test_run_many_wrong_nb_runs(logo_contest):
    with pytest.raises(ValueError):
        run_many(logo_contest, nb_runs=0)
