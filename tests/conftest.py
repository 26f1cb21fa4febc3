import pytest


@pytest.fixture()
def logo_contest():
    """Six voters ranking three logo submissions"""
    return {
        "p1": ["curvy-wide", "minimalist", "phoenix"],
        "p2": ["curvy-wide", "minimalist", "phoenix"],
        "p3": ["phoenix", "minimalist", "curvy-wide"],
        "p4": ["curvy-wide", "phoenix", "minimalist"],
        "p5": ["minimalist", "curvy-wide", "phoenix"],
        "p6": ["phoenix", "minimalist", "curvy-wide"],
    }


@pytest.fixture()
def tied_pool():
    """Five candidates, the three lowest tied at every rank but the third"""
    return {
        "p1": ("A", "B", "C"),
        "p2": ("B", "C"),
        "p3": ("C", "D"),
        "p4": ("D",),
        "p5": ("E", "A"),
        "p6": ("A", "E"),
        "p7": ("B",),
    }
