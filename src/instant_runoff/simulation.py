import logging

import numpy as np
import toolz as itz
from tqdm import tqdm

from .election import Election
from .types import BallotPool, Candidate

logger = logging.getLogger(__name__)


def run_many(
    pool: BallotPool,
    nb_runs: int = 100,
    seed: int | None = None,
    progress: bool = False,
) -> dict[Candidate, int]:
    """Run the same election several times and count how often each candidate wins

    Only elections settled by a random pick can give different winners from one run to another.

    Args:
        pool (BallotPool): ballots of every voter
        nb_runs (int, optional): number of elections to run
        seed (int | None, optional): seed of the generator shared by all runs
        progress (bool, optional): show a progress bar

    Returns:
        dict[Candidate, int]: number of wins of each winning candidate

    Raises:
        ValueError: raised if nb_runs is lower than 1
    """
    if nb_runs < 1:
        raise ValueError("nb_runs must be at least 1")
    rng = np.random.default_rng(seed)
    winners = (Election(pool, seed=rng).run().winner for _ in tqdm(range(nb_runs), disable=not progress))
    wins = itz.frequencies(winners)
    logger.info("wins over %d runs: %s", nb_runs, wins)
    return wins
