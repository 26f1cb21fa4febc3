from __future__ import annotations

import itertools as it
import logging
from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Self

import numpy as np
import toolz as itz

from .types import Ballot, BallotPool, Candidate, Chooser, Result, Round, Tally

logger = logging.getLogger(__name__)

BULK = "bulk"
NTH_VOTES = "nth-votes"
RANDOM = "random"


class Election:
    """
    Instant runoff election over a pool of ranked ballots.

    The pool maps each voter to its ballot, an ordered sequence of candidates
    (most preferred first). Each round counts first choices; a candidate with
    more than half of them wins. Otherwise candidates are eliminated, their
    names are popped off the head of the ballots and the next round starts.
    Ballots left empty are dropped, so the majority barrier shrinks with them.

    When several candidates share the lowest first-choice score:
        1. if they cannot catch up with the next score even combined, they
           all go at once,
        2. else the one with strictly fewer votes at the next ranks goes,
        3. else one of them is picked at random.
    """

    def __init__(
        self,
        pool: BallotPool,
        choose: Chooser | None = None,
        seed: int | np.random.Generator | None = None,
    ) -> None:
        self.pool = {voter: tuple(ballot) for voter, ballot in pool.items()}
        self.choose = choose or self.random_chooser(seed)
        self.rounds: list[Round] = []
        self.result: Result | None = None

    @staticmethod
    def random_chooser(seed: int | np.random.Generator | None = None) -> Chooser:
        """Uniform pick among candidates, drawn from a numpy generator built from seed"""
        rng = np.random.default_rng(seed)

        def choose(candidates: Sequence[Candidate]) -> Candidate:
            return candidates[rng.integers(len(candidates))]

        return choose

    @classmethod
    def from_ballots(
        cls,
        ballots: Iterable[Ballot],
        voters: Sequence[Hashable] | None = None,
        choose: Chooser | None = None,
        seed: int | np.random.Generator | None = None,
    ) -> Self:
        """Build an election from bare ballots

        Args:
            ballots (Iterable[Ballot]): one ordered list of candidates per voter
            voters (Sequence[Hashable] | None, optional): voter names, defaults to p1, p2, ...
            choose (Chooser | None, optional): picks the candidate to eliminate on a complete tie
            seed (int | np.random.Generator | None, optional): seed of the default chooser

        Returns:
            Self: the election, not yet run

        Raises:
            ValueError: raised if voters and ballots are not the same length
        """
        ballots = [tuple(ballot) for ballot in ballots]
        if voters is None:
            voters = [f"p{i}" for i in range(1, len(ballots) + 1)]
        elif len(voters) != len(ballots):
            raise ValueError(f"{len(voters)} voters given for {len(ballots)} ballots")
        pool = {voter: ballot for voter, ballot in zip(voters, ballots) if ballot}
        return cls(pool, choose=choose, seed=seed)

    @staticmethod
    def tally(rank: int, pool: BallotPool) -> Tally:
        """From a pool of ballots, count the candidates found at position rank (0 is first choice).

        Ballots too short to have that position do not count. Candidates with no vote are absent.
        """
        return itz.frequencies(ballot[rank] for ballot in pool.values() if rank < len(ballot))

    @staticmethod
    def score_classes(tally: Mapping[Candidate, int]) -> list[list[tuple[Candidate, int]]]:
        """Group (candidate, score) pairs by score, lowest score first"""
        groups = itz.groupby(lambda item: item[1], tally.items())
        return [groups[score] for score in sorted(groups)]

    @classmethod
    def least_nth_votes(cls, pool: BallotPool, candidates: Iterable[Candidate]) -> frozenset | None:
        """Find which of the candidates has strictly the fewest votes at ranks 1, 2, ...

        Only the candidates lowest at rank n are compared at rank n + 1. First choices are not
        looked at.

        Args:
            pool (BallotPool): current ballots
            candidates (Iterable[Candidate]): candidates tied on first choices

        Returns:
            frozenset | None: the single weakest candidate, None if tied all the way through
        """
        candidates = list(candidates)
        max_length = max((len(ballot) for ballot in pool.values()), default=0)
        for rank in range(1, max_length + 1):
            nth_votes = cls.tally(rank, pool)
            lows = cls.score_classes({c: nth_votes.get(c, 0) for c in candidates})[0]
            candidates = [c for c, _ in lows]
            if len(candidates) == 1:
                return frozenset(candidates)
            logger.debug("still tied at rank %d: %s", rank, candidates)
        return None

    @classmethod
    def decide_elimination(cls, pool: BallotPool, choose: Chooser | None = None) -> tuple[frozenset, str]:
        """Candidates to eliminate this round and the rule that picked them

        Args:
            pool (BallotPool): current ballots, with at least one first choice
            choose (Chooser | None, optional): picks among a complete tie, uniform random if None

        Returns:
            tuple[frozenset, str]: eliminated candidates and one of BULK, NTH_VOTES, RANDOM
        """
        classes = cls.score_classes(cls.tally(0, pool))
        lows = classes[0]
        next_score = classes[1][0][1] if len(classes) > 1 else 0

        if len(lows) == 1 or sum(score for _, score in lows) < next_score:
            return frozenset(c for c, _ in lows), BULK

        least = cls.least_nth_votes(pool, (c for c, _ in lows))
        if least is not None:
            return least, NTH_VOTES

        choose = choose or cls.random_chooser()
        return frozenset([choose([c for c, _ in lows])]), RANDOM

    @classmethod
    def tie_break(cls, pool: BallotPool, choose: Chooser | None = None) -> frozenset:
        return cls.decide_elimination(pool, choose)[0]

    @staticmethod
    def strip(pool: BallotPool, eliminated: Iterable[Candidate]) -> dict[Hashable, tuple]:
        """Pop eliminated candidates off the head of each ballot, dropping ballots left empty"""
        eliminated = frozenset(eliminated)
        stripped = {}
        for voter, ballot in pool.items():
            remaining = tuple(it.dropwhile(lambda c: c in eliminated, ballot))
            if remaining:
                stripped[voter] = remaining
        return stripped

    def run(self) -> Result:
        """Run rounds until a candidate holds a majority of first choices

        Returns:
            Result: winner, its final first-choice count and every round, oldest first

        Raises:
            AttributeError: raised if a round starts without any first choice left
        """
        pool = self.pool
        out: set = set()
        self.rounds = []
        while True:
            first_votes = self.tally(0, pool)
            if not first_votes:
                raise AttributeError("no vote issued")
            winner = max(first_votes, key=first_votes.get)
            # recomputed each round, exhausted ballots no longer count
            barrier = sum(first_votes.values()) // 2
            logger.debug("round %d first choices: %s", len(self.rounds) + 1, first_votes)

            if first_votes[winner] > barrier:
                self.rounds.append(Round(votes=pool))
                self.result = Result(winner=winner, votes=first_votes[winner], rounds=self.rounds)
                logger.info("%s wins with %d first-choice votes", winner, first_votes[winner])
                return self.result

            eliminated, rule = self.decide_elimination(pool, self.choose)
            logger.info("round %d: eliminating %s (%s)", len(self.rounds) + 1, sorted(eliminated, key=str), rule)
            self.rounds.append(Round(votes=pool, eliminated=eliminated, rule=rule))
            out |= eliminated
            pool = self.strip(pool, out)


def run_election(
    pool: BallotPool,
    seed: int | np.random.Generator | None = None,
    choose: Chooser | None = None,
) -> Result:
    """Run a single instant runoff election on pool"""
    return Election(pool, choose=choose, seed=seed).run()
