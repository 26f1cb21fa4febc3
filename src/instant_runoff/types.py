from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

import pandas as pd
import toolz as itz

Candidate = Hashable
Ballot = Sequence[Candidate]
BallotPool = Mapping[Hashable, Ballot]
Tally = dict[Candidate, int]
Chooser = Callable[[Sequence[Candidate]], Candidate]


@dataclass
class Round:
    votes: dict[Hashable, tuple]
    eliminated: frozenset | None = None
    rule: str | None = None

    @property
    def is_final(self) -> bool:
        return self.eliminated is None

    @property
    def nb_voters(self) -> int:
        return len(self.votes)

    @property
    def first_choice(self) -> Tally:
        return itz.frequencies(ballot[0] for ballot in self.votes.values() if ballot)

    def to_dict(self) -> dict:
        data: dict = {"votes": {voter: list(ballot) for voter, ballot in self.votes.items()}}
        if not self.is_final:
            data["eliminated"] = sorted(self.eliminated, key=str)
            data["rule"] = self.rule
        return data


@dataclass
class Result:
    winner: Candidate
    votes: int
    rounds: list[Round] = field(default_factory=list)

    @property
    def eliminated(self) -> list[Candidate]:
        """Eliminated candidates, in the round order they went out"""
        return [c for r in self.rounds if not r.is_final for c in sorted(r.eliminated, key=str)]

    def to_dict(self) -> dict:
        return {
            "winner": self.winner,
            "votes": self.votes,
            "rounds": [r.to_dict() for r in self.rounds],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """First-choice counts, one row per round and one column per candidate seen"""
        df = pd.DataFrame([r.first_choice for r in self.rounds]).fillna(0).astype(int)
        df.index = pd.RangeIndex(1, len(self.rounds) + 1, name="round")
        df.columns.name = "candidate"
        return df
