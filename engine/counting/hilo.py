"""Hi-Lo card counting system."""

from typing import Mapping

from engine.cards import Rank
from engine.counting.base import CountingSystem


def _hilo_tag(rank: Rank) -> int:
    points = rank.blackjack_value
    if points <= 6:
        return 1
    if points >= 10:
        return -1
    return 0


class HiLoSystem(CountingSystem):
    """
    Hi-Lo counting system.

    Low cards (2-6) count +1, 7-9 are neutral, and tens, faces and aces
    count -1. The dealer's face-down card is counted when it is dealt.
    """

    _TAG_VALUES: Mapping[Rank, int] = {rank: _hilo_tag(rank) for rank in Rank}

    @property
    def name(self) -> str:
        return "Hi-Lo"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES
