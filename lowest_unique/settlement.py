from collections import defaultdict
from typing import NamedTuple, Optional, Tuple


class HistoryEntry(NamedTuple):
    round: int
    has_winner: bool
    lowest_unique: Optional[int]
    winner_ids: Tuple[int, ...]
    winner_names: Tuple[str, ...]

    def to_payload(self):
        return {
            "round": self.round,
            "hasWinner": self.has_winner,
            "lowestUnique": self.lowest_unique,
            "winnerIds": list(self.winner_ids),
            "winnerNames": list(self.winner_names),
        }


class Settlement(NamedTuple):
    round: int
    lowest_unique: Optional[int]
    winners: tuple
    message: str

    @property
    def has_winner(self):
        return self.lowest_unique is not None

    @property
    def winner_ids(self):
        return tuple(seat.seat_id for seat in self.winners)

    @property
    def winner_names(self):
        return tuple(seat.name for seat in self.winners)

    def history_entry(self):
        return HistoryEntry(
            round=self.round,
            has_winner=self.has_winner,
            lowest_unique=self.lowest_unique,
            winner_ids=self.winner_ids,
            winner_names=self.winner_names,
        )


def unique_numbers(seats):
    """Numbers chosen by exactly one of the given seats."""
    number_groups = defaultdict(list)
    for seat in seats:
        if seat.choice is None:
            continue
        number_groups[seat.choice].append(seat)
    return sorted(number for number, group in number_groups.items() if len(group) == 1)


def settle_round(round_number, seats):
    """Work out the winner of a round from the active seats' choices.

    Does not touch the seats; the caller applies the elimination.
    """
    uniques = unique_numbers(seats)
    if not uniques:
        message = (
            f"Round {round_number}: no lowest unique number. "
            "Start the next round to continue."
        )
        return Settlement(round_number, None, (), message)

    lowest = uniques[0]
    winners = tuple(seat for seat in seats if seat.choice == lowest)
    names = ", ".join(seat.name for seat in winners)
    message = f"Round {round_number}: {lowest} is the lowest unique number, {names} wins!"
    return Settlement(round_number, lowest, winners, message)
