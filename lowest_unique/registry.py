import logging
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


def default_name(seat_id):
    return f"Player {seat_id}"


@dataclass
class Seat:
    seat_id: int
    name: str
    has_custom_name: bool = False
    choice: Optional[int] = None
    eliminated: bool = False
    connected: bool = True


class SeatRegistry:
    """Owns every seat, keyed by the identity that holds it."""

    def __init__(self, min_number, max_number, max_name_length=24, count_disconnected=False):
        self.min_number = min_number
        self.max_number = max_number
        self.max_name_length = max_name_length
        self.count_disconnected = count_disconnected
        self.seats = {}
        self.max_seats = None

    def __len__(self):
        return len(self.seats)

    def get(self, key):
        if key is None:
            return None
        return self.seats.get(key)

    def find(self, seat_id):
        """Return ``(key, seat)`` for a seat id, or ``(None, None)``."""
        for key, seat in self.seats.items():
            if seat.seat_id == seat_id:
                return key, seat
        return None, None

    def ordered(self):
        return sorted(self.seats.values(), key=lambda seat: seat.seat_id)

    def can_create(self, round_number):
        return (
            round_number == 0
            and self.max_seats is not None
            and len(self.seats) < self.max_seats
        )

    def allocate_seat_id(self):
        used = {seat.seat_id for seat in self.seats.values()}
        for candidate in range(1, self.max_seats + 1):
            if candidate not in used:
                return candidate
        return None

    def create(self, key):
        seat_id = self.allocate_seat_id()
        if seat_id is None:
            return None
        seat = Seat(seat_id=seat_id, name=default_name(seat_id))
        self.seats[key] = seat
        logger.info("Assigned seat #%s", seat_id)
        return seat

    def remove(self, key):
        return self.seats.pop(key, None)

    def set_max_seats(self, count):
        self.max_seats = count

    def set_name(self, key, name):
        seat = self.get(key)
        if seat is None:
            logger.debug("set_name ignored: no seat for identity")
            return False
        trimmed = name.strip()[: self.max_name_length].strip()
        if not trimmed:
            logger.debug("set_name ignored: empty name for seat #%s", seat.seat_id)
            return False
        seat.name = trimmed
        seat.has_custom_name = True
        logger.info("Seat #%s set name to %r", seat.seat_id, trimmed)
        return True

    def submit_choice(self, key, number, rounds):
        seat = self.get(key)
        if seat is None:
            logger.debug("choice ignored: no seat for identity")
            return False
        if seat.eliminated:
            logger.debug("choice ignored: seat #%s is eliminated", seat.seat_id)
            return False
        if not rounds.accepting_choices:
            logger.debug(
                "choice ignored: round %s not open (locked=%s)",
                rounds.round_number,
                rounds.locked,
            )
            return False
        if number < self.min_number or number > self.max_number:
            logger.debug("choice ignored: %s outside [%s, %s]", number, self.min_number, self.max_number)
            return False
        if not seat.has_custom_name:
            logger.debug("choice ignored: seat #%s has no name yet", seat.seat_id)
            return False
        seat.choice = number
        logger.info("Seat #%s chose %s", seat.seat_id, number)
        return True

    def active_seats(self):
        return [
            seat
            for seat in self.ordered()
            if not seat.eliminated and (seat.connected or self.count_disconnected)
        ]

    def all_active_chosen(self):
        active = self.active_seats()
        return bool(active) and all(seat.choice is not None for seat in active)

    def clear_choices(self):
        for seat in self.seats.values():
            seat.choice = None

    def kick(self, seat_id, round_number):
        """Remove a seat before the game starts, or eliminate it during one.

        Returns the identity key of the kicked seat, or None if no seat has
        that id.
        """
        key, seat = self.find(seat_id)
        if seat is None:
            logger.info("Kick ignored: seat #%s not found", seat_id)
            return None
        if round_number == 0:
            del self.seats[key]
            logger.info("Kicked seat #%s before game start, seat freed", seat_id)
        else:
            seat.eliminated = True
            seat.choice = None
            logger.info("Kicked seat #%s in game, marked eliminated", seat_id)
        return key

    def reset_all(self):
        self.seats = {}
        self.max_seats = None
