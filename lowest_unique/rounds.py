import logging


logger = logging.getLogger(__name__)


class RoundState:
    """Round number, lock and visibility flags for the running game.

    ``round_number`` is 0 before the first round and only grows afterwards;
    ``reset`` is the one way back to 0.
    """

    def __init__(self):
        self.round_number = 0
        self.locked = False
        self.choices_visible = False
        self.winners = []

    @property
    def started(self):
        return self.round_number > 0

    @property
    def accepting_choices(self):
        return self.round_number > 0 and not self.locked

    def can_settle(self):
        return self.round_number > 0 and not self.locked

    def advance(self):
        self.round_number += 1
        self.locked = False
        self.choices_visible = False
        self.winners = []
        logger.info("---- Start round %s ----", self.round_number)
        return self.round_number

    def lock(self, winners):
        self.locked = True
        self.choices_visible = True
        self.winners = list(winners)

    def reset(self):
        self.round_number = 0
        self.locked = False
        self.choices_visible = False
        self.winners = []
