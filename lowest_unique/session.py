import hmac
import logging

from .effects import Disconnect, broadcast, unicast
from .identity import IdentityResolver
from .registry import SeatRegistry
from .rounds import RoundState
from .settlement import settle_round
from .snapshot import player_info_payload, round_result_payload, state_payload


logger = logging.getLogger(__name__)

WRONG_PASSWORD_ERROR = "Wrong admin password"


class AdminGate:
    """Single admin slot, bound to whichever channel last logged in."""

    def __init__(self, password):
        self.password = password
        self.sid = None

    def login(self, sid, password):
        if not isinstance(password, str):
            return False
        if not hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8")):
            return False
        self.sid = sid
        return True

    def is_admin(self, sid):
        return self.sid is not None and sid == self.sid

    def clear(self):
        self.sid = None


class GameSession:
    """All game state for one coordinator process.

    Every public method handles one inbound command from channel ``sid`` and
    returns the effects to deliver, in order. A rejected command returns an
    empty list. Callers must run one command at a time.
    """

    def __init__(self, settings):
        self.settings = settings
        self.identity = IdentityResolver(reconnect_enabled=settings.reconnect_enabled)
        self.registry = SeatRegistry(
            settings.min_number,
            settings.max_number,
            max_name_length=settings.max_name_length,
            count_disconnected=settings.count_disconnected_seats,
        )
        self.rounds = RoundState()
        self.admin = AdminGate(settings.admin_password)
        self.history = []

    def state(self):
        return state_payload(self.registry, self.rounds, self.history)

    def _state_update(self):
        return broadcast("stateUpdate", self.state())

    def _player_info(self, sid, seat):
        return unicast(
            sid,
            "playerInfo",
            player_info_payload(seat, self.settings.min_number, self.settings.max_number),
        )

    def _require_admin(self, sid, action):
        if self.admin.is_admin(sid):
            return True
        logger.warning("Non-admin %s tried to %s", sid, action)
        return False

    def _sever(self, key, keep=None):
        severed = self.identity.sever(key, keep=keep)
        if self.admin.sid in severed:
            self.admin.clear()
        return [Disconnect(sid) for sid in severed]

    def _settle(self):
        if not self.rounds.can_settle():
            logger.debug(
                "settle ignored: round=%s locked=%s",
                self.rounds.round_number,
                self.rounds.locked,
            )
            return []
        result = settle_round(self.rounds.round_number, self.registry.active_seats())
        for seat in result.winners:
            seat.eliminated = True
        self.rounds.lock(result.winner_ids)
        self.history.append(result.history_entry())
        logger.info(result.message)
        return [broadcast("roundResult", round_result_payload(result)), self._state_update()]

    def _auto_settle(self):
        if not self.settings.auto_settle:
            return []
        if not self.rounds.can_settle() or not self.registry.all_active_chosen():
            return []
        logger.info("Every active seat has chosen, settling round %s", self.rounds.round_number)
        return self._settle()

    def connect(self, sid, client_id=None):
        effects = []
        key = self.identity.attach(sid, client_id)
        seat = self.registry.get(key)
        if seat is not None:
            effects.extend(self._sever(key, keep=sid))
            seat.connected = True
            logger.info("Reconnected seat #%s on %s", seat.seat_id, sid)
            effects.append(self._player_info(sid, seat))
        elif key is not None and self.registry.can_create(self.rounds.round_number):
            seat = self.registry.create(key)
            effects.append(self._player_info(sid, seat))
        else:
            if key is not None:
                logger.info(
                    "Channel %s is a spectator (round=%s, maxPlayers=%s)",
                    sid,
                    self.rounds.round_number,
                    self.registry.max_seats,
                )
                self.identity.unbind(sid)
            effects.append(unicast(sid, "spectator"))
        effects.append(self._state_update())
        return effects

    def disconnect(self, sid):
        if sid not in self.identity.channels:
            return []
        key = self.identity.detach(sid)
        if self.admin.is_admin(sid):
            self.admin.clear()
            logger.info("Admin disconnected")
        seat = self.registry.get(key)
        if seat is not None:
            if not self.settings.reconnect_enabled:
                self.registry.remove(key)
                logger.info("Seat #%s left, seat removed", seat.seat_id)
            elif not self.identity.has_live_channel(key):
                seat.connected = False
                logger.info("Seat #%s marked disconnected", seat.seat_id)
        return [self._state_update()] + self._auto_settle()

    def register_admin(self, sid, password):
        if not self.admin.login(sid, password):
            logger.warning("Rejected admin login from %s", sid)
            return [unicast(sid, "adminStatus", {"ok": False, "error": WRONG_PASSWORD_ERROR})]
        logger.info("Admin registered: %s", sid)
        return [unicast(sid, "adminStatus", {"ok": True}), self._state_update()]

    def set_seat_count(self, sid, count):
        if not self._require_admin(sid, "set the seat count"):
            return []
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            logger.debug("seat count ignored: %r is not a positive integer", count)
            return []
        if self.rounds.started:
            logger.debug("seat count ignored: game already started")
            return []
        self.registry.set_max_seats(count)
        logger.info("Max players set to %s", count)
        return [self._state_update()]

    def set_name(self, sid, name):
        if not self.registry.set_name(self.identity.key_for(sid), name):
            return []
        return [self._state_update()]

    def choose_number(self, sid, number):
        if not self.registry.submit_choice(self.identity.key_for(sid), number, self.rounds):
            return []
        return [self._state_update()] + self._auto_settle()

    def advance_round(self, sid):
        if not self._require_admin(sid, "start the next round"):
            return []
        if self.registry.max_seats is None:
            logger.debug("advance ignored: seat count not set")
            return []
        round_number = self.rounds.advance()
        self.registry.clear_choices()
        return [self._state_update(), broadcast("newRound", {"round": round_number})]

    def settle(self, sid):
        if not self._require_admin(sid, "settle the round"):
            return []
        return self._settle()

    def reset_game(self, sid):
        if not self._require_admin(sid, "reset the game"):
            return []
        logger.info("*** Game has been reset by admin ***")
        effects = [broadcast("gameReset")]
        effects.extend(Disconnect(other) for other in self.identity.others(keep=sid))
        self.identity.reset(keep=sid)
        self.registry.reset_all()
        self.rounds.reset()
        self.history = []
        effects.append(self._state_update())
        return effects

    def kick_player(self, sid, seat_id):
        if not self._require_admin(sid, "kick a player"):
            return []
        key = self.registry.kick(seat_id, self.rounds.round_number)
        if key is None:
            return []
        effects = self._sever(key)
        seat = self.registry.get(key)
        if seat is not None and not self.identity.has_live_channel(key):
            seat.connected = False
        effects.append(self._state_update())
        return effects + self._auto_settle()
