import logging
from threading import RLock

from flask import Flask, request
from flask_socketio import SocketIO

from .config import Settings
from .effects import Disconnect
from .identity import normalize_client_id
from .session import GameSession
from .validation import parse_count, parse_name, parse_number, parse_password, parse_seat_id


logger = logging.getLogger(__name__)


def handshake_client_id(auth):
    client_id = None
    if isinstance(auth, dict):
        client_id = normalize_client_id(auth.get("clientId"))
    return client_id or normalize_client_id(request.args.get("clientId"))


def create_app(settings=None):
    settings = settings or Settings()

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    # Handlers run inline so commands apply in arrival order.
    socketio = SocketIO(
        app,
        async_mode=settings.async_mode,
        cors_allowed_origins="*",
        async_handlers=False,
    )

    session = GameSession(settings)
    app.extensions["lowest_unique"] = session
    # Held across mutation and delivery. Reentrant because a forced
    # disconnect runs the disconnect handler on the same thread.
    state_lock = RLock()

    def deliver(effects):
        for effect in effects:
            if isinstance(effect, Disconnect):
                socketio.server.disconnect(effect.sid)
            elif effect.to is None:
                socketio.emit(effect.event, effect.payload)
            else:
                socketio.emit(effect.event, effect.payload, to=effect.to)

    def run(command, *args):
        with state_lock:
            deliver(command(request.sid, *args))

    def dropped(event, data):
        logger.debug("Dropped %s from %s: invalid payload %r", event, request.sid, data)

    @socketio.on("connect")
    def handle_connect(auth=None):
        client_id = handshake_client_id(auth)
        logger.info("New connection: %s clientId: %s", request.sid, client_id or "(none)")
        run(session.connect, client_id)

    @socketio.on("disconnect")
    def handle_disconnect(reason=None):
        logger.info("Disconnected: %s", request.sid)
        run(session.disconnect)

    @socketio.on("registerAdmin")
    def handle_register_admin(data=None):
        run(session.register_admin, parse_password(data))

    @socketio.on("setSeatCount")
    def handle_set_seat_count(data=None):
        count = parse_count(data)
        if count is None:
            dropped("setSeatCount", data)
            return
        run(session.set_seat_count, count)

    @socketio.on("setName")
    def handle_set_name(data=None):
        name = parse_name(data)
        if name is None:
            dropped("setName", data)
            return
        run(session.set_name, name)

    @socketio.on("chooseNumber")
    def handle_choose_number(data=None):
        number = parse_number(data, settings.min_number, settings.max_number)
        if number is None:
            dropped("chooseNumber", data)
            return
        run(session.choose_number, number)

    @socketio.on("advanceRound")
    def handle_advance_round(data=None):
        run(session.advance_round)

    @socketio.on("settleRound")
    def handle_settle_round(data=None):
        run(session.settle)

    @socketio.on("resetGame")
    def handle_reset_game(data=None):
        run(session.reset_game)

    @socketio.on("kickPlayer")
    def handle_kick_player(data=None):
        seat_id = parse_seat_id(data)
        if seat_id is None:
            dropped("kickPlayer", data)
            return
        run(session.kick_player, seat_id)

    @socketio.on_error_default
    def handle_error(error):
        event = getattr(request, "event", None) or {}
        logger.exception("Unhandled error while handling %s from %s", event.get("message"), request.sid)

    return app, socketio
