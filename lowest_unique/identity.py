import logging


logger = logging.getLogger(__name__)

CLIENT_ID_MAX_LENGTH = 64


def normalize_client_id(value):
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if not value:
        return None
    return value[:CLIENT_ID_MAX_LENGTH]


class IdentityResolver:
    """Tracks live channels and the identity key each one speaks for.

    With reconnect enabled the key is the client's durable token, so a new
    channel presenting the same token finds the same seat. Without it the key
    is the channel id itself and a seat cannot outlive its channel.
    """

    def __init__(self, reconnect_enabled=True):
        self.reconnect_enabled = reconnect_enabled
        self.channels = set()
        self.channel_keys = {}

    def attach(self, sid, client_id):
        """Register a new channel and return its identity key, or None for spectators."""
        self.channels.add(sid)
        client_id = normalize_client_id(client_id)
        if client_id is None:
            return None
        key = client_id if self.reconnect_enabled else sid
        self.channel_keys[sid] = key
        return key

    def detach(self, sid):
        """Forget a channel. Returns its identity key if it had one."""
        self.channels.discard(sid)
        return self.channel_keys.pop(sid, None)

    def unbind(self, sid):
        """Keep the channel connected but stop it speaking for any identity."""
        if self.channel_keys.pop(sid, None) is not None:
            logger.debug("Unbound channel %s from its identity", sid)

    def key_for(self, sid):
        return self.channel_keys.get(sid)

    def channels_for(self, key):
        return [sid for sid, bound in self.channel_keys.items() if bound == key]

    def has_live_channel(self, key):
        return any(bound == key for bound in self.channel_keys.values())

    def sever(self, key, keep=None):
        """Unbind every channel of ``key`` except ``keep``; returns the severed sids."""
        severed = [sid for sid in self.channels_for(key) if sid != keep]
        for sid in severed:
            self.detach(sid)
            logger.info("Severed channel %s", sid)
        return severed

    def others(self, keep):
        return [sid for sid in self.channels if sid != keep]

    def reset(self, keep=None):
        """Drop every binding. ``keep`` stays registered as a spectator channel."""
        self.channels = {keep} if keep in self.channels else set()
        self.channel_keys = {}
