"""Strict parsing of inbound event payloads.

Every parser returns ``None`` when the payload fails validation; handlers drop
the event in that case before it reaches the session.
"""
import math


def payload_value(data, key):
    """Accept either a bare value or an object carrying it under ``key``."""
    if isinstance(data, dict):
        return data.get(key)
    return data


def parse_password(data):
    value = payload_value(data, "password")
    if not isinstance(value, str):
        return None
    return value


def parse_name(data):
    value = payload_value(data, "name")
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_positive_int(data, key):
    value = payload_value(data, key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value <= 0:
        return None
    return value


def parse_count(data):
    return parse_positive_int(data, "count")


def parse_seat_id(data):
    return parse_positive_int(data, "seatId")


def parse_number(data, min_number, max_number):
    value = payload_value(data, "number")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if value < min_number or value > max_number:
        return None
    return value
