"""Format rules for the ``format`` keyword.

Address formats are checked for shape *before* parsing so that a host name
is never handed to anything that might try to resolve it.
"""
from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from urllib.parse import urlsplit


@dataclass(frozen=True)
class FormatRule:
    """A string predicate and the message used when it does not hold."""

    predicate: Callable[[str], bool]
    message: str


_IPV4_SHAPE = re.compile(r"\d+\.\d+\.\d+\.\d+")
_DATE_TIME = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})",
    re.IGNORECASE,
)
_EMAIL = re.compile(r"[^@\s]+@[^@\s]+")
_HOST_LABEL = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")


def is_ipv4(value: str) -> bool:
    if not _IPV4_SHAPE.fullmatch(value):
        return False
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    if ":" not in value:
        return False
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_date_time(value: str) -> bool:
    """RFC 3339 ``date-time``; offsets are checked for shape only."""
    match = _DATE_TIME.fullmatch(value)
    if match is None:
        return False
    try:
        datetime.strptime(match.group(1).upper(), "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return False
    return True


def is_email(value: str) -> bool:
    return _EMAIL.fullmatch(value) is not None


def is_uri(value: str) -> bool:
    if any(ch.isspace() for ch in value):
        return False
    try:
        return bool(urlsplit(value).scheme)
    except ValueError:
        return False


def is_regex(value: str) -> bool:
    try:
        re.compile(value)
    except re.error:
        return False
    return True


def is_hostname(value: str) -> bool:
    if not value or len(value) > 253:
        return False
    return all(_HOST_LABEL.fullmatch(label) for label in value.rstrip(".").split("."))


IPV4 = FormatRule(is_ipv4, "string is not a valid IPv4 address")
IPV6 = FormatRule(is_ipv6, "string is not a valid IPv6 address")
DATE_TIME = FormatRule(is_date_time, "string is not a valid date-time")
EMAIL = FormatRule(is_email, "string is not a valid email address")
URI = FormatRule(is_uri, "string is not a valid URI")
REGEX = FormatRule(is_regex, "string is not a valid regular expression")
HOSTNAME = FormatRule(is_hostname, "string is not a valid hostname")

DRAFT3_FORMATS: Mapping[str, FormatRule] = MappingProxyType({
    "ip-address": IPV4,
    "ipv6": IPV6,
    "date-time": DATE_TIME,
    "email": EMAIL,
    "uri": URI,
    "regex": REGEX,
    "host-name": HOSTNAME,
})

DRAFT4_FORMATS: Mapping[str, FormatRule] = MappingProxyType({
    "ipv4": IPV4,
    "ipv6": IPV6,
    "date-time": DATE_TIME,
    "email": EMAIL,
    "uri": URI,
    "hostname": HOSTNAME,
})
