"""Recognisers behind the string convenience validators.

IPv4 and the textual formats are regular expressions; IPv6 uses
:mod:`ipaddress` because its compressed forms do not fit a readable regex.
"""

from __future__ import annotations

import ipaddress
import re
from typing import Final

_IPV4_UNIT = r"(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[0-9]{1,2})"

UUID: Final[re.Pattern[str]] = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

EMAIL: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)+$")

URL: Final[re.Pattern[str]] = re.compile(r"^[a-z][a-z0-9+.-]*://[^\s/?#]+(?:[/?#]\S*)?$", re.IGNORECASE)

IPV4: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<class>{_IPV4_UNIT})\.(?P<network>{_IPV4_UNIT})\.(?P<subnet>{_IPV4_UNIT})\.(?P<device>{_IPV4_UNIT})$"
)


def is_ipv6(text: str) -> bool:
    """Return ``True`` when *text* is an IPv6 address (plain or IPv4-mapped).

    Examples
    --------
    >>> is_ipv6("::1"), is_ipv6("fe80::1:2"), is_ipv6("::ffff:10.0.0.1"), is_ipv6("10.0.0.1")
    (True, True, True, False)
    """

    try:
        ipaddress.IPv6Address(text)
    except ValueError:
        return False
    return True


__all__ = ["EMAIL", "IPV4", "URL", "UUID", "is_ipv6"]
