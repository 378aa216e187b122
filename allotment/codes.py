"""
Human-readable codes for requests and shipments.

    AR-LZ3K9Q2A-7F2C   allocation request
    D-LZ3K9Q2B-X81M    dispatch

Timestamp part is milliseconds in base36, so codes sort roughly by
creation time; the random suffix keeps codes minted in the same
millisecond apart.
"""

import string
import time

from django.utils.crypto import get_random_string
from django.utils.http import int_to_base36

REQUEST_PREFIX = 'AR'
DISPATCH_PREFIX = 'D'

_SUFFIX_CHARS = string.ascii_uppercase + string.digits


def generate_code(prefix: str) -> str:
    stamp = int_to_base36(int(time.time() * 1000)).upper()
    return f"{prefix}-{stamp}-{get_random_string(4, allowed_chars=_SUFFIX_CHARS)}"
