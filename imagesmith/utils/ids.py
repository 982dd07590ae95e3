"""
Unique identifiers for imagesmith.
"""
import os
import time


def time_ordered_uuid() -> str:
    """
    Generate a UUID-formatted token that sorts by creation time.

    The first 8 hex digits are the current unix time in seconds, the
    remaining 24 are random, so tokens from concurrent builds sharing an
    account do not collide while still ordering by second.

    Example:
        >>> time_ordered_uuid()
        '6530a1f2-3c4d-8e9f-0a1b-2c3d4e5f6a7b'
    """
    unix = int(time.time()) & 0xFFFFFFFF
    b = os.urandom(12)
    return "{:08x}-{}-{}-{}-{}{}".format(
        unix, b[0:2].hex(), b[2:4].hex(), b[4:6].hex(), b[6:8].hex(), b[8:12].hex()
    )
