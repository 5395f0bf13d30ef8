"""Storage key generation.

Keys look like ``2024/03/07/k3x9q1.jpg`` or, when the uploader supplies
both dimensions, ``2024/03/07/k3x9q1_640x480.jpg``. The dimension suffix is
informational only; nothing validates or enforces it.

Short ids are not checked for collisions. Two uploads on the same UTC day
that draw the same short id (and the same suffix and extension) share a key
and the later write replaces the earlier one. With 36**6 ids per day this
is accepted rather than prevented.
"""

import random
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Protocol

from core.utils.constants import SHORT_ID_ALPHABET, SHORT_ID_LENGTH
from core.utils.mime import extension_for
from core.utils.time import date_partition, utc_now


class RandomSource(Protocol):
    """Anything that can pick an element from a sequence (e.g. random.Random)."""

    def choice(self, seq: Sequence[str]) -> str: ...


_default_random = random.Random()


def generate_short_id(rng: RandomSource | None = None) -> str:
    """Return a 6-character id drawn uniformly from [a-z0-9]."""
    source = rng or _default_random
    return "".join(source.choice(SHORT_ID_ALPHABET) for _ in range(SHORT_ID_LENGTH))


def generate_key(
    uploaded_at: datetime,
    short_id: str,
    extension: str,
    width: str | None = None,
    height: str | None = None,
) -> str:
    """Build the storage key for an upload.

    Args:
        uploaded_at: Upload instant, partitioned by its UTC date
        short_id: Random short id
        extension: File extension without the leading dot
        width: Optional width supplied with the upload
        height: Optional height supplied with the upload

    Returns:
        ``YYYY/MM/DD/<short_id>[_<width>x<height>].<extension>``
    """
    partition = date_partition(uploaded_at)

    if width and height:
        return f"{partition}/{short_id}_{width}x{height}.{extension}"

    return f"{partition}/{short_id}.{extension}"


class KeyGenerator:
    """Generates storage keys from a clock and a random source."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        rng: RandomSource | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng

    def new_key(
        self,
        content_type: str | None,
        *,
        width: str | None = None,
        height: str | None = None,
    ) -> str:
        """Return a fresh key for an object of the given content type."""
        return generate_key(
            self._clock(),
            generate_short_id(self._rng),
            extension_for(content_type),
            width=width,
            height=height,
        )
