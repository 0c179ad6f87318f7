"""Random sources for projection matrix generation.

The process-wide shared source is created lazily on first use, seeded from
OS entropy, and never reseeded. Its creation is guarded by a lock; draws
afterwards are not serialized by this module; concurrent builders interleave
samples from one stream, so their matrices are not reproducible. NumPy's
``Generator`` holds its own bit-generator lock, which keeps concurrent
draws memory-safe.

Callers that need reproducible matrices pass an explicit seed or
``numpy.random.Generator`` to the builder instead.
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from randproj import config

logger = logging.getLogger(__name__)

_SHARED_SOURCE: np.random.Generator | None = None
_SHARED_SOURCE_LOCK = threading.Lock()


def get_shared_source() -> np.random.Generator:
    """Return the process-wide standard-normal source, creating it once."""
    global _SHARED_SOURCE

    source = _SHARED_SOURCE
    if source is not None:
        return source

    with _SHARED_SOURCE_LOCK:
        if _SHARED_SOURCE is None:
            # No entropy argument: SeedSequence pulls fresh bits from the OS.
            seed_seq = np.random.SeedSequence()
            _SHARED_SOURCE = np.random.default_rng(seed_seq)
            logger.debug("Initialized shared projection source (entropy=%d)", seed_seq.entropy)
        return _SHARED_SOURCE


def _reset_shared_source() -> None:
    """Drop the shared source so the next call re-creates it (tests only)."""
    global _SHARED_SOURCE
    with _SHARED_SOURCE_LOCK:
        _SHARED_SOURCE = None


def resolve_rng(rng: np.random.Generator | int | None = None) -> np.random.Generator:
    """Turn a seed, generator or None into the generator a build should draw from.

    Parameters
    ----------
    rng
        An owned ``numpy.random.Generator`` (used as-is), an integer seed
        (fresh generator), or None. None falls back to
        ``config.PROJECTION_RANDOM_SEED`` and, when that is also None, to the
        shared source.

    Returns
    -------
    numpy.random.Generator
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        rng = config.PROJECTION_RANDOM_SEED
    if rng is None:
        return get_shared_source()
    return np.random.default_rng(rng)


__all__ = [
    "get_shared_source",
    "resolve_rng",
]
