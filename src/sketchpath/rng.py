"""
rng.py
------

Seedable random source for the sketch jitter.

Every randomized routine in the package takes an optional ``rng`` argument.
Anything with a ``random() -> float`` method in ``[0, 1)`` is accepted
(``RNG``, ``random.Random``, ``numpy.random.Generator``). When ``rng`` is
omitted the routine falls back to ``get_rng(thread_safe=True)``.

- ``RNG`` wraps either ``random.Random`` or ``numpy.random.Generator``.
- Access is serialized with a lock, so a shared instance is safe to use
  from several threads.
- Seeding in place keeps object identity, so a seeded instance can be handed
  to a drawer once and re-seeded between test cases.
"""

from __future__ import annotations

__all__ = ["RNGBackend", "RNG", "get_rng", "set_global_seed", "resolve_rng"]

import os
import time
import random
import threading
from numbers import Real
from typing import Any, Optional, TypeAlias, Union

import numpy as np

# ---------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------
RNGBackend: TypeAlias = Union[random.Random, np.random.Generator, "RNG"]


def _entropy_seed() -> int:
    return os.getpid() ^ (time.time_ns() & 0xFFFFFFFF) ^ random.getrandbits(32)


# ---------------------------------------------------------------------
# RNG class
# ---------------------------------------------------------------------
class RNG:
    """Thread-safe random generator with a stdlib or NumPy backend.

    Attributes:
        _rng:  Backend RNG (random.Random or numpy.random.Generator).
        _lock: threading.Lock for safe concurrent access.

    Notes:
        - ``seed=None`` draws a fresh seed from PID, clock and system entropy.
        - ``seed=0`` is a valid explicit seed.
    """

    def __init__(self, seed: Optional[int] = None, use_numpy: bool = False):
        self._lock = threading.Lock()
        self._use_numpy = use_numpy
        seed_val = _entropy_seed() if seed is None else seed

        if use_numpy:
            self._rng: RNGBackend = np.random.default_rng(seed_val)
        else:
            self._rng: RNGBackend = random.Random(seed_val)

    # -----------------------------------------------------------------
    # Core seeding
    # -----------------------------------------------------------------
    def seed(self, seed: Optional[int] = None) -> None:
        """Reinitialize the RNG in place (preserves object identity)."""
        with self._lock:
            seed_val = _entropy_seed() if seed is None else seed
            if self._use_numpy:
                self._rng = np.random.default_rng(seed_val)
            else:
                self._rng.seed(seed_val)

    # -----------------------------------------------------------------
    # Sampling
    # -----------------------------------------------------------------
    def random(self) -> float:
        """Return a float in [0, 1)."""
        with self._lock:
            out = self._rng.random()
            if self._use_numpy and isinstance(out, Real):
                return float(out)
            return out

    def uniform(self, a: float = 0.0, b: float = 1.0) -> float:
        with self._lock:
            return float(self._rng.uniform(a, b))

    # -----------------------------------------------------------------
    # Utility & Introspection
    # -----------------------------------------------------------------
    def getstate(self) -> Any:
        with self._lock:
            if self._use_numpy:
                return self._rng.bit_generator.state
            return self._rng.getstate()

    def setstate(self, state: Any) -> None:
        with self._lock:
            if self._use_numpy:
                self._rng.bit_generator.state = state
            else:
                self._rng.setstate(state)

    @property
    def backend(self) -> str:
        return "numpy" if self._use_numpy else "stdlib"

    def __repr__(self) -> str:
        return f"<RNG backend={self.backend} pid={os.getpid()} id={id(self)}>"


# =============================================================================
# GLOBAL & THREAD-LOCAL ACCESSORS
# =============================================================================
_global_rng = RNG()
_thread_local = threading.local()


def get_rng(thread_safe: bool = False, use_numpy: bool = False) -> RNG:
    """Return an RNG instance (shared or per-thread)."""
    if thread_safe:
        if not hasattr(_thread_local, "rng"):
            _thread_local.rng = RNG(use_numpy=use_numpy)
        return _thread_local.rng
    return _global_rng


def set_global_seed(seed: int) -> None:
    """Re-seed the shared RNG and the calling thread's RNG, if it has one."""
    _global_rng.seed(seed)
    if hasattr(_thread_local, "rng"):
        _thread_local.rng.seed(seed)


def resolve_rng(rng: Optional[RNGBackend]) -> RNGBackend:
    """Return ``rng`` or the thread-local default.

    Raises:
        TypeError: If ``rng`` has no callable ``random`` attribute.
    """
    if rng is None:
        return get_rng(thread_safe=True)
    if not callable(getattr(rng, "random", None)):
        raise TypeError(f"rng must provide random(), got {type(rng).__name__}.")
    return rng
