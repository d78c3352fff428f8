"""Per-trial random generators for the randomized algorithms.

`karger_min_cut` runs many independent contraction trials. Each trial draws
from a generator whose seed is derived from the caller's master seed and the
trial index, so a run is reproducible, trials never share state, and the
process-wide ``random`` module is left untouched.
"""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional


class SeedManager:
    """Maps ``(master seed, labels...)`` to a fixed 31-bit seed.

    The seed of trial ``i`` depends only on the master seed and the labels
    ``("karger", i)``; it does not depend on how many trials ran before it or
    on which thread runs it.

    Usage:
        seed_mgr = SeedManager(42)
        rng = seed_mgr.create_random_state("karger", 3)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Store the master seed.

        Args:
            master_seed: Seed chosen by the caller. None means every generator
                is seeded from the OS and runs are not repeatable.
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Return the seed for the unit of work named by ``components``.

        The SHA-256 digest of ``"<master>:<c1>:<c2>..."`` is truncated to its
        first four bytes and masked to 31 bits. Label order matters.

        Args:
            *components: Labels such as the algorithm name and trial index.

        Returns:
            Seed in ``[0, 2**31)``, or None if no master seed is set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()

        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value & 0x7FFFFFFF

    def create_random_state(self, *components: Any) -> random.Random:
        """Return a fresh generator for one trial.

        Args:
            *components: Labels passed to ``derive_seed``.

        Returns:
            A new ``random.Random``. It is seeded from ``derive_seed`` when a
            master seed is set and from the OS otherwise.
        """
        derived_seed = self.derive_seed(*components)
        rng = random.Random()
        if derived_seed is not None:
            rng.seed(derived_seed)
        return rng
