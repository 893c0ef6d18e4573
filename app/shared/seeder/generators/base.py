"""Helpers shared by the generators."""

import random


def random_id(rng: random.Random) -> str:
    """32-character hex identifier drawn from ``rng`` so reruns reproduce it."""
    return f"{rng.getrandbits(128):032x}"
