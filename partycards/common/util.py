from typing import Optional, Union

import numpy as np

RandomSource = Union[np.random.Generator, int, None]


def make_rng(seed: RandomSource = None) -> np.random.Generator:
    """
    Build the random generator used for every draw in a game.

    :param seed: An existing generator (returned unchanged), an integer seed
                 for a reproducible stream, or None for fresh OS entropy
    :return: A numpy Generator
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def random_index(length: int, rng: Optional[np.random.Generator] = None) -> int:
    """
    Pick a uniformly distributed index into a sequence of the given length.

    :param length: Length of the sequence, must be positive
    :param rng: Generator to draw from, a fresh one is used when omitted
    :return: An integer in ``range(length)``
    :raises ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError("Cannot pick an index from an empty sequence.")

    if rng is None:
        rng = make_rng()

    return int(rng.integers(length))
