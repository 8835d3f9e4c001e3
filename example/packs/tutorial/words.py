"""Helpers shared by the tutorial level scripts."""


def random_word(rng, alphabet, min_length=1, max_length=12):
    length = rng.randint(min_length, max_length)
    return "".join(rng.choice(alphabet) for _ in range(length))
