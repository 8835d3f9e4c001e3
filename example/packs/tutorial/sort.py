from words import random_word


def generate_test_case(rng):
    word = random_word(rng, "ab")
    return word, "".join(sorted(word))
