from words import random_word


def generate_test_case(rng):
    word = random_word(rng, "abc")
    return word, word.replace("c", "")
