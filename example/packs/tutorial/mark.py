from words import random_word


def generate_test_case(rng):
    # always at least one 'a' to mark
    word = random_word(rng, "ab", max_length=10)
    position = rng.randint(0, len(word))
    word = word[:position] + "a" + word[position:]
    return word, word.replace("a", "X", 1)
