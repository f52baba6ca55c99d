from quizcore.utils.random_provider import RandomProvider


def test_permutation_is_complete():
    rng = RandomProvider(seed=42)
    for n in range(0, 8):
        assert sorted(rng.permutation(n)) == list(range(n))


def test_shuffled_does_not_mutate_input():
    items = [1, 2, 3, 4, 5]
    out = RandomProvider(seed=1).shuffled(items)
    assert items == [1, 2, 3, 4, 5]
    assert sorted(out) == items


def test_seeded_sequences_repeat():
    a = RandomProvider(seed=99)
    b = RandomProvider(seed=99)
    assert [a.randint(0, 100) for _ in range(10)] == [b.randint(0, 100) for _ in range(10)]
