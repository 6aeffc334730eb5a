import pytest
from astrogen.sampling.roll import Roll, threshold_lookup


def test_same_task_same_stream():
	a = Roll.for_task(42, 1, 2, 3)
	b = Roll.for_task(42, 1, 2, 3)
	assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]


def test_spawned_streams_differ():
	root = Roll.for_task(42)
	assert root.spawn(1).random() != root.spawn(2).random()


def test_dice_bounds():
	roll = Roll.for_task(7)
	values = [roll.dice() for _ in range(2000)]
	assert min(values) >= 3 and max(values) <= 18
	assert roll.dice(0, 6) == 0
	assert roll.dice(2, 0) == 0
	assert roll.dice(3, 6, low=10, high=10) == 10


def test_distribution_range():
	roll = Roll.for_task(8)
	values = [roll.distribution() for _ in range(5000)]
	assert 1 <= min(values) and max(values) <= 10000


def test_threshold_lookup():
	table = [(10, "a"), (20, "b"), (30, "c")]
	assert threshold_lookup(table, 5) == "a"
	assert threshold_lookup(table, 10) == "a"
	assert threshold_lookup(table, 11) == "b"
	assert threshold_lookup(table, 99) == "c"
	with pytest.raises(ValueError):
		threshold_lookup([], 1)


def test_seek_and_search_with_explicit_key():
	roll = Roll.for_task(9)
	table = [(5000, "low"), (10000, "high")]
	assert roll.seek(table, 4999) == "low"
	assert roll.seek(table, 5001) == "high"
	assert roll.search([(9, "x"), (18, "y")], 12) == "y"


def test_choice_respects_weights_and_lengths():
	roll = Roll.for_task(10)
	assert all(roll.choice(["a", "b"], [0.0, 1.0]) == "b" for _ in range(200))
	with pytest.raises(ValueError):
		roll.choice(["a", "b"], [1.0])


def test_vary_stays_in_band():
	roll = Roll.for_task(11)
	for _ in range(1000):
		v = roll.vary(100.0, 0.2)
		assert 80.0 <= v <= 120.0


def test_conditional_probability_extremes():
	roll = Roll.for_task(12)
	assert not any(roll.conditional_probability(0.0) for _ in range(200))
	assert all(roll.conditional_probability(0.5, 1.0) for _ in range(200))
	assert not any(roll.conditional_probability(0.5, -1.0) for _ in range(200))


def test_gaussian_mean():
	roll = Roll.for_task(13)
	values = [roll.gaussian(10.0, 2.0) for _ in range(5000)]
	assert abs(sum(values) / len(values) - 10.0) < 0.2


def test_uid_is_deterministic():
	assert Roll.for_task(3).uid("STAR") == Roll.for_task(3).uid("STAR")
	assert Roll.for_task(3).uid("STAR").startswith("STAR-")


def test_sample_without_replacement():
	roll = Roll.for_task(14)
	picked = roll.sample(list(range(10)), 4)
	assert len(picked) == 4 and len(set(picked)) == 4
	assert sorted(roll.sample([1, 2], 5)) == [1, 2]
	assert roll.sample([], 3) == []
