import math

import pytest

from robocode_duelist.mathutil import Color, DomainError, RandomSource, normalize_angle_degrees


@pytest.mark.parametrize(
    ("angle", "expected"),
    [
        (0.0, 0.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (190.0, -170.0),
        (-190.0, 170.0),
        (360.0, 0.0),
        (540.0, 180.0),
        (-540.0, 180.0),
        (725.0, 5.0),
        (-90.0, -90.0),
    ],
)
def test_normalize_known_values(angle: float, expected: float) -> None:
    assert normalize_angle_degrees(angle) == pytest.approx(expected)


@pytest.mark.parametrize("angle", [-725.5, -12.25, 0.5, 179.75, 1000.125])
@pytest.mark.parametrize("turns", [-3, -1, 1, 4])
def test_normalize_is_periodic(angle: float, turns: int) -> None:
    base = normalize_angle_degrees(angle)
    shifted = normalize_angle_degrees(angle + 360 * turns)
    assert shifted == pytest.approx(base, abs=1e-9)
    assert -180.0 < base <= 180.0


def test_normalize_rejects_non_finite() -> None:
    with pytest.raises(DomainError):
        normalize_angle_degrees(math.nan)
    with pytest.raises(DomainError):
        normalize_angle_degrees(math.inf)


def test_uniform_samples_stay_in_range() -> None:
    rng = RandomSource(seed=1234)
    samples = [rng.uniform(-3.5, 12.0) for _ in range(10_000)]
    assert all(-3.5 <= s <= 12.0 for s in samples)


def test_uniform_degenerate_range_returns_bound() -> None:
    rng = RandomSource(seed=1)
    assert rng.uniform(4.25, 4.25) == 4.25


def test_uniform_rejects_misordered_bounds() -> None:
    with pytest.raises(DomainError):
        RandomSource(seed=1).uniform(5.0, 1.0)


def test_seeded_sources_repeat() -> None:
    a = RandomSource(seed=99)
    b = RandomSource(seed=99)
    assert [a.uniform(0, 10) for _ in range(5)] == [b.uniform(0, 10) for _ in range(5)]


def test_chance_edges(scripted) -> None:
    rng = scripted(0.0, 0.5, 0.999)
    assert not any(rng.chance(0.0) for _ in range(3))
    assert all(rng.chance(1.0) for _ in range(3))
    with pytest.raises(DomainError):
        rng.chance(1.5)


def test_chance_compares_draw_to_probability(scripted) -> None:
    rng = scripted(0.19, 0.2, 0.21)
    assert [rng.chance(0.2) for _ in range(3)] == [True, False, False]


def test_random_color_channels() -> None:
    rng = RandomSource(seed=5)
    for _ in range(100):
        color = rng.random_color()
        assert 0.0 <= color.r <= 1.0
        assert 0.0 <= color.g <= 1.0
        assert 0.0 <= color.b <= 1.0


def test_color_hex_conversion() -> None:
    assert Color.from_hex("#00ff00") == Color(0.0, 1.0, 0.0)
    assert Color.from_hex("ffc800").to_rgb255() == (255, 200, 0)
    with pytest.raises(DomainError):
        Color.from_hex("#fff")
    with pytest.raises(DomainError):
        Color(1.2, 0.0, 0.0)
