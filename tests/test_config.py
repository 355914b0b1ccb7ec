import pytest

from plinko.config import (BoardLayout, PhysicsConfig, VARIANTS, WallStyle,
                           get_variant)
from plinko.engine import PlinkoEngine


@pytest.mark.parametrize('friction', [0.0, -0.5, 1.01])
def test_friction_out_of_range(friction):
    with pytest.raises(ValueError):
        PhysicsConfig(friction=friction)


def test_friction_of_one_is_allowed():
    assert PhysicsConfig(friction=1.0).friction == 1.0


def test_bad_layouts():
    with pytest.raises(ValueError):
        BoardLayout(bin_labels=())
    with pytest.raises(ValueError):
        BoardLayout(peg_rows=(3, 0, 3))
    with pytest.raises(ValueError):
        BoardLayout(zigzag_segments=0)


def test_wall_style_accepts_strings():
    assert BoardLayout(wall_style='zigzag').wall_style is WallStyle.ZIGZAG
    with pytest.raises(ValueError):
        BoardLayout(wall_style='spiral')


def test_configs_are_immutable():
    physics = PhysicsConfig()
    with pytest.raises(AttributeError):
        physics.gravity = 1.0


def test_settle_line():
    assert PhysicsConfig(settle_margin=10).settle_line(700) == 690
    assert PhysicsConfig(settle_margin_ratio=0.03).settle_line(700) == pytest.approx(679)


def test_get_variant():
    assert get_variant('floaty').physics.divider_clamp is False
    assert get_variant('classic').layout.wall_style is WallStyle.NONE
    assert get_variant('zigzag').layout.wall_style is WallStyle.ZIGZAG
    with pytest.raises(KeyError, match='known'):
        get_variant('bouncy')


@pytest.mark.parametrize('name', sorted(VARIANTS))
def test_every_variant_runs(name):
    engine = PlinkoEngine.from_variant(name, seed=0)
    engine.spawn_ball()
    for _ in range(50):
        engine.tick()
    assert engine.tick_count == 50
