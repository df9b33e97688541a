import pytest

from palletcalc.models import Footprint, LayerBlock, LayerPattern
from palletcalc.selector import PatternSelector, choose_best_layer_pattern


def _fps(length, width):
    return Footprint(length, width, 0), Footprint(width, length, 90)


def test_best_prefers_simple_grid_on_ties():
    a, b = _fps(12, 10)
    best = choose_best_layer_pattern(48, 40, a, b, 100)
    assert best is not None
    assert best.kind == "grid"
    assert best.per_layer == 16
    assert best.blocks[0].footprint.rotation == 0


def test_best_uses_rotated_grid_when_it_holds_more():
    a, b = _fps(12, 10)
    best = choose_best_layer_pattern(40, 48, a, b, 100)
    assert best.kind == "grid"
    assert best.per_layer == 16
    assert best.blocks[0].footprint.rotation == 90


def test_split_pattern_wins_on_capacity():
    a, b = _fps(20, 10)
    best = choose_best_layer_pattern(50, 30, a, b, 70)
    assert best.kind == "split-x"
    assert best.per_layer == 7
    assert best.blocks[0].cols == 2
    assert best.blocks[0].footprint.rotation == 0
    assert best.blocks[1].cols == 1
    assert best.blocks[1].footprint.rotation == 90


def test_best_returns_none_when_nothing_fits():
    a, b = _fps(200, 200)
    assert choose_best_layer_pattern(48, 40, a, b, 10) is None


def test_score_tuple_order():
    a, b = _fps(12, 10)
    selector = PatternSelector(48, 40, a, b, 100)
    grid = selector.generate_all()[0]
    score = selector.score(grid)
    assert score.key == (16, 1920, -8, 0, 0, -4)
    assert score.area_ratio == pytest.approx(1.0)

    divisible = PatternSelector(48, 40, a, b, 32).score(grid)
    assert divisible.divisible == 1
    assert divisible.remainder == 0


def test_capacity_dominates_area():
    a, b = _fps(12, 10)
    selector = PatternSelector(48, 40, a, b, 100)
    more_boxes = selector.score(
        LayerPattern("split-x", (LayerBlock(3, 2, a), LayerBlock(1, 1, b)), 46, 20, 7)
    )
    more_area = selector.score(
        LayerPattern("grid", (LayerBlock(2, 3, a),), 24, 30, 6)
    )
    assert more_boxes.used_area < more_area.used_area
    assert more_boxes.key > more_area.key


def test_fit_filter_tolerates_rounding():
    a, b = _fps(12, 10)
    selector = PatternSelector(48, 40, a, b, 100)
    block = (LayerBlock(4, 4, a),)
    assert selector.fits(LayerPattern("grid", block, 48 + 1e-7, 40, 16))
    assert not selector.fits(LayerPattern("grid", block, 48 + 1e-3, 40, 16))
    assert not selector.fits(LayerPattern("grid", (LayerBlock(0, 4, a),), 0, 40, 0))


def test_viable_excludes_zero_capacity():
    a, b = _fps(45, 10)
    selector = PatternSelector(48, 40, a, b, 5)
    assert all(p.per_layer > 0 for p in selector.viable())
    assert len(selector.viable()) < len(selector.generate_all())


def _grid(cols, rows, fp):
    return LayerPattern(
        "grid", (LayerBlock(cols, rows, fp),), cols * fp.length, rows * fp.width, cols * rows
    )


def test_squarer_pattern_wins_on_equal_capacity_and_area(monkeypatch):
    a, b = _fps(12, 10)
    selector = PatternSelector(48, 40, a, b, 100)
    long_strip = _grid(4, 2, a)
    block = _grid(2, 4, a)
    assert long_strip.per_layer == block.per_layer == 8
    assert long_strip.used_area == block.used_area == 960
    monkeypatch.setattr(selector, "generate_all", lambda: [long_strip, block])

    assert selector.best() is block


def test_single_block_wins_over_split_of_same_shape(monkeypatch):
    a, b = _fps(12, 10)
    selector = PatternSelector(48, 40, a, b, 100)
    split = LayerPattern(
        "split-x", (LayerBlock(1, 2, a), LayerBlock(1, 2, a)), 24, 20, 4
    )
    grid = _grid(2, 2, a)
    monkeypatch.setattr(selector, "generate_all", lambda: [split, grid])

    assert selector.best() is grid


def test_first_candidate_wins_full_ties(monkeypatch):
    a, b = _fps(12, 10)
    selector = PatternSelector(48, 40, a, b, 100)
    upright = _grid(2, 3, a)
    turned = _grid(3, 2, b)
    assert selector.score(upright).key == selector.score(turned).key

    monkeypatch.setattr(selector, "generate_all", lambda: [upright, turned])
    assert selector.best() is upright
    monkeypatch.setattr(selector, "generate_all", lambda: [turned, upright])
    assert selector.best() is turned


def test_square_box_keeps_unrotated_grid():
    a, b = _fps(10, 10)
    selector = PatternSelector(48, 40, a, b, 50)
    candidates = selector.generate_all()
    assert selector.score(candidates[0]).key == selector.score(candidates[1]).key

    best = selector.best()
    assert best is candidates[0]
    assert best.blocks[0].footprint.rotation == 0
