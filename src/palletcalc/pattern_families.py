from __future__ import annotations

import math
from typing import List

from .models import Footprint, LayerBlock, LayerPattern


def _fit_count(span: float, size: float) -> int:
    if size <= 0:
        return 0
    return max(0, int(math.floor(span / size)))


def build_grid_pattern(width: float, depth: float, fp: Footprint) -> LayerPattern:
    cols = _fit_count(width, fp.length)
    rows = _fit_count(depth, fp.width)
    return LayerPattern(
        kind="grid",
        blocks=(LayerBlock(cols, rows, fp),),
        used_width=cols * fp.length,
        used_depth=rows * fp.width,
        per_layer=cols * rows,
        max_cols=cols,
        max_rows=rows,
    )


def build_split_x_patterns(
    width: float, depth: float, left: Footprint, right: Footprint
) -> List[LayerPattern]:
    """Left block of ``left`` columns, the rest of the width filled with ``right``.

    One candidate per left column count, from a single column up to a full
    deck of ``left`` columns.
    """
    patterns: List[LayerPattern] = []
    max_left_cols = _fit_count(width, left.length)
    rows_left = _fit_count(depth, left.width)
    rows_right = _fit_count(depth, right.width)
    for cols_left in range(1, max_left_cols + 1):
        remaining_w = width - cols_left * left.length
        if remaining_w < 0:
            break
        cols_right = _fit_count(remaining_w, right.length)
        patterns.append(
            LayerPattern(
                kind="split-x",
                blocks=(
                    LayerBlock(cols_left, rows_left, left),
                    LayerBlock(cols_right, rows_right, right),
                ),
                used_width=cols_left * left.length + cols_right * right.length,
                used_depth=max(rows_left * left.width, rows_right * right.width),
                per_layer=cols_left * rows_left + cols_right * rows_right,
                max_cols=max(cols_left, cols_right),
                max_rows=max(rows_left, rows_right),
            )
        )
    return patterns


def build_split_z_patterns(
    width: float, depth: float, front: Footprint, back: Footprint
) -> List[LayerPattern]:
    """Same sweep as :func:`build_split_x_patterns`, along the deck depth."""
    patterns: List[LayerPattern] = []
    max_front_rows = _fit_count(depth, front.width)
    cols_front = _fit_count(width, front.length)
    cols_back = _fit_count(width, back.length)
    for rows_front in range(1, max_front_rows + 1):
        remaining_d = depth - rows_front * front.width
        if remaining_d < 0:
            break
        rows_back = _fit_count(remaining_d, back.width)
        patterns.append(
            LayerPattern(
                kind="split-z",
                blocks=(
                    LayerBlock(cols_front, rows_front, front),
                    LayerBlock(cols_back, rows_back, back),
                ),
                used_width=max(cols_front * front.length, cols_back * back.length),
                used_depth=rows_front * front.width + rows_back * back.width,
                per_layer=rows_front * cols_front + rows_back * cols_back,
                max_cols=max(cols_front, cols_back),
                max_rows=max(rows_front, rows_back),
            )
        )
    return patterns


def generate_candidates(
    width: float, depth: float, a: Footprint, b: Footprint
) -> List[LayerPattern]:
    candidates: List[LayerPattern] = [
        build_grid_pattern(width, depth, a),
        build_grid_pattern(width, depth, b),
    ]
    candidates.extend(build_split_x_patterns(width, depth, a, b))
    candidates.extend(build_split_x_patterns(width, depth, b, a))
    candidates.extend(build_split_z_patterns(width, depth, a, b))
    candidates.extend(build_split_z_patterns(width, depth, b, a))
    return candidates
