import math

import pytest

from rigidsim.geometry import (
    AABB,
    Vec2,
    Vertex,
    cross,
    dcmp,
    dot,
    foot_of_perpendicular,
    is_in_polygon,
    length,
    normalize,
    on_segment,
    perp_scale,
    reverse,
    scale,
    sqr,
    triple_product,
)

A = Vec2(3.0, -2.0)
B = Vec2(-1.5, 4.0)


def test_add_sub_round_trip():
    assert (A + B) - B == A


def test_neg_matches_reverse():
    assert -A == reverse(A)
    assert reverse(reverse(A)) == A


def test_scalar_mul_matches_addition():
    assert A * 2 == A + A
    assert 2 * A == A * 2
    assert scale(2, A) == A * 2


def test_vector_mul_is_dot():
    assert A * B == A.dot(B) == dot(A, B)
    assert dot(A, B) == dot(B, A)


def test_truediv_inverse_of_mul():
    assert (A * 4) / 4 == A
    with pytest.raises(ZeroDivisionError):
        A / 0


def test_vertex_xy():
    v = Vertex(1.5, -2.5, 0.0, 0.0, 1.0, 0.0)
    assert v.xy() == Vec2(1.5, -2.5)


def test_dcmp_tolerance():
    assert dcmp(1e-7) == 0
    assert dcmp(-1e-7) == 0
    assert dcmp(0.5) == 1
    assert dcmp(-0.5) == -1


def test_cross_antisymmetric_and_parallel():
    assert cross(A, B) == -cross(B, A)
    assert cross(A, A * 3) == 0


def test_perp_scale_is_perpendicular():
    p = perp_scale(2.0, A)
    assert dot(p, A) == 0
    assert length(p) == pytest.approx(2.0 * length(A))
    assert cross(A, perp_scale(1.0, A)) > 0


def test_normalize_unit_length_and_direction():
    n = normalize(A)
    assert length(n) == pytest.approx(1.0)
    assert cross(n, A) == pytest.approx(0.0)
    assert dot(n, A) > 0


def test_normalize_zero_vector_gives_nan():
    n = normalize(Vec2(0.0, 0.0))
    assert [math.isnan(n.x), math.isnan(n.y)] == [True, True]


def test_sqr_and_length():
    assert sqr(length(A)) == pytest.approx(dot(A, A))
    assert sqr(-3.0) == 9.0


def test_on_segment():
    p1, p2 = Vec2(-2.0, -2.0), Vec2(2.0, 2.0)
    assert on_segment(p1, p2, (p1 + p2) / 2)
    assert on_segment(p1, p2, p1)
    assert not on_segment(p1, p2, p2 * 2)
    assert not on_segment(p1, p2, Vec2(1.0, -1.0))


def test_triple_product_sign():
    a = Vec2(1.0, 0.0)
    left = triple_product(a, Vec2(0.0, 1.0), a)
    right = triple_product(a, Vec2(0.0, -1.0), a)
    assert left == -right
    assert dot(left, Vec2(0.0, 1.0)) > 0


def test_foot_of_perpendicular_is_orthogonal():
    point, a, b = Vec2(2.0, 5.0), Vec2(-1.0, 1.0), Vec2(4.0, 3.0)
    foot = foot_of_perpendicular(point, a, b)
    assert dot(point - foot, b - a) == pytest.approx(0.0)
    assert cross(foot - a, b - a) == pytest.approx(0.0)


def test_foot_of_perpendicular_example():
    assert foot_of_perpendicular(Vec2(0.0, 0.0), Vec2(-1.0, 1.0), Vec2(1.0, 1.0)) == Vec2(0.0, 1.0)


def test_foot_of_perpendicular_degenerate_segment():
    foot = foot_of_perpendicular(Vec2(1.0, 1.0), Vec2(2.0, 2.0), Vec2(2.0, 2.0))
    assert [math.isnan(foot.x), math.isnan(foot.y)] == [True, True]


def test_is_in_polygon_segment_through_origin():
    simplex = [Vec2(-1.0, 0.0), Vec2(1.0, 0.0)]
    direction = Vec2(0.0, 1.0)
    inside, new_dir = is_in_polygon(simplex, direction)
    assert inside is True
    assert new_dir == direction
    assert len(simplex) == 2


@pytest.mark.parametrize(
    "s0, s1",
    [(Vec2(1.0, -1.0), Vec2(1.0, 1.0)), (Vec2(1.0, 1.0), Vec2(1.0, -1.0))],
)
def test_is_in_polygon_segment_points_toward_origin(s0, s1):
    inside, new_dir = is_in_polygon([s0, s1], Vec2(1.0, 0.0))
    assert inside is False
    assert dot(new_dir, s1 - s0) == 0
    assert dot(new_dir, Vec2(0.0, 0.0) - s0) > 0


def test_is_in_polygon_triangle_containing_origin():
    simplex = [Vec2(-1.0, -1.0), Vec2(1.0, -1.0), Vec2(0.0, 1.0)]
    original = list(simplex)
    inside, _ = is_in_polygon(simplex, Vec2(0.0, 1.0))
    assert inside is True
    assert simplex == original


def test_is_in_polygon_triangle_drops_point():
    a, b, c = Vec2(1.0, 1.0), Vec2(2.0, 1.0), Vec2(1.0, 2.0)
    simplex = [a, b, c]
    inside, new_dir = is_in_polygon(simplex, Vec2(0.0, 1.0))
    assert inside is False
    assert simplex == [a, c]
    assert dot(new_dir, Vec2(0.0, 0.0) - c) >= 0


def test_is_in_polygon_rejects_single_point():
    with pytest.raises(ValueError):
        is_in_polygon([Vec2(1.0, 1.0)], Vec2(1.0, 0.0))


def test_aabb_enlarge():
    box = AABB(0.0, 0.0, 2.0, 3.0).enlarge(0.5)
    assert box == AABB(-0.5, -0.5, 2.5, 3.5)


def test_aabb_merge_covers_both():
    first = AABB(0.0, 0.0, 1.0, 1.0)
    second = AABB(-2.0, 0.5, 0.5, 4.0)
    merged = AABB(first.x0, first.y0, first.x1, first.y1).merge(second)
    for box in (first, second):
        assert merged.x0 <= box.x0 and merged.y0 <= box.y0
        assert merged.x1 >= box.x1 and merged.y1 >= box.y1


def test_aabb_include_point():
    point = Vec2(5.0, -3.0)
    box = AABB(0.0, 0.0, 1.0, 1.0).include(point)
    assert box.x1 == point.x and box.y0 == point.y
    assert box.x0 == 0.0 and box.y1 == 1.0


def test_aabb_overlaps():
    base = AABB(0.0, 0.0, 1.0, 1.0)
    touching = AABB(1.0, 0.0, 2.0, 1.0)
    apart = AABB(1.5, 1.5, 2.0, 2.0)
    assert base.overlaps(touching) and touching.overlaps(base)
    assert not base.overlaps(apart) and not apart.overlaps(base)
    assert apart.enlarge(0.6).overlaps(base)