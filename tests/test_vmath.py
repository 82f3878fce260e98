import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from engbase.vmath import (
    COLOR_CODE_PURE_BLUE,
    COLOR_CODE_PURE_RED,
    COLOR_CODE_WHITE,
    COLOR_PURE_BLUE,
    COLOR_PURE_RED,
    COLOR_WHITE,
    PI,
    Mat3,
    Mat4,
    Quat,
    Rect,
    Vec2,
    Vec3,
    Vec4,
    animate_exp,
    color_code_to_vec4,
    degrees,
    epsilon_equals,
    lerp,
    radians,
)

floats = st.floats(min_value=-100, max_value=100, allow_nan=False)


def _close(a, b, tol=1e-6):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a, b))


@pytest.mark.parametrize(
    "code, color",
    [(COLOR_CODE_PURE_RED, COLOR_PURE_RED), (COLOR_CODE_PURE_BLUE, COLOR_PURE_BLUE),
     (COLOR_CODE_WHITE, COLOR_WHITE)],
)
def test_color_code_matches_named_colors(code, color):
    assert color_code_to_vec4(code) == color


def test_epsilon_equals():
    assert epsilon_equals(1.0, 1.0005)
    assert not epsilon_equals(1.0, 1.01)


@given(floats, floats)
def test_lerp_endpoints(a, b):
    assert lerp(a, b, 0) == pytest.approx(a)
    assert lerp(a, b, 1) == pytest.approx(b, abs=1e-9)


def test_radians_degrees_round_trip():
    assert radians(180) == pytest.approx(PI, rel=1e-6)
    assert degrees(radians(90)) == pytest.approx(90, rel=1e-6)


def test_animate_exp_limits():
    assert animate_exp(2.0, 10.0, 1.0, 1.0) == 10.0
    assert animate_exp(2.0, 10.0, 5.0, 0.0) == 2.0


def test_vec2_arithmetic():
    a, b = Vec2(1, 2), Vec2(3, 5)
    assert (a + b) - b == a
    assert -a + a == Vec2(0, 0)
    assert a.scale(2) == a + a
    assert a.dot(a) == a.magsq()


@given(floats, floats)
def test_vec2_normalize_has_unit_length(x, y):
    v = Vec2(x, y)
    if v.magsq() < 1e-6:
        with pytest.raises(ZeroDivisionError):
            Vec2(0, 0).normalize()
    else:
        assert v.normalize().mag() == pytest.approx(1.0)


def test_vec2_normalize_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Vec2(0, 0).normalize()


@given(floats, floats)
def test_vec2_clamp_stays_inside(x, y):
    quad = Rect(-5, -5, 10, 10)
    assert quad.contains_point(Vec2(x, y).clamp(quad))


def test_vec2_clamp_keeps_inside_point():
    assert Vec2(1, 2).clamp(Rect(0, 0, 5, 5)) == Vec2(1, 2)


def test_triple_product_with_zero_is_zero():
    assert Vec2.triple_product(Vec2(1, 2), Vec2(3, 4), Vec2(0, 0)) == Vec2(0, 0)


def test_vec3_cross_of_parallel_in_plane_vectors():
    v = Vec3(1, 0, 0)
    assert v.cross(Vec3(0, 0, 0)) == Vec3(0, 0, 0)


def test_vec3_mul_translate():
    moved = Vec3(1, 2, 1).mul(Mat3.translate(Vec2(3, 4)))
    assert moved == Vec3(1 + 3, 2 + 4, 1)


def test_vec3_mul_identity():
    v = Vec3(1.5, -2, 7)
    assert v.mul(Mat3.identity()) == v
    assert (v + v) - v == v
    assert v.scale(0) == Vec3(0, 0, 0)


def test_vec4_mul_scale_and_translate():
    v = Vec4(2, 3, 4, 1)
    assert v.mul(Mat4.scale(Vec3(2, 3, 4))) == Vec4(2 * 2, 3 * 3, 4 * 4, 1)
    assert v.mul(Mat4.translate(Vec3(1, 1, 1))) == Vec4(2 + 1, 3 + 1, 4 + 1, 1)


def test_vec4_lerp_and_arith():
    a, b = Vec4(0, 0, 0, 0), Vec4(2, 4, 6, 8)
    assert a.lerp(b, 0) == a
    assert a.lerp(b, 1) == b
    assert b.scale(0.5) + b.scale(0.5) == b
    assert b - b == a


@given(st.lists(floats, min_size=9, max_size=9))
def test_mat3_identity_is_neutral(values):
    m = Mat3(tuple(values))
    assert m @ Mat3.identity() == m
    assert Mat3.identity() @ m == m


def test_mat3_rotate_inverse():
    r = Mat3.rotate(37) @ Mat3.rotate(-37)
    expected = [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0]
    assert list(r.a) == pytest.approx(expected, abs=1e-6)


def test_mat3_scale_forms_agree():
    assert Mat3.scalef(3) == Mat3.scalev(Vec2(3, 3))


def test_mat3_getitem_and_bad_size():
    m = Mat3.translate(Vec2(3, 4))
    assert m[2, 0] == 3 and m[2, 1] == 4 and m[2] == 3
    with pytest.raises(ValueError):
        Mat3((1, 2, 3))
    with pytest.raises(IndexError):
        m[3, 0]


@given(st.lists(floats, min_size=16, max_size=16))
def test_mat4_transpose_involution_and_identity(values):
    m = Mat4(tuple(values))
    assert m.transpose().transpose() == m
    assert m @ Mat4.identity() == m
    assert m.transpose()[1, 0] == m[0, 1]


@pytest.mark.parametrize("rot", [Mat4.rot_x, Mat4.rot_y, Mat4.rot_z])
def test_mat4_rotations(rot):
    assert rot(0) == Mat4.identity()
    assert _close((rot(30) @ rot(-30)).a, Mat4.identity().a)


def test_mat4_ortho_unit_box():
    assert Mat4.ortho(-1, 1, 1, -1, -1, 1) == Mat4.scale(Vec3(1, 1, -1))


def test_mat4_perspective_right_angle():
    p = Mat4.perspective(90, 1, 1, 3)
    assert p[0] == pytest.approx(1.0, rel=1e-6)
    assert p[5] == pytest.approx(p[0])
    assert p[10] == pytest.approx(-2 / (3 - 1))
    assert p[14] == pytest.approx(-(3 + 1) / (3 - 1))


def test_quat_identity_properties():
    q = Quat.identity()
    assert q.length() == 1.0
    assert q * q == q
    assert Quat.from_euler(0, 0, 0) == q
    assert q.to_rotation_mat() == Mat4.identity()


@given(floats, floats, floats, floats)
def test_quat_norm_unit_length(s, i, j, k):
    q = Quat(s, i, j, k)
    if q.length() > 1e-3:
        assert q.norm().length() == pytest.approx(1.0)
    else:
        assert q.length() >= 0


def test_quat_rotate_axis_ignores_receiver():
    a = Quat(2, 0, 0, 0).rotate_axis(0, 0, 1, 1.0)
    b = Quat.identity().rotate_axis(0, 0, 1, 1.0)
    assert a == b
    assert a.length() == pytest.approx(1.0)


def test_rect_contains_and_overlaps():
    r = Rect(0, 0, 10, 10)
    assert r.contains_point(Vec2(10, 10))
    assert not r.contains_point(Vec2(11, 5))
    assert r.overlaps(Rect(5, 5, 10, 10))
    assert not r.overlaps(Rect(20, 20, 1, 1))
    assert Rect(2, 2, 3, 3).contained_by(r)
    assert not r.contained_by(Rect(2, 2, 3, 3))


def test_rect_overlap():
    assert Rect(0, 0, 10, 10).overlap(Rect(5, 0, 10, 10)) == Rect(5, 0, 10 - 5, 10)


def test_rect_uv_cull_untouched_cases():
    uv = Rect(0, 0, 1, 1)
    assert Rect(0, 0, 1, 1).uv_cull(uv, Rect(50, 50, 1, 1)) == uv
    assert Rect(1, 1, 2, 2).uv_cull(uv, Rect(0, 0, 10, 10)) == uv


def test_rect_uv_cull_partial():
    culled = Rect(0, 0, 10, 10).uv_cull(Rect(0, 0, 1, 1), Rect(5, 0, 10, 10))
    assert [culled.x, culled.y, culled.w, culled.h] == pytest.approx(
        [0.5, 0.0, 0.5, 1.0], abs=1e-6
    )