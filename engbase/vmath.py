"""Small-vector, matrix, quaternion and rectangle math for 2D/3D rendering.

Matrices store their elements in a flat tuple; element ``(x, y)`` lives at
index ``y * n + x``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

EPSILON = 0.001
PI = 3.141592653589
PHI = 1.61803399
HALF_PI = 1.570796326794
DEG_TO_RAD = 0.0174532925
RAD_TO_DEG = 57.2957795131
FLOAT_MAX = 340282346638528859811704183484516925440.0
FLOAT_MIN = -FLOAT_MAX


class Axis2(IntEnum):
    X = 0
    Y = 1


class Axis3(IntEnum):
    X = 0
    Y = 1
    Z = 2


def _clamp(lo: float, value: float, hi: float) -> float:
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between ``a`` and ``b``."""
    return a * (1 - t) + b * t


def radians(deg: float) -> float:
    return deg * DEG_TO_RAD


def degrees(rad: float) -> float:
    return rad * RAD_TO_DEG


def epsilon_equals(x: float, y: float) -> bool:
    """True when ``x`` and ``y`` differ by at most ``EPSILON``."""
    return abs(x - y) <= EPSILON


def animate_exp(value: float, target: float, speed: float, dt: float) -> float:
    """Move ``value`` towards ``target`` by a fraction ``dt * speed`` of the gap."""
    return value + (target - value) * dt * speed


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def scale(self, s: float) -> Vec2:
        return Vec2(self.x * s, self.y * s)

    def mag(self) -> float:
        return math.sqrt(self.magsq())

    def magsq(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> Vec2:
        return self.scale(1.0 / self.mag())

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    @staticmethod
    def triple_product(a: Vec2, b: Vec2, c: Vec2) -> Vec2:
        """``a x (b x c)`` computed in 3D with z = 0, projected back to 2D."""
        p = Vec3(b.x, b.y, 0.0).cross(Vec3(c.x, c.y, 0.0))
        q = Vec3(a.x, a.y, 0.0).cross(p)
        return Vec2(q.x, q.y)

    def clamp(self, quad: Rect) -> Vec2:
        """Clamp this point into ``quad``."""
        return Vec2(
            _clamp(quad.x, self.x, quad.x + quad.w),
            _clamp(quad.y, self.y, quad.y + quad.h),
        )


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s: float) -> Vec3:
        return Vec3(self.x * s, self.y * s, self.z * s)

    def cross(self, other: Vec3) -> Vec3:
        a, b = self, other
        return Vec3(
            a.y * b.z - b.y * a.z,
            a.x * b.z - b.x * a.z,
            a.x * b.y + b.x * a.y,
        )

    def mul(self, m: Mat3) -> Vec3:
        """Multiply by ``m``; each component is a dot with one storage row."""
        a = self
        return Vec3(
            a.x * m[0, 0] + a.y * m[1, 0] + a.z * m[2, 0],
            a.x * m[0, 1] + a.y * m[1, 1] + a.z * m[2, 1],
            a.x * m[0, 2] + a.y * m[1, 2] + a.z * m[2, 2],
        )


@dataclass(frozen=True)
class Vec4:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __add__(self, other: Vec4) -> Vec4:
        return Vec4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Vec4) -> Vec4:
        return Vec4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def scale(self, s: float) -> Vec4:
        return Vec4(self.x * s, self.y * s, self.z * s, self.w * s)

    def lerp(self, other: Vec4, t: float) -> Vec4:
        return Vec4(
            lerp(self.x, other.x, t),
            lerp(self.y, other.y, t),
            lerp(self.z, other.z, t),
            lerp(self.w, other.w, t),
        )

    def mul(self, m: Mat4) -> Vec4:
        """Multiply by ``m``; each component is a dot with one storage row."""
        a = self
        return Vec4(*(
            a.x * m[0, row] + a.y * m[1, row] + a.z * m[2, row] + a.w * m[3, row]
            for row in range(4)
        ))


def _matmul(a: tuple[float, ...], b: tuple[float, ...], n: int) -> tuple[float, ...]:
    result = [0.0] * (n * n)
    for j in range(n):
        for i in range(n):
            result[j * n + i] = sum(a[k * n + i] * b[j * n + k] for k in range(n))
    return tuple(result)


class _Matrix:
    SIZE = 0
    a: tuple[float, ...]

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.a)
        if len(values) != self.SIZE * self.SIZE:
            raise ValueError(
                f"{type(self).__name__} needs {self.SIZE * self.SIZE} elements, got {len(values)}"
            )
        object.__setattr__(self, "a", values)

    def __getitem__(self, index: int | tuple[int, int]) -> float:
        """Element at flat ``index`` or at ``(x, y)``."""
        if isinstance(index, tuple):
            x, y = index
            if not (0 <= x < self.SIZE and 0 <= y < self.SIZE):
                raise IndexError("matrix index out of range")
            return self.a[y * self.SIZE + x]
        return self.a[index]


@dataclass(frozen=True)
class Mat3(_Matrix):
    a: tuple[float, ...]
    SIZE = 3

    @classmethod
    def identity(cls) -> Mat3:
        return cls((1.0, 0.0, 0.0,
                    0.0, 1.0, 0.0,
                    0.0, 0.0, 1.0))

    @classmethod
    def translate(cls, v: Vec2) -> Mat3:
        return cls((1.0, 0.0, v.x,
                    0.0, 1.0, v.y,
                    0.0, 0.0, 1.0))

    @classmethod
    def rotate(cls, r: float) -> Mat3:
        """Rotation by ``r`` degrees."""
        c, s = math.cos(radians(r)), math.sin(radians(r))
        return cls((c, -s, 0.0,
                    s, c, 0.0,
                    0.0, 0.0, 1.0))

    @classmethod
    def scalev(cls, s: Vec2) -> Mat3:
        return cls((s.x, 0.0, 0.0,
                    0.0, s.y, 0.0,
                    0.0, 0.0, 1.0))

    @classmethod
    def scalef(cls, s: float) -> Mat3:
        return cls((s, 0.0, 0.0,
                    0.0, s, 0.0,
                    0.0, 0.0, 1.0))

    def __matmul__(self, other: Mat3) -> Mat3:
        if not isinstance(other, Mat3):
            return NotImplemented
        return Mat3(_matmul(self.a, other.a, 3))

    def __getitem__(self, index: int | tuple[int, int]) -> float:
        return _Matrix.__getitem__(self, index)


@dataclass(frozen=True)
class Mat4(_Matrix):
    a: tuple[float, ...]
    SIZE = 4

    @classmethod
    def identity(cls) -> Mat4:
        return cls((1.0, 0.0, 0.0, 0.0,
                    0.0, 1.0, 0.0, 0.0,
                    0.0, 0.0, 1.0, 0.0,
                    0.0, 0.0, 0.0, 1.0))

    @classmethod
    def translate(cls, v: Vec3) -> Mat4:
        return cls((1.0, 0.0, 0.0, v.x,
                    0.0, 1.0, 0.0, v.y,
                    0.0, 0.0, 1.0, v.z,
                    0.0, 0.0, 0.0, 1.0))

    @classmethod
    def scale(cls, v: Vec3) -> Mat4:
        return cls((v.x, 0.0, 0.0, 0.0,
                    0.0, v.y, 0.0, 0.0,
                    0.0, 0.0, v.z, 0.0,
                    0.0, 0.0, 0.0, 1.0))

    @classmethod
    def rot_x(cls, deg: float) -> Mat4:
        rad = deg * DEG_TO_RAD
        c, s = math.cos(rad), math.sin(rad)
        return cls((1.0, 0.0, 0.0, 0.0,
                    0.0, c, -s, 0.0,
                    0.0, s, c, 0.0,
                    0.0, 0.0, 0.0, 1.0))

    @classmethod
    def rot_y(cls, deg: float) -> Mat4:
        rad = deg * DEG_TO_RAD
        c, s = math.cos(rad), math.sin(rad)
        return cls((c, 0.0, -s, 0.0,
                    0.0, 1.0, 0.0, 0.0,
                    s, 0.0, c, 0.0,
                    0.0, 0.0, 0.0, 1.0))

    @classmethod
    def rot_z(cls, deg: float) -> Mat4:
        rad = deg * DEG_TO_RAD
        c, s = math.cos(rad), math.sin(rad)
        return cls((c, -s, 0.0, 0.0,
                    s, c, 0.0, 0.0,
                    0.0, 0.0, 1.0, 0.0,
                    0.0, 0.0, 0.0, 1.0))

    @classmethod
    def ortho(cls, left: float, right: float, top: float, bottom: float,
              near: float, far: float) -> Mat4:
        width = right - left
        height = top - bottom
        depth = far - near
        return cls((2.0 / width, 0.0, 0.0, 0.0,
                    0.0, 2.0 / height, 0.0, 0.0,
                    0.0, 0.0, -2.0 / depth, 0.0,
                    -(right + left) / width, -(top + bottom) / height,
                    -(far + near) / depth, 1.0))

    @classmethod
    def perspective(cls, fov: float, aspect_ratio: float, near: float, far: float) -> Mat4:
        top = math.tan(fov * DEG_TO_RAD / 2) * near
        right = top * aspect_ratio
        depth = far - near
        return cls((1.0 / right, 0.0, 0.0, 0.0,
                    0.0, 1.0 / top, 0.0, 0.0,
                    0.0, 0.0, -2.0 / depth, 0.0,
                    0.0, 0.0, -(far + near) / depth, 1.0))

    def __matmul__(self, other: Mat4) -> Mat4:
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4(_matmul(self.a, other.a, 4))

    def __getitem__(self, index: int | tuple[int, int]) -> float:
        return _Matrix.__getitem__(self, index)

    def transpose(self) -> Mat4:
        return Mat4(tuple(self.a[i * 4 + j] for j in range(4) for i in range(4)))


@dataclass(frozen=True)
class Quat:
    s: float = 1.0
    i: float = 0.0
    j: float = 0.0
    k: float = 0.0

    @classmethod
    def identity(cls) -> Quat:
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_euler(cls, yaw: float, pitch: float, roll: float) -> Quat:
        """Build a quaternion from angles in radians."""
        cy, sy = math.cos(yaw * 0.5), math.sin(yaw * 0.5)
        cp, sp = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
        cr, sr = math.cos(roll * 0.5), math.sin(roll * 0.5)
        return cls(
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        )

    def __mul__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        a, b = self, other
        return Quat(
            a.s * b.s - a.i * b.i - a.j * b.j - a.k * b.k,
            a.s * b.i + a.i * b.s + a.j * b.k + a.k * b.j,
            a.s * b.j + a.j * b.s + a.i * b.k + a.k * b.i,
            a.s * b.k + a.k * b.s + a.i * b.j + a.j * b.i,
        )

    def length(self) -> float:
        return math.sqrt(self.s * self.s + self.i * self.i + self.j * self.j + self.k * self.k)

    def norm(self) -> Quat:
        n = self.length()
        return Quat(self.s / n, self.i / n, self.j / n, self.k / n)

    def rotate_axis(self, x: float, y: float, z: float, a: float) -> Quat:
        """Normalised rotation of ``a`` radians about ``(x, y, z)``.

        The result does not depend on this quaternion.
        """
        factor = math.sin(a / 2.0)
        return Quat(math.cos(a / 2.0), x * factor, y * factor, z * factor).norm()

    def to_rotation_mat(self) -> Mat4:
        q = self
        isq, jsq, ksq = q.i * q.i, q.j * q.j, q.k * q.k
        return Mat4((
            1 - 2 * jsq - 2 * ksq, 2 * q.i * q.j - 2 * q.s * q.k,
            2 * q.i * q.k + 2 * q.s * q.j, 0.0,
            2 * q.i * q.j + 2 * q.s * q.k, 1 - 2 * isq - 2 * ksq,
            2 * q.j * q.k - 2 * q.s * q.i, 0.0,
            2 * q.i * q.k - 2 * q.s * q.j, 2 * q.j * q.k + 2 * q.s * q.i,
            1 - 2 * isq - 2 * jsq, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ))


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def contains_point(self, p: Vec2) -> bool:
        return self.x <= p.x and self.y <= p.y and self.x + self.w >= p.x and self.y + self.h >= p.y

    def overlaps(self, other: Rect) -> bool:
        a, b = self, other
        x = ((b.x <= a.x <= b.x + b.w)
             or (b.x <= a.x + a.w <= b.x + b.w)
             or (a.x <= b.x and a.x + a.w >= b.x + b.w))
        y = ((b.y <= a.y <= b.y + b.h)
             or (b.y <= a.y + a.h <= b.y + b.h)
             or (a.y <= b.y and a.y + a.h >= b.y + b.h))
        return bool(x and y)

    def contained_by(self, other: Rect) -> bool:
        a, b = self, other
        x = (b.x <= a.x <= b.x + b.w) and (b.x <= a.x + a.w <= b.x + b.w)
        y = (b.y <= a.y <= b.y + b.h) and (b.y <= a.y + a.h <= b.y + b.h)
        return x and y

    def overlap(self, other: Rect) -> Rect:
        a, b = self, other
        min_x, min_y = max(a.x, b.x), max(a.y, b.y)
        max_x, max_y = min(a.x + a.w, b.x + b.w), min(a.y + a.h, b.y + b.h)
        return Rect(min_x, min_y, max_x - min_x, max_y - min_y)

    def uv_cull(self, uv: Rect, cull_quad: Rect) -> Rect:
        """Shrink ``uv`` to match the part of this quad inside ``cull_quad``."""
        quad = self
        if not quad.overlaps(cull_quad) or quad.contained_by(cull_quad):
            return uv
        x_shift = not (cull_quad.x <= quad.x <= cull_quad.x + cull_quad.w)
        y_shift = not (cull_quad.y <= quad.y <= cull_quad.y + cull_quad.h)
        uv_xratio = uv.w / quad.w
        uv_yratio = uv.h / quad.h
        over = quad.overlap(cull_quad)
        return Rect(
            uv.x + (quad.w - over.w) * uv_xratio * x_shift,
            uv.y + (quad.h - over.h) * uv_yratio * y_shift,
            over.w * uv_xratio,
            over.h * uv_yratio,
        )


def color_code_to_vec4(code: int) -> Vec4:
    """Turn a 0xRRGGBBAA code into components in [0, 1]."""
    return Vec4(
        ((code >> 24) & 0xFF) / 255.0,
        ((code >> 16) & 0xFF) / 255.0,
        ((code >> 8) & 0xFF) / 255.0,
        (code & 0xFF) / 255.0,
    )


COLOR_RED = Vec4(0.8, 0.2, 0.3, 1.0)
COLOR_GREEN = Vec4(0.2, 0.8, 0.3, 1.0)
COLOR_BLUE = Vec4(0.3, 0.2, 0.8, 1.0)
COLOR_MAGENTA = Vec4(0.8, 0.3, 0.7, 1.0)
COLOR_CYAN = Vec4(0.3, 0.8, 0.7, 1.0)
COLOR_YELLOW = Vec4(0.8, 0.7, 0.3, 1.0)
COLOR_PURE_RED = Vec4(1.0, 0.0, 0.0, 1.0)
COLOR_PURE_GREEN = Vec4(0.0, 1.0, 0.0, 1.0)
COLOR_PURE_BLUE = Vec4(0.0, 0.0, 1.0, 1.0)
COLOR_WHITE = Vec4(1.0, 1.0, 1.0, 1.0)

COLOR_CODE_RED = 0xCC4D33FF
COLOR_CODE_GREEN = 0x33CC4DFF
COLOR_CODE_BLUE = 0x4D33CCFF
COLOR_CODE_MAGENTA = 0xCC4DB1FF
COLOR_CODE_PURPLE = 0x8B46B3FF
COLOR_CODE_CYAN = 0x4DCCB1FF
COLOR_CODE_YELLOW = 0xCCB14DFF
COLOR_CODE_PURE_RED = 0xFF0000FF
COLOR_CODE_PURE_GREEN = 0x00FF00FF
COLOR_CODE_PURE_BLUE = 0x0000FFFF
COLOR_CODE_WHITE = 0xFFFFFFFF