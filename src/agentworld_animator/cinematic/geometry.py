"""
Vector and quaternion helpers for camera poses.

Vectors are plain ``(x, y, z)`` float tuples and quaternions are ``(x, y, z, w)``
tuples, so poses stay hashable and cheap to copy between threads.
"""

import math
from typing import Sequence, Tuple

Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]

EPSILON = 1e-9

UNIT_X: Vector3 = (1.0, 0.0, 0.0)
UNIT_Y: Vector3 = (0.0, 1.0, 0.0)
UNIT_Z: Vector3 = (0.0, 0.0, 1.0)


def as_vector(values: Sequence[float]) -> Vector3:
    """Coerce a 3-element sequence into a float tuple."""
    if len(values) != 3:
        raise ValueError("Vectors must be [x, y, z] arrays")
    return (float(values[0]), float(values[1]), float(values[2]))


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def subtract(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vector3, factor: float) -> Vector3:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Vector3) -> float:
    return math.sqrt(dot(v, v))


def distance(a: Vector3, b: Vector3) -> float:
    """Euclidean distance between two points."""
    return length(subtract(b, a))


def normalize(v: Vector3) -> Vector3:
    """Unit vector along ``v``; raises ValueError for a zero-length vector."""
    norm = length(v)
    if norm < EPSILON:
        raise ValueError("Cannot normalize a zero-length vector")
    return scale(v, 1.0 / norm)


def lerp(start: Vector3, goal: Vector3, fraction: float) -> Vector3:
    """Linear interpolation ``start + fraction * (goal - start)``.

    Returns ``goal`` itself at ``fraction == 1.0`` so segment endpoints are
    reproduced without rounding error.
    """
    if fraction == 1.0:
        return goal
    return add(start, scale(subtract(goal, start), fraction))


def any_perpendicular(v: Vector3) -> Vector3:
    """A unit vector perpendicular to ``v`` (``v`` must be non-zero)."""
    axis = UNIT_X if abs(v[0]) < 0.9 * length(v) else UNIT_Y
    return normalize(cross(v, axis))


def look_basis(forward: Vector3, up: Vector3) -> Tuple[Vector3, Vector3, Vector3]:
    """Orthonormal (forward, left, up) basis for a camera looking along ``forward``.

    ``up`` only selects the roll; when it is parallel to ``forward`` an arbitrary
    perpendicular is used instead.
    """
    forward = normalize(forward)
    left = cross(up, forward)
    if length(left) < EPSILON:
        left = any_perpendicular(forward)
    else:
        left = normalize(left)
    true_up = cross(forward, left)
    return forward, left, true_up


def quaternion_from_axes(x_axis: Vector3, y_axis: Vector3, z_axis: Vector3) -> Quaternion:
    """Quaternion (x, y, z, w) of the rotation whose matrix columns are the given axes."""
    m00, m10, m20 = x_axis
    m01, m11, m21 = y_axis
    m02, m12, m22 = z_axis
    trace = m00 + m11 + m22

    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        w = 0.25 * s
        x = (m21 - m12) / s
        y = (m02 - m20) / s
        z = (m10 - m01) / s
    elif m00 > m11 and m00 > m22:
        s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
        w = (m21 - m12) / s
        x = 0.25 * s
        y = (m01 + m10) / s
        z = (m02 + m20) / s
    elif m11 > m22:
        s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
        w = (m02 - m20) / s
        x = (m01 + m10) / s
        y = 0.25 * s
        z = (m12 + m21) / s
    else:
        s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
        w = (m10 - m01) / s
        x = (m02 + m20) / s
        y = (m12 + m21) / s
        z = 0.25 * s

    norm = math.sqrt(x * x + y * y + z * z + w * w)
    return (x / norm, y / norm, z / norm, w / norm)


def rotate(q: Quaternion, v: Vector3) -> Vector3:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    qv = (q[0], q[1], q[2])
    t = scale(cross(qv, v), 2.0)
    return add(add(v, scale(t, q[3])), cross(qv, t))
