#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

EULER_ORDERS = ('XYZ', 'YXZ', 'ZXY', 'ZYX', 'YZX', 'XZY')


class Vector3:
    """3-component vector. Components are mutable, arithmetic returns new vectors."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __repr__(self):
        return f"Vector3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vector3 index out of range")

    def __eq__(self, other):
        if isinstance(other, Vector3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    __hash__ = None

    def __add__(self, other):
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar):
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar):
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def set(self, x: float, y: float, z: float) -> 'Vector3':
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def copy(self, other: 'Vector3') -> 'Vector3':
        return self.set(other.x, other.y, other.z)

    def clone(self) -> 'Vector3':
        return Vector3(self.x, self.y, self.z)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vector3':
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> 'Vector3':
        m = self.length()
        if m == 0:
            return Vector3(0, 0, 0)
        return self / m

    def apply_matrix4(self, matrix: 'Matrix4') -> 'Vector3':
        """Transform as a point (w=1) and divide by the resulting w.

        Projection matrices change w; affine ones leave it at 1. A w of
        exactly zero is passed through undivided.
        """
        x, y, z, w = matrix.elements @ np.array((self.x, self.y, self.z, 1.0))
        if w != 1.0 and w != 0.0:
            return Vector3(x / w, y / w, z / w)
        return Vector3(x, y, z)


class Euler:
    """Rotation angles in radians, applied in the given axis order."""
    __slots__ = ('x', 'y', 'z', '_order')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, order: str = 'XYZ'):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.order = order

    @property
    def order(self) -> str:
        return self._order

    @order.setter
    def order(self, value: str):
        if value not in EULER_ORDERS:
            raise ValueError(f"Unsupported Euler order {value!r}, expected one of {EULER_ORDERS}")
        self._order = value

    def __repr__(self):
        return f"Euler({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.order!r})"

    def set(self, x: float, y: float, z: float) -> 'Euler':
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def clone(self) -> 'Euler':
        return Euler(self.x, self.y, self.z, self.order)


class Quaternion:
    __slots__ = ('x', 'y', 'z', 'w')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def __repr__(self):
        return f"Quaternion({self.x:.4f}, {self.y:.4f}, {self.z:.4f}, {self.w:.4f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    @classmethod
    def from_euler(cls, euler: Euler) -> 'Quaternion':
        return cls().set_from_euler(euler)

    def set_from_euler(self, euler: Euler) -> 'Quaternion':
        c1 = math.cos(euler.x / 2)
        c2 = math.cos(euler.y / 2)
        c3 = math.cos(euler.z / 2)
        s1 = math.sin(euler.x / 2)
        s2 = math.sin(euler.y / 2)
        s3 = math.sin(euler.z / 2)

        # Sign pattern for (x, y, z, w) per axis order
        signs = {
            'XYZ': (1, -1, 1, -1),
            'YXZ': (1, -1, -1, 1),
            'ZXY': (-1, 1, 1, -1),
            'ZYX': (-1, 1, -1, 1),
            'YZX': (1, 1, -1, -1),
            'XZY': (-1, -1, 1, 1),
        }[euler.order]

        self.x = s1 * c2 * c3 + signs[0] * c1 * s2 * s3
        self.y = c1 * s2 * c3 + signs[1] * s1 * c2 * s3
        self.z = c1 * c2 * s3 + signs[2] * s1 * s2 * c3
        self.w = c1 * c2 * c3 + signs[3] * s1 * s2 * s3
        return self


class Matrix4:
    """4x4 matrix stored as a [row][col] numpy array, column-vector convention (M @ v)."""
    __slots__ = ('elements',)

    def __init__(self, data=None):
        if data is None:
            self.elements = np.identity(4)
        else:
            self.elements = np.array(data, dtype=np.float64).reshape(4, 4)

    def __repr__(self):
        return f"Matrix4({self.elements.tolist()})"

    def __matmul__(self, other):
        if isinstance(other, Matrix4):
            return Matrix4(self.elements @ other.elements)
        return NotImplemented

    @classmethod
    def identity(cls) -> 'Matrix4':
        return cls()

    def set_identity(self) -> 'Matrix4':
        self.elements = np.identity(4)
        return self

    def copy(self, other: 'Matrix4') -> 'Matrix4':
        self.elements = np.array(other.elements, dtype=np.float64)
        return self

    def clone(self) -> 'Matrix4':
        return Matrix4(self.elements)

    def readonly(self) -> 'Matrix4':
        """Copy whose backing array refuses writes."""
        frozen = self.clone()
        frozen.elements.setflags(write=False)
        return frozen

    def equals(self, other: 'Matrix4') -> bool:
        return bool(np.array_equal(self.elements, other.elements))

    def allclose(self, other: 'Matrix4', atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.elements, other.elements, atol=atol))

    def multiply_matrices(self, a: 'Matrix4', b: 'Matrix4') -> 'Matrix4':
        """Set this matrix to a x b."""
        self.elements = a.elements @ b.elements
        return self

    def multiply(self, other: 'Matrix4') -> 'Matrix4':
        return self.multiply_matrices(self, other)

    def determinant(self) -> float:
        return float(np.linalg.det(self.elements))

    def set_inverse_of(self, other: 'Matrix4') -> 'Matrix4':
        """Set this matrix to the inverse of `other`, leaving `other` untouched.

        A singular input yields the identity and a warning, never an exception.
        """
        if other.determinant() == 0.0:
            logger.warning("Cannot invert matrix, determinant is 0; using identity")
            return self.set_identity()
        try:
            self.elements = np.linalg.inv(other.elements)
        except np.linalg.LinAlgError:
            logger.warning("Cannot invert singular matrix; using identity")
            self.set_identity()
        return self

    def compose(self, position: Vector3, quaternion: Quaternion, scale: Vector3) -> 'Matrix4':
        """Translation * rotation * scale in a single matrix."""
        x, y, z, w = quaternion
        x2, y2, z2 = x + x, y + y, z + z
        xx, xy, xz = x * x2, x * y2, x * z2
        yy, yz, zz = y * y2, y * z2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        sx, sy, sz = scale

        self.elements = np.array([
            [(1 - (yy + zz)) * sx, (xy - wz) * sy,       (xz + wy) * sz,       position.x],
            [(xy + wz) * sx,       (1 - (xx + zz)) * sy, (yz - wx) * sz,       position.y],
            [(xz - wy) * sx,       (yz + wx) * sy,       (1 - (xx + yy)) * sz, position.z],
            [0.0,                  0.0,                  0.0,                  1.0],
        ])
        return self

    def make_rotation_from_euler(self, euler: Euler) -> 'Matrix4':
        return self.compose(Vector3(0, 0, 0), Quaternion.from_euler(euler), Vector3(1, 1, 1))

    def make_perspective(self, left, right, top, bottom, near, far) -> 'Matrix4':
        x = 2 * near / (right - left)
        y = 2 * near / (top - bottom)
        a = (right + left) / (right - left)
        b = (top + bottom) / (top - bottom)
        c = -(far + near) / (far - near)
        d = -2 * far * near / (far - near)

        self.elements = np.array([
            [x,   0.0,  a,   0.0],
            [0.0, y,    b,   0.0],
            [0.0, 0.0,  c,   d],
            [0.0, 0.0, -1.0, 0.0],
        ])
        return self

    def make_orthographic(self, left, right, top, bottom, near, far) -> 'Matrix4':
        w = 1.0 / (right - left)
        h = 1.0 / (top - bottom)
        p = 1.0 / (far - near)

        self.elements = np.array([
            [2 * w, 0.0,   0.0,    -(right + left) * w],
            [0.0,   2 * h, 0.0,    -(top + bottom) * h],
            [0.0,   0.0,   -2 * p, -(far + near) * p],
            [0.0,   0.0,   0.0,    1.0],
        ])
        return self
