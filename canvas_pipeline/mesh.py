#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import MalformedGeometryError
from .math_utils import Euler, Vector3
from .shaders import (Color, FragmentShader, VertexShader,
                      basic_fragment_shader, basic_vertex_shader)

logger = logging.getLogger(__name__)


class Vertex:
    __slots__ = ('position',)

    def __init__(self, position):
        if not isinstance(position, Vector3):
            position = Vector3(*position)
        self.position = position

    def __repr__(self):
        return f"Vertex({self.position!r})"


class Geometry:
    """Vertices plus a flat index list; every consecutive triple is one face."""

    def __init__(self, vertices: Sequence = (), indices: Sequence[int] = ()):
        self.vertices: List[Vertex] = [v if isinstance(v, Vertex) else Vertex(v) for v in vertices]
        self.indices: List[int] = [int(i) for i in indices]

    def __repr__(self):
        return f"Geometry(vertices={len(self.vertices)}, faces={self.face_count})"

    @property
    def face_count(self) -> int:
        return len(self.indices) // 3

    def faces(self) -> Iterator[Tuple[int, int, int]]:
        """Index triples in face order; trailing indices that do not make a triple are ignored."""
        indices = self.indices
        for i in range(self.face_count):
            yield indices[i * 3], indices[i * 3 + 1], indices[i * 3 + 2]

    def check_face(self, face_index: int, face: Tuple[int, int, int]):
        n = len(self.vertices)
        for idx in face:
            # Negative indices would silently wrap in Python
            if idx < 0 or idx >= n:
                raise MalformedGeometryError(
                    f"Face {face_index} references vertex {idx}, "
                    f"geometry has {n} vertices",
                    face_index=face_index, indices=face)

    def validate(self):
        """Raise MalformedGeometryError on the first bad face or a partial triple."""
        if len(self.indices) % 3:
            raise MalformedGeometryError(
                f"Index count {len(self.indices)} is not a multiple of 3",
                face_index=self.face_count, indices=tuple(self.indices[self.face_count * 3:]))
        for face_index, face in enumerate(self.faces()):
            self.check_face(face_index, face)


@dataclass
class Material:
    color: Color = '#ff0000'
    # True strokes the face outline, False fills it
    wireframe: bool = False
    vertex_shader: VertexShader = basic_vertex_shader
    fragment_shader: FragmentShader = basic_fragment_shader
    # Extra constants handed to the shaders through Uniforms.extra
    uniforms: Dict[str, Any] = field(default_factory=dict)


class Mesh:
    """Drawable object: geometry, material and a local transform."""

    def __init__(self, geometry: Geometry, material: Optional[Material] = None,
                 position: Optional[Vector3] = None, rotation: Optional[Euler] = None,
                 scale: Optional[Vector3] = None, name: str = ''):
        self.geometry = geometry
        self.material = material if material is not None else Material()
        self.position = position if position is not None else Vector3(0.0, 0.0, 0.0)
        self.rotation = rotation if rotation is not None else Euler(0.0, 0.0, 0.0)
        self.scale = scale if scale is not None else Vector3(1.0, 1.0, 1.0)
        self.name = name

    def __repr__(self):
        return f"Mesh(name={self.name!r}, {self.geometry!r})"

    @classmethod
    def plane(cls, width: float = 200.0, height: float = 100.0,
              material: Optional[Material] = None, **kwargs) -> 'Mesh':
        """Rectangle in the XY plane centered on the origin, two faces."""
        hw, hh = width / 2.0, height / 2.0
        geometry = Geometry(
            vertices=[
                (-hw, hh, 0),   # top left
                (hw, hh, 0),    # top right
                (hw, -hh, 0),   # bottom right
                (-hw, -hh, 0),  # bottom left
            ],
            indices=[
                0, 1, 3,
                1, 2, 3,
            ])
        kwargs.setdefault('name', 'plane')
        return cls(geometry, material, **kwargs)

    @classmethod
    def cube(cls, size: float = 2.0, material: Optional[Material] = None, **kwargs) -> 'Mesh':
        """Box centered at origin; each quad side split into two faces."""
        h = size / 2.0
        vertices = [
            [-h, -h, -h], [ h, -h, -h], [ h,  h, -h], [-h,  h, -h],
            [-h, -h,  h], [ h, -h,  h], [ h,  h,  h], [-h,  h,  h],
        ]
        quads = [
            [0, 1, 2, 3],  # front
            [5, 4, 7, 6],  # back
            [4, 0, 3, 7],  # left
            [1, 5, 6, 2],  # right
            [3, 2, 6, 7],  # top
            [4, 5, 1, 0],  # bottom
        ]
        kwargs.setdefault('name', 'cube')
        return cls(Geometry(vertices, triangulate(quads)), material, **kwargs)

    @classmethod
    def from_obj(cls, filename, material: Optional[Material] = None, **kwargs) -> 'Mesh':
        """Load `v` and `f` records from a Wavefront OBJ file.

        Falls back to the demo cube when the file is unreadable or empty.
        """
        kwargs.setdefault('name', str(filename))
        geometry = load_obj(filename)
        if geometry is None:
            return cls.cube(material=material, **kwargs)
        return cls(geometry, material, **kwargs)


def triangulate(polygons: Sequence[Sequence[int]]) -> List[int]:
    """Fan-split polygons into a flat triangle index list."""
    indices = []
    for poly in polygons:
        for i in range(1, len(poly) - 1):
            indices.extend((poly[0], poly[i], poly[i + 1]))
    return indices


def load_obj(filename) -> Optional[Geometry]:
    vertices = []
    polygons = []
    try:
        with open(filename, 'r') as f:
            for line in f:
                if line.startswith('v '):
                    vertices.append([float(x) for x in line.split()[1:4]])
                elif line.startswith('f '):
                    face = []
                    for token in line.split()[1:]:
                        # Handle v/vt/vn format by splitting by '/'
                        idx = int(token.split('/')[0])
                        # OBJ is 1-based; negative values count back from the last vertex
                        face.append(idx - 1 if idx > 0 else len(vertices) + idx)
                    polygons.append(face)
    except (OSError, ValueError) as e:
        logger.warning("Could not load %r: %s", filename, e)
        return None

    if not vertices or not polygons:
        logger.warning("No geometry in %r, using demo cube", filename)
        return None

    logger.debug("Loaded %r: %d vertices, %d polygons", filename, len(vertices), len(polygons))
    return Geometry(vertices, triangulate(polygons))
