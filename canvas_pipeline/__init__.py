#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from .math_utils import Vector3, Euler, Quaternion, Matrix4
from .config import RenderConfig
from .errors import RenderError, MalformedGeometryError, SurfaceError
from .shaders import (VertexContext, FragmentContext, Uniforms, VertexAttributes,
                      basic_vertex_shader, basic_fragment_shader)
from .mesh import Vertex, Geometry, Material, Mesh
from .scene import Scene
from .camera import Camera, PerspectiveCamera, OrthographicCamera
from .surface import Surface, Path
from .image_surface import ImageSurface, save_animation
from .canvas import TerminalCanvas
from .color import parse_color, CursesPalette
from .renderer import Renderer
from .logging_config import setup_logging
