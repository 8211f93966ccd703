#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#


class RenderError(Exception):
    """Base class for errors raised by the rendering pipeline."""


class MalformedGeometryError(RenderError, IndexError):
    """A face references a vertex that does not exist, or the index list
    does not split into whole triangles."""

    def __init__(self, message, face_index=None, indices=None):
        super().__init__(message)
        self.face_index = face_index
        self.indices = indices


class SurfaceError(RenderError, RuntimeError):
    """Drawing call issued outside (or inside a nested) path scope."""
