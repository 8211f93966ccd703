#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

from .mesh import Mesh


class Scene:
    """
    Flat container of drawable objects.

    `children` order is draw order. Nothing is depth sorted, so later
    children paint over earlier ones. The same Mesh may appear more than
    once; materials may be shared between meshes.
    """

    def __init__(self, children=None):
        self.children = list(children) if children else []

    def __iter__(self):
        return iter(self.children)

    def __len__(self):
        return len(self.children)

    def add(self, *objects: Mesh) -> 'Scene':
        self.children.extend(objects)
        return self

    def remove(self, obj: Mesh):
        """Remove the first occurrence of `obj`. Missing objects are ignored."""
        for i, child in enumerate(self.children):
            if child is obj:
                del self.children[i]
                return

    def clear(self):
        """Remove all objects from the scene."""
        self.children.clear()
