#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import argparse
import curses
import logging
import math
import random
import time

from .camera import PerspectiveCamera
from .canvas import TerminalCanvas
from .color import CursesPalette
from .config import RenderConfig
from .image_surface import ImageSurface, save_animation
from .logging_config import setup_logging
from .mesh import Material, Mesh
from .renderer import Renderer
from .scene import Scene

logger = logging.getLogger(__name__)

# Per-frame spin around Y (radians)
SPIN_STEP = 0.01
FIELD_OF_VIEW = 80.0
CAMERA_DISTANCE = 400.0


def build_scene(model=None, color='#ff0000', wireframe=False, aspect=1.0):
    """The demo scene: one mesh at the origin seen from z=400."""
    camera = PerspectiveCamera(FIELD_OF_VIEW, aspect)
    # Move the camera back so the whole mesh is in view
    camera.position.set(0, 0, CAMERA_DISTANCE)

    material = Material(color=color, wireframe=wireframe)
    if model:
        mesh = Mesh.from_obj(model, material)
        # OBJ models are usually unit sized; bring them to the plane's scale
        mesh.scale.set(60, 60, 60)
    else:
        # Rectangle 200 by 100 units
        mesh = Mesh.plane(200, 100, material)

    return Scene([mesh]), camera, mesh


def render_animation(path, frames=60, size=(320, 240), model=None, color='#ff0000',
                     clear_color='#ffffff', wireframe=False, strict_geometry=True,
                     duration=40):
    """Render one full turn of the demo mesh to an animated GIF, off-screen."""
    width, height = size
    scene, camera, mesh = build_scene(model, color, wireframe, aspect=width / height)

    surface = ImageSurface(width, height)
    renderer = Renderer(surface, RenderConfig(clear_color=clear_color,
                                              strict_geometry=strict_geometry))
    renderer.resize()

    step = 2 * math.pi / frames
    images = []
    for _ in range(frames):
        renderer.render(scene, camera)
        images.append(surface.snapshot())
        mesh.rotation.y += step

    save_animation(images, path, duration=duration)
    return images


class DemoApp:
    """
    Interactive terminal host: owns the curses screen, the animation loop,
    input handling and resize detection. The Renderer only draws.
    """

    def __init__(self, stdscr, args):
        self.stdscr = stdscr
        self.running = True

        # ── Curses setup ────────────────────────────────────────────────
        curses.curs_set(0)
        stdscr.nodelay(True)

        config = RenderConfig.detect_terminal(clear_color=args.clear_color,
                                              strict_geometry=not args.lenient)
        if args.ascii:
            config.use_braille = False
        if args.mono:
            config.use_color = False
        self.config = config

        self.palette = CursesPalette(config.use_color)
        self.palette.start()

        self.canvas = TerminalCanvas.for_screen(stdscr)
        self.renderer = Renderer(self.canvas, config)

        self.scene, self.camera, self.mesh = build_scene(
            args.model, args.color, args.wireframe)
        self.size = None
        self.resize()

        self.frame_count = 0
        self.fps = 0
        self.last_fps_time = time.time()

    def resize(self):
        width, height = self.canvas.client_size()
        self.camera.aspect = width / height if height else 1.0
        self.renderer.resize()
        self.size = (width, height)
        logger.info("Terminal canvas %dx%d", width, height)

    # ────────────────────────────────────────────────────────────────────
    # Input
    # ────────────────────────────────────────────────────────────────────
    def handle_input(self):
        key = self.stdscr.getch()
        if key == -1:
            return

        camera = self.camera

        if key == ord('q'):
            self.running = False
        elif key == curses.KEY_RESIZE:
            self.resize()
        elif key == curses.KEY_UP:
            camera.orbit(0.0, 0.1)
        elif key == curses.KEY_DOWN:
            camera.orbit(0.0, -0.1)
        elif key == curses.KEY_RIGHT:
            camera.orbit(0.1, 0.0)
        elif key == curses.KEY_LEFT:
            camera.orbit(-0.1, 0.0)
        elif key in (ord('='), ord('+')):
            camera.dolly(-25)
        elif key == ord('-'):
            camera.dolly(25)
        elif key == ord('['):
            camera.adjust_fov(-5)
        elif key == ord(']'):
            camera.adjust_fov(5)
        elif key == ord('w'):
            self.mesh.material.wireframe = not self.mesh.material.wireframe
        elif key == ord(' '):
            cube = Mesh.cube(40, Material(color='#%06x' % random.randrange(0x1000000),
                                          wireframe=self.mesh.material.wireframe))
            cube.position.set(random.uniform(-150, 150),
                              random.uniform(-100, 100),
                              random.uniform(-150, 50))
            self.scene.add(cube)
        elif key == ord('x'):
            # Drop the most recently added cube, never the main mesh
            if len(self.scene) > 1:
                self.scene.remove(self.scene.children[-1])

    # ────────────────────────────────────────────────────────────────────
    # Main loop
    # ────────────────────────────────────────────────────────────────────
    def tick(self):
        start_time = time.time()
        self.handle_input()

        if self.canvas.client_size() != self.size:
            self.resize()

        # Proof that it's actually 3D
        self.mesh.rotation.y += SPIN_STEP
        for child in self.scene.children[1:]:
            child.rotation.x += SPIN_STEP
            child.rotation.y += SPIN_STEP * 2

        self.renderer.render(self.scene, self.camera)
        self.canvas.present(self.stdscr, self.palette, self.config.use_braille)
        self.draw_hud(start_time)
        self.stdscr.refresh()

    def draw_hud(self, start_time):
        th, tw = self.stdscr.getmaxyx()

        self.frame_count += 1
        now = time.time()
        if now - self.last_fps_time >= 1.0:
            self.fps = self.frame_count
            self.frame_count = 0
            self.last_fps_time = now

        ms = (now - start_time) * 1000
        faces = sum(child.geometry.face_count for child in self.scene)
        mode = 'WIRE' if self.mesh.material.wireframe else 'FILL'
        hdr = (f" OBJ:{len(self.scene)}"
               f" | F:{faces}"
               f" | FOV:{self.camera.fov:.0f}"
               f" | FPS:{self.fps}"
               f" | {ms:.1f}ms"
               f" | [{mode}] ")
        try:
            self.stdscr.addstr(0, 0, hdr.center(max(1, tw - 1), '='),
                               curses.color_pair(0) | curses.A_BOLD)
        except curses.error:
            pass

    def run(self, frame_time=1 / 60):
        while self.running:
            started = time.time()
            self.tick()
            # Stand-in for requestAnimationFrame
            time.sleep(max(0.0, frame_time - (time.time() - started)))


def parse_size(text):
    try:
        width, height = (int(v) for v in text.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("size must be positive")
    return width, height


def parse_args(argv=None):
    epilog = """\
examples:
  %(prog)s                                  Spinning red plane in the terminal
  %(prog)s cobra.obj --wireframe            Load OBJ model, draw outlines
  %(prog)s --gif plane.gif --size 640x480   Write one turn to an animated GIF
  %(prog)s --color '#00ffff' --clear-color '#1a1a2e'
"""
    parser = argparse.ArgumentParser(
        description="2D canvas emulation of a GPU triangle pipeline",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("model", nargs='?', help="Path to .obj file (default: 200x100 plane)")
    parser.add_argument("--color", default="#ff0000",
                        help="Material color (default: #ff0000)")
    parser.add_argument("--clear-color", default="#ffffff",
                        help="Background color (default: #ffffff)")
    parser.add_argument("--wireframe", action="store_true",
                        help="Stroke face outlines instead of filling")
    parser.add_argument("--gif", metavar="PATH",
                        help="Render off-screen to an animated GIF instead of the terminal")
    parser.add_argument("--frames", type=int, default=60,
                        help="Frames per turn for --gif (default: 60)")
    parser.add_argument("--size", type=parse_size, default=(320, 240),
                        help="Image size for --gif, WIDTHxHEIGHT (default: 320x240)")
    parser.add_argument("--ascii", action="store_true",
                        help="Use ASCII characters instead of Braille")
    parser.add_argument("--mono", action="store_true",
                        help="Force monochrome output")
    parser.add_argument("--lenient", action="store_true",
                        help="Skip faces with out-of-range indices instead of failing")
    parser.add_argument("--log-file", help="Write log records to this file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    # The terminal belongs to curses while the demo runs
    setup_logging(getattr(logging, args.log_level), args.log_file,
                  console=bool(args.gif))

    if args.gif:
        render_animation(args.gif, frames=max(1, args.frames), size=args.size,
                         model=args.model, color=args.color,
                         clear_color=args.clear_color, wireframe=args.wireframe,
                         strict_geometry=not args.lenient)
        return 0

    try:
        curses.wrapper(lambda stdscr: DemoApp(stdscr, args).run())
    except KeyboardInterrupt:
        pass
    return 0
