#
# PROJECT: canvas-pipeline
# MODULE: canvas_pipeline/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import os
from dataclasses import dataclass


@dataclass
class RenderConfig:
    """Configuration for the rendering pipeline and its terminal host."""
    clear_color: str = "#ffffff"
    # True: a face indexing a missing vertex raises MalformedGeometryError.
    # False: the face is skipped with a warning.
    strict_geometry: bool = True
    use_color: bool = True
    use_braille: bool = True

    @classmethod
    def detect_terminal(cls, **overrides) -> 'RenderConfig':
        """
        Autodetect terminal capabilities and return a default config.
        Checks TERM and LANG environment variables.
        """
        term = os.environ.get('TERM', '').lower()
        lang = os.environ.get('LANG', '').lower()

        # Pre-init guess; accurate color detection needs curses running.
        is_dumb = term in ('dumb', 'unknown')
        is_linux_console = term == 'linux'
        supports_utf8 = 'utf-8' in lang or 'utf8' in lang

        settings = dict(
            use_color=not is_dumb,
            # Linux console font often lacks braille
            use_braille=supports_utf8 and not is_linux_console,
        )
        settings.update(overrides)
        return cls(**settings)
