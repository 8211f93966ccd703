#!/usr/bin/env python3
#
# PROJECT: canvas-pipeline
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import sys

from canvas_pipeline.demo import main

if __name__ == "__main__":
    sys.exit(main())
