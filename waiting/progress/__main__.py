#!/usr/bin/env python3
"""Allow running as: python3 -m waiting.progress"""

from waiting.progress.demo import main
import sys

sys.exit(main() or 0)
