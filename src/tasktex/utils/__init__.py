#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility modules for tasktex: escaping, metadata, lookup tables and I/O."""
