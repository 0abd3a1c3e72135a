#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning task node streams into output documents.

The TeX renderer is :class:`tasktex.renderers.tex.TexRenderer`.
"""
