"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used by the
tasktex Markdown parser and TeX renderer.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/tasktex/options/base.py
from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options.

    Parameters
    ----------
    fail_on_unknown_nodes : bool, default=False
        Whether to raise RenderingError when a node kind has no rendering rule.
        If False (default), a warning is logged and the node produces no text.

    """

    fail_on_unknown_nodes: bool = field(
        default=False,
        metadata={
            "help": "Raise RenderingError on unknown node kinds instead of logging warnings",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate base renderer options (no constraints at this level)."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Parameters
    ----------
    extract_metadata : bool
        Whether to read the YAML front matter into task metadata

    """

    extract_metadata: bool = field(
        default=True,
        metadata={"help": "Read YAML front matter into task metadata", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate base parser options (no constraints at this level)."""
        pass
