"""Pytest configuration and shared fixtures for the tasktex test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from tasktex.utils.metadata import TaskMetadata

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - parser and renderer together")
    config.addinivalue_line("markers", "e2e: End-to-end tests - command-line runs on task files")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


SAMPLE_TASK = """---
id: 2023-CH-07
title: Beaver Bridges
ages:
  6-8: --
  8-10: easy
  10-12: medium
  12-14: hard
  14-16: --
  16-19: --
answer_type: multiple choice
categories:
  - algorithms and programming
keywords:
  - graph - https://en.wikipedia.org/wiki/Graph_theory
contributors:
  - Jean-Philippe Pellet, jpp@example.org, Switzerland (author)
  - Anna Müller, Germany
support_files:
  - bridges.svg by Jean-Philippe Pellet
license: Copyright © Bebras
---

# Beaver Bridges

## Body

The beavers build 3 × 4 bridges.

![A bridge](bridge.png "A bridge (50%)")

## Question/Challenge

Which bridge is the "longest"?

## Answer Options/Interactivity Description

1. Bridge A
2. Bridge B

## Answer Explanation

Bridge **B** is the longest.

| Bridge | Length |
|:-------|-------:|
| A      | 3      |
| B      | 5      |

## It's Informatics

Graphs model bridges.

## Keywords and Websites

- graph

## Wording and Phrases

Nothing special.

## Comments

None.

## Contributors

- Jean-Philippe Pellet

## Support Files

- bridges.svg

## License

Copyright © Bebras
"""


@pytest.fixture
def sample_task_text() -> str:
    """Markdown source of a complete task file."""
    return SAMPLE_TASK


@pytest.fixture
def sample_task_file(tmp_path: Path) -> Path:
    """A complete task file on disk, named with its language code."""
    path = tmp_path / "2023-CH-07-eng.task.md"
    path.write_text(SAMPLE_TASK, encoding="utf-8")
    return path


@pytest.fixture
def metadata() -> TaskMetadata:
    """Metadata of the sample task."""
    return TaskMetadata.from_dict(
        {
            "id": "2023-CH-07",
            "title": "Beaver Bridges",
            "ages": {"8-10": "easy", "10-12": "medium", "12-14": "hard"},
            "answer_type": "multiple choice",
            "categories": ["algorithms and programming"],
            "keywords": ["graph - https://en.wikipedia.org/wiki/Graph_theory"],
            "contributors": ["Jean-Philippe Pellet, jpp@example.org, Switzerland (author)"],
        }
    )
