#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/io_utils.py
"""I/O utilities for reading task files and writing rendered output.

This module centralizes how tasktex reads task sources (stripping a UTF-8
byte order mark) and writes text output to paths or file-like objects.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from tasktex.exceptions import FileNotFoundError as TaskFileNotFoundError
from tasktex.exceptions import OutputWriteError

_BOM = "\ufeff"


def read_text_stripping_bom(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file, dropping a leading byte order mark.

    Parameters
    ----------
    path : str or Path
        File to read

    Returns
    -------
    str
        File contents

    Raises
    ------
    tasktex.exceptions.FileNotFoundError
        If the file does not exist

    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        if not file_path.exists():
            raise TaskFileNotFoundError(str(file_path), original_error=e) from e
        raise
    return text[len(_BOM) :] if text.startswith(_BOM) else text


def sibling_with_suffix(path: Union[str, Path], suffix: str) -> Path:
    """Return ``path`` with its ``.tex`` extension replaced by ``suffix``.

    Examples
    --------
        >>> sibling_with_suffix("out/task.tex", "_brochure.tex")
        PosixPath('out/task_brochure.tex')

    """
    file_path = Path(path)
    stem = file_path.name[: -len(".tex")] if file_path.name.endswith(".tex") else file_path.name
    return file_path.with_name(stem + suffix)


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write text content to a path or a file-like object.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], or IO[str]
        Output destination. Binary streams receive UTF-8 encoded bytes.

    Raises
    ------
    OutputWriteError
        If a file path cannot be written
    TypeError
        If the output type is not supported

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(output_path), original_error=e) from e
        return

    if hasattr(output, "write"):
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO):
            is_binary_mode = False
        elif isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["read_text_stripping_bom", "sibling_with_suffix", "write_content"]
