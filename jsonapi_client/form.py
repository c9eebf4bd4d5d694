"""Form body values and multipart part construction."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileRef:
    """A local file to upload as a multipart part.

    `original_name` is the filename reported to the server; it defaults to the
    basename of `path`.
    """

    path: str | Path
    original_name: str | None = None

    @property
    def filename(self) -> str:
        return self.original_name or os.path.basename(os.fspath(self.path))


@dataclass
class MultipartPart:
    """One part of a multipart/form-data body."""

    name: str
    contents: Any
    filename: str | None = None


def has_files(data: Mapping[str, Any]) -> bool:
    return any(isinstance(value, FileRef) for value in data.values())


@contextmanager
def open_multipart(data: Mapping[str, Any] | None) -> Iterator[list[MultipartPart]]:
    """Yield multipart parts for `data`, keeping file handles open inside the block.

    `FileRef` values become parts whose contents is an open binary handle and
    whose filename is the client-supplied name; every other value is passed
    through as the part contents. All handles are closed on exit, including
    when the block raises.
    """
    with ExitStack() as stack:
        parts: list[MultipartPart] = []
        for name, value in (data or {}).items():
            if isinstance(value, FileRef):
                handle: BinaryIO = stack.enter_context(open(value.path, "rb"))
                logger.debug(f"Opened {value.path} for multipart field '{name}'")
                parts.append(MultipartPart(name=name, contents=handle, filename=value.filename))
            else:
                parts.append(MultipartPart(name=name, contents=value))
        yield parts
