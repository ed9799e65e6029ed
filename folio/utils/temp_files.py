"""Per-request scratch files next to the final output."""

import os
import tempfile
from pathlib import Path


def reserve_temp_path(directory: Path, prefix: str, suffix: str) -> Path:
    """
    Create an empty, uniquely named file in directory and return its path.

    Concurrent requests for the same document each get their own file, e.g.
    temp_1423_1.k3x9q2.html, so one request's cleanup never removes another's.
    """
    fd, name = tempfile.mkstemp(dir=directory, prefix=prefix, suffix=suffix)
    os.close(fd)
    return Path(name)
