"""
Batch document discovery.

Finds assignment files for a list of course codes anywhere under the documents
root, and confines caller-supplied relative paths to that root.

Usage:
    from folio.contexts.intake.batch import find_matches

    for match in find_matches(Path("md_storage"), ["1423", "1424"]):
        print(match.relative_path)
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from folio.contexts.intake.logger import _log_debug, _log_info
from folio.exceptions import PathTraversalError


@dataclass
class BatchMatch:
    """
    A file matched for a requested course code.

    Attributes:
        code: The requested code that matched
        full_path: Absolute path to the file
        relative_path: Path relative to the documents root (POSIX separators)
        file_name: Bare filename
    """

    code: str
    full_path: Path
    relative_path: str
    file_name: str

    def to_dict(self) -> dict:
        """Wire format used by the front end."""
        return {
            "fullPath": str(self.full_path),
            "relativePath": self.relative_path,
            "fileName": self.file_name,
        }


def iter_files(root_dir: Path) -> Iterator[Path]:
    """
    Yield every regular file under root_dir, depth-first in filesystem order.

    Symlinked directories are not followed.
    """
    for dirpath, _dirnames, filenames in os.walk(root_dir):
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def code_pattern(code: str, extension: Optional[str] = None) -> re.Pattern:
    """
    Build the match pattern for one code: <code>_<digits>.<ext> at a path boundary.

    Args:
        code: Course code (matched literally)
        extension: File extension without dot (default: any extension)
    """
    ext = re.escape(extension.lstrip(".")) if extension else r"[^\\/.]+"
    return re.compile(rf"(?:^|[\\/]){re.escape(code)}_(\d+)\.{ext}$")


def find_matches(
    root_dir: Union[str, Path],
    codes: Sequence[str],
    extension: Optional[str] = None,
) -> List[BatchMatch]:
    """
    Match files under root_dir against the requested course codes.

    Ordering is code order outer, filesystem enumeration order inner. A file
    matched by more than one requested code appears once per code.

    Args:
        root_dir: Documents root to scan recursively
        codes: Course codes in caller order
        extension: Restrict matches to this extension (e.g. "md")

    Returns:
        List of BatchMatch
    """
    root = Path(root_dir).resolve()
    if not root.is_dir():
        _log_info(f"Documents root not found: {root}")
        return []

    all_files = list(iter_files(root))
    _log_debug(f"Scanned {len(all_files)} files under {root}")

    matches = []
    for code in codes:
        pattern = code_pattern(code, extension)
        for path in all_files:
            if pattern.search(str(path)):
                matches.append(
                    BatchMatch(
                        code=code,
                        full_path=path,
                        relative_path=path.relative_to(root).as_posix(),
                        file_name=path.name,
                    )
                )

    _log_info(f"Matched {len(matches)} files for codes: {', '.join(codes)}")
    return matches


class DocumentRoot:
    """
    Filesystem collaborator confined to a single documents root.

    Every caller-supplied relative path is resolved and verified to stay inside
    the root before it is read or listed.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def resolve(self, relative_path: Union[str, Path] = "") -> Path:
        """
        Resolve a relative path inside the root.

        Raises:
            PathTraversalError: If the resolved path is outside the root
        """
        candidate = (self.root / relative_path).resolve()
        if candidate != self.root and self.root not in candidate.parents:
            raise PathTraversalError(str(relative_path), self.root)
        return candidate

    def read_text(self, relative_path: Union[str, Path]) -> str:
        return self.resolve(relative_path).read_text(encoding="utf-8")

    def list_markdown(self, relative_dir: Union[str, Path] = "") -> List[Path]:
        """Markdown files directly inside a folder, sorted by name."""
        folder = self.resolve(relative_dir)
        if not folder.is_dir():
            return []
        return sorted(p for p in folder.iterdir() if p.is_file() and p.name.endswith(".md"))
