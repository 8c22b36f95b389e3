"""
Abstract filesystem contract implemented by storage adapters.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Union

import pathspec

from configuration import DEFAULT_IGNORE_PATTERNS, IGNORE_FILE_NAMES

logger = logging.getLogger(__name__)

IgnorePredicate = Callable[[str], bool]


class InvalidPathError(ValueError):
    """Path cannot be mapped to a usable key."""


class PathNotFoundError(FileNotFoundError):
    """Path is neither a file nor a directory."""

    def __init__(self, path: str):
        super().__init__(f"Path not found: {path}")
        self.path = path


class UnsupportedOperationError(NotImplementedError):
    """Operation is not available on this filesystem."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation


class StatResult:
    """Result of ``stat``: either a file or a (possibly synthetic) directory."""

    def __init__(self, path: str, is_file: bool, is_directory: bool,
                 size: Optional[int] = None, modified: Optional[datetime] = None,
                 content_type: Optional[str] = None, etag: Optional[str] = None):
        self.path = path
        self.is_file = is_file
        self.is_directory = is_directory
        self.size = size
        self.modified = modified
        self.content_type = content_type
        self.etag = etag

    def to_dict(self) -> Dict[str, Any]:
        """Return the result as a plain dictionary."""
        return {
            'path': self.path,
            'is_file': self.is_file,
            'is_directory': self.is_directory,
            'size': self.size,
            'modified': self.modified,
            'content_type': self.content_type,
            'etag': self.etag,
        }

    def __repr__(self) -> str:
        kind = "file" if self.is_file else "directory"
        return f"StatResult({self.path!r}, {kind}, size={self.size})"


class FileSystemService(ABC):
    """Base class for filesystem services.

    Subclasses implement the async operations below. Operations a backend
    cannot provide must raise ``UnsupportedOperationError`` rather than
    silently doing nothing.
    """

    name = "FileSystemService"
    description = "Abstract filesystem"

    def __init__(self, default_selected_files: Optional[List[str]] = None):
        self.default_selected_files: List[str] = list(default_selected_files or [])

    @abstractmethod
    async def write_file(self, path: str, content: Union[bytes, str]) -> bool:
        """Write ``content`` to ``path``, overwriting any existing file."""

    @abstractmethod
    async def get_file(self, path: str) -> str:
        """Return the content of ``path`` as text."""

    @abstractmethod
    async def delete_file(self, path: str) -> bool:
        """Delete ``path``."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if a file exists at ``path``."""

    @abstractmethod
    async def stat(self, path: str) -> StatResult:
        """Describe ``path``; raises ``PathNotFoundError`` if it does not exist."""

    @abstractmethod
    async def copy(self, source: str, destination: str) -> bool:
        """Copy ``source`` to ``destination``."""

    @abstractmethod
    async def create_directory(self, path: str) -> bool:
        """Create ``path`` as a directory; succeeds if it already exists."""

    @abstractmethod
    def get_directory_tree(self, path: str, ignore: Optional[IgnorePredicate] = None,
                           recursive: bool = True) -> AsyncIterator[str]:
        """Yield the paths of files located under ``path``."""

    @abstractmethod
    def chown(self, path: str, uid: int, gid: int):
        pass

    @abstractmethod
    def chmod(self, path: str, mode: int):
        pass

    @abstractmethod
    def rename(self, old_path: str, new_path: str):
        pass

    @abstractmethod
    def watch(self, directory: str, **options):
        pass

    @abstractmethod
    def execute_command(self, command: str, **options):
        pass

    @abstractmethod
    def borrow_file(self, file_name: str, callback: Callable):
        pass

    @abstractmethod
    def glob(self, pattern: str, **options):
        pass

    @abstractmethod
    def grep(self, search_string: str, **options):
        pass

    async def create_ignore_filter(self) -> IgnorePredicate:
        """Build the default ignore predicate.

        Combines ``DEFAULT_IGNORE_PATTERNS`` with the lines of every ignore
        file (``IGNORE_FILE_NAMES``) found at the root of this filesystem,
        matched with gitignore semantics.
        """
        lines = list(DEFAULT_IGNORE_PATTERNS)
        for file_name in IGNORE_FILE_NAMES:
            if await self.exists(file_name):
                content = await self.get_file(file_name)
                lines.extend(content.splitlines())
                logger.debug(f"Loaded ignore patterns from {file_name}")

        spec = pathspec.PathSpec.from_lines("gitwildmatch", lines)
        return spec.match_file
