"""
Filesystem interface over an S3 bucket.

S3 has no directories. A directory is either a zero-byte marker object whose
key ends with '/' or simply the common prefix of other keys; ``stat`` checks
for both.
"""

import logging
from typing import AsyncIterator, Callable, Dict, List, Optional, Union

from botocore.exceptions import ClientError

from configuration import TEXT_ENCODING, DIRECTORY_PROBE_MAX_KEYS
from filesystem.base import (
    FileSystemService,
    IgnorePredicate,
    InvalidPathError,
    PathNotFoundError,
    StatResult,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = ("NoSuchKey", "NotFound", "404")

UNSUPPORTED_OPERATIONS: Dict[str, str] = {
    "chown": "Method chown is not supported by S3FileSystem.",
    "chmod": "Method chmod is not supported by S3FileSystem.",
    "rename": (
        "Method rename is not supported by S3FileSystem. "
        "Use copy() and delete_file() to achieve a move operation."
    ),
    "watch": "Method watch is not supported by S3FileSystem.",
    "execute_command": "Method execute_command is not supported by S3FileSystem.",
    "borrow_file": "Method borrow_file is not supported by S3FileSystem.",
    "glob": (
        "Method glob is not fully supported by S3FileSystem. "
        "Only prefix-based listing is available via get_directory_tree."
    ),
    "grep": (
        "Method grep is not supported by S3FileSystem. "
        "Consider using S3 Select for specific use cases or downloading files for local search."
    ),
}


def to_key(path: str) -> str:
    """Normalize a filesystem path into an S3 object key.

    Backslashes become slashes, empty and '.' segments are dropped and '..'
    pops the previous segment. The empty string is the bucket root.

    Args:
        path: Filesystem path

    Returns:
        Key without leading or trailing slashes

    Raises:
        TypeError: If path is not a string
        InvalidPathError: If path traverses above the bucket root
    """
    if not isinstance(path, str):
        raise TypeError(f"Path must be a string, got {type(path).__name__}")

    parts: List[str] = []
    for part in path.replace("\\", "/").strip("/").split("/"):
        if part == "..":
            if not parts:
                raise InvalidPathError(f"Invalid path: {path} attempts to traverse above bucket root.")
            parts.pop()
        elif part and part != ".":
            parts.append(part)
    return "/".join(parts)


def is_not_found(error: ClientError) -> bool:
    """Return True if a ClientError means the key does not exist."""
    code = error.response.get('Error', {}).get('Code', '')
    status_code = error.response.get('ResponseMetadata', {}).get('HTTPStatusCode', 0)
    return code in NOT_FOUND_CODES or status_code == 404


class S3FileSystemService(FileSystemService):
    """Provides the filesystem interface for an AWS S3 bucket.

    The S3 client is borrowed from the AWS service, which creates it on
    first use and caches it.
    """

    name = "S3FileSystemService"
    description = "Provides FileSystem interface for an AWS S3 bucket"

    def __init__(self, bucket_name: str, aws_service, default_selected_files: Optional[List[str]] = None):
        super().__init__(default_selected_files=default_selected_files)

        if not bucket_name:
            raise ValueError("S3FileSystemService requires a 'bucket_name'.")
        if aws_service is None:
            raise ValueError("S3FileSystemService requires an 'aws_service'.")

        self.bucket_name = bucket_name
        self.aws_service = aws_service
        logger.info(f"Initialized S3 filesystem for bucket {bucket_name}")

    @staticmethod
    def supports(operation: str) -> bool:
        """Return False for operations this filesystem cannot perform."""
        return operation not in UNSUPPORTED_OPERATIONS

    async def _get_s3_client(self):
        client = await self.aws_service.get_s3_client()
        if client is None:
            raise RuntimeError("Failed to get S3 client from AWSService.")
        return client

    def _require_key(self, path: str, message: str = "Path results in an empty S3 key.") -> str:
        key = to_key(path)
        if not key:
            raise InvalidPathError(message)
        return key

    async def write_file(self, path: str, content: Union[bytes, str]) -> bool:
        key = self._require_key(path)
        if isinstance(content, str):
            content = content.encode(TEXT_ENCODING)

        s3_client = await self._get_s3_client()
        await s3_client.put_object(Bucket=self.bucket_name, Key=key, Body=content)
        logger.debug(f"Wrote {len(content)} bytes to s3://{self.bucket_name}/{key}")
        return True

    async def get_file(self, path: str) -> str:
        key = self._require_key(path)

        s3_client = await self._get_s3_client()
        response = await s3_client.get_object(Bucket=self.bucket_name, Key=key)
        data = await response["Body"].read()
        return data.decode(TEXT_ENCODING, errors="replace")

    async def delete_file(self, path: str) -> bool:
        key = self._require_key(path, "Path results in an empty S3 key for deletion.")

        s3_client = await self._get_s3_client()
        await s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        logger.debug(f"Deleted s3://{self.bucket_name}/{key}")
        return True

    async def exists(self, path: str) -> bool:
        key = to_key(path)
        if not key:
            return False

        s3_client = await self._get_s3_client()
        try:
            await s3_client.head_object(Bucket=self.bucket_name, Key=key)
            return True
        except ClientError as e:
            if is_not_found(e):
                return False
            raise

    async def stat(self, path: str) -> StatResult:
        """Describe a file, a directory or raise ``PathNotFoundError``.

        A key that is not an object is a directory if at least one key
        exists under ``key + '/'``. The root is always a directory.
        """
        key = to_key(path)
        s3_client = await self._get_s3_client()

        # The root can never be an object
        if key:
            try:
                response = await s3_client.head_object(Bucket=self.bucket_name, Key=key)
            except ClientError as e:
                if not is_not_found(e):
                    raise
            else:
                etag = response.get("ETag")
                return StatResult(
                    path=path,
                    is_file=True,
                    is_directory=False,
                    size=response.get("ContentLength"),
                    modified=response.get("LastModified"),
                    content_type=response.get("ContentType"),
                    etag=etag.replace('"', "") if etag else None,
                )

        prefix = f"{key}/" if key else ""
        listing = await s3_client.list_objects_v2(
            Bucket=self.bucket_name,
            Prefix=prefix,
            MaxKeys=DIRECTORY_PROBE_MAX_KEYS,
        )
        if listing.get("KeyCount", 0) > 0 or listing.get("CommonPrefixes") or not key:
            return StatResult(path=path, is_file=False, is_directory=True, size=0, modified=None)

        raise PathNotFoundError(path)

    async def copy(self, source: str, destination: str) -> bool:
        source_key = self._require_key(source, "Source path results in an empty S3 key.")
        destination_key = self._require_key(destination, "Destination path results in an empty S3 key.")

        s3_client = await self._get_s3_client()
        await s3_client.copy_object(
            Bucket=self.bucket_name,
            CopySource={"Bucket": self.bucket_name, "Key": source_key},
            Key=destination_key,
        )
        logger.debug(f"Copied s3://{self.bucket_name}/{source_key} to {destination_key}")
        return True

    async def get_directory_tree(self, path: str, ignore: Optional[IgnorePredicate] = None,
                                 recursive: bool = True) -> AsyncIterator[str]:
        """Yield every key under ``path``, page by page.

        The listing is always recursive; ``recursive`` is accepted for
        compatibility with other filesystems. Pages are only requested as
        the caller consumes keys.
        """
        prefix = to_key(path)
        if prefix and not prefix.endswith("/"):
            prefix += "/"

        s3_client = await self._get_s3_client()
        ignore_filter = ignore or await self.create_ignore_filter()

        request = {"Bucket": self.bucket_name, "Prefix": prefix}
        pages = 0
        while True:
            response = await s3_client.list_objects_v2(**request)
            pages += 1

            for item in response.get("Contents", []):
                key = item["Key"]
                # The directory's own marker is not an entry of itself
                if key == prefix and key.endswith("/"):
                    continue
                if not ignore_filter(key):
                    yield key

            continuation_token = response.get("NextContinuationToken")
            if not continuation_token:
                break
            request["ContinuationToken"] = continuation_token

        logger.debug(f"Listed s3://{self.bucket_name}/{prefix} in {pages} page(s)")

    async def create_directory(self, path: str) -> bool:
        key = to_key(path)
        if not key:
            return True
        key += "/"

        try:
            existing = await self.stat(key)
            if existing.is_directory:
                return True
        except PathNotFoundError:
            pass

        s3_client = await self._get_s3_client()
        await s3_client.put_object(Bucket=self.bucket_name, Key=key, Body=b"")
        logger.debug(f"Created directory marker s3://{self.bucket_name}/{key}")
        return True

    def _unsupported(self, operation: str):
        raise UnsupportedOperationError(operation, UNSUPPORTED_OPERATIONS[operation])

    def chown(self, path: str, uid: int, gid: int):
        self._unsupported("chown")

    def chmod(self, path: str, mode: int):
        self._unsupported("chmod")

    def rename(self, old_path: str, new_path: str):
        self._unsupported("rename")

    def watch(self, directory: str, **options):
        self._unsupported("watch")

    def execute_command(self, command: str, **options):
        self._unsupported("execute_command")

    def borrow_file(self, file_name: str, callback: Callable):
        self._unsupported("borrow_file")

    def glob(self, pattern: str, **options):
        self._unsupported("glob")

    def grep(self, search_string: str, **options):
        self._unsupported("grep")
