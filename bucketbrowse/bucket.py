"""Object buckets and the directory listing built on top of them."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

log = logging.getLogger(__name__)

_U32_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class Directory:
    """Marks an entry as a directory (a common key prefix)."""


@dataclass(frozen=True)
class File:
    """Marks an entry as a stored object with its size and upload time."""

    size: int
    uploaded: datetime


EntryType = Union[Directory, File]


def _format_timestamp(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    micro = moment.microsecond
    if micro:
        if micro % 1000 == 0:
            text += f".{micro // 1000:03d}"
        else:
            text += f".{micro:06d}"
    return text + "Z"


@dataclass(frozen=True)
class Entry:
    """One row of a directory listing."""

    key: str
    type: EntryType

    def to_dict(self) -> dict:
        """Return the entry in its JSON wire form."""
        if isinstance(self.type, File):
            kind: object = {
                "File": {
                    "size": self.type.size,
                    "uploaded": _format_timestamp(self.type.uploaded),
                }
            }
        else:
            kind = "Directory"
        return {"key": self.key, "type": kind}


@dataclass(frozen=True)
class BucketObject:
    """A stored object; ``body`` is only filled in when the object is fetched."""

    key: str
    size: int
    uploaded: datetime
    body: Optional[bytes] = None


@dataclass(frozen=True)
class ListResult:
    """Objects directly under a prefix plus the prefixes grouped by the delimiter."""

    objects: list[BucketObject]
    delimited_prefixes: list[str]


class Bucket(Protocol):
    def get(self, key: str) -> Optional[BucketObject]: ...

    def list(self, prefix: str = "", delimiter: Optional[str] = None) -> ListResult: ...


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _build_listing(
    objects: Iterable[BucketObject], prefix: str, delimiter: Optional[str]
) -> ListResult:
    listed: list[BucketObject] = []
    prefixes: dict[str, None] = {}
    for obj in sorted(objects, key=lambda item: item.key):
        if not obj.key.startswith(prefix):
            continue
        rest = obj.key[len(prefix):]
        if delimiter and delimiter in rest:
            cut = rest.index(delimiter) + len(delimiter)
            prefixes.setdefault(prefix + rest[:cut], None)
        else:
            listed.append(obj)
    return ListResult(objects=listed, delimited_prefixes=list(prefixes))


class MemoryBucket:
    """A bucket held in memory."""

    def __init__(self) -> None:
        self._objects: dict[str, BucketObject] = {}

    def put(self, key: str, data: bytes, uploaded: Optional[datetime] = None) -> BucketObject:
        """Store ``data`` under ``key``, replacing any previous object."""
        if not key:
            raise ValueError("object key must not be empty")
        moment = _as_utc(uploaded) if uploaded is not None else datetime.now(timezone.utc)
        obj = BucketObject(key=key, size=len(data), uploaded=moment, body=bytes(data))
        self._objects[key] = obj
        return obj

    def get(self, key: str) -> Optional[BucketObject]:
        """Return the object stored under ``key``, or None."""
        return self._objects.get(key)

    def list(self, prefix: str = "", delimiter: Optional[str] = None) -> ListResult:
        """List objects whose keys start with ``prefix``."""
        return _build_listing(self._objects.values(), prefix, delimiter)


class DirectoryBucket:
    """A bucket backed by the files below a local directory."""

    def __init__(self, root: Union[str, os.PathLike]) -> None:
        self.root = Path(root)

    def _resolve(self, key: str) -> Optional[Path]:
        if not key or key.startswith("/"):
            return None
        parts = key.split("/")
        if any(part in ("", ".", "..") for part in parts):
            return None
        return self.root.joinpath(*parts)

    @staticmethod
    def _mtime(path: Path) -> datetime:
        return datetime.fromtimestamp(path.stat().st_mtime, timezone.utc)

    def get(self, key: str) -> Optional[BucketObject]:
        """Return the file stored under ``key`` with its contents, or None."""
        path = self._resolve(key)
        if path is None or not path.is_file():
            return None
        body = path.read_bytes()
        return BucketObject(key=key, size=len(body), uploaded=self._mtime(path), body=body)

    def _walk(self) -> Iterable[BucketObject]:
        for dirpath, _dirnames, filenames in os.walk(self.root):
            for name in filenames:
                path = Path(dirpath, name)
                if not path.is_file():
                    continue
                key = path.relative_to(self.root).as_posix()
                yield BucketObject(key=key, size=path.stat().st_size, uploaded=self._mtime(path))

    def list(self, prefix: str = "", delimiter: Optional[str] = None) -> ListResult:
        """List files whose keys start with ``prefix``."""
        return _build_listing(self._walk(), prefix, delimiter)


def _to_millis(moment: datetime) -> datetime:
    moment = _as_utc(moment)
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def list_directory_contents(bucket: Bucket, prefix: str) -> list[Entry]:
    """List the directories and then the files directly under ``prefix``."""
    log.debug("Reading path: %s", prefix)
    listing = bucket.list(prefix=prefix, delimiter="/")
    entries = [Entry(key=key, type=Directory()) for key in listing.delimited_prefixes]
    entries.extend(
        Entry(
            key=obj.key,
            type=File(size=obj.size & _U32_MASK, uploaded=_to_millis(obj.uploaded)),
        )
        for obj in listing.objects
    )
    log.debug("Read %d entries.", len(entries))
    return entries