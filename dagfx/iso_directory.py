"""The table of files on the disc, read from ISO 9660 directory records."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

SECTOR_SIZE = 0x800
MAX_ENTRIES = 256

_NAME_LEN_OFFSET = 0x20
_NAME_OFFSET = 0x21
_EXTENT_OFFSET = 0x02
_LENGTH_OFFSET = 0x0A


def make_cdrom_path(path: str) -> str:
    """Upper-case a file name (ASCII only) and add the ';1' version suffix."""
    upper = "".join(chr(ord(c) - 32) if "a" <= c <= "z" else c for c in path)
    return upper + ";1"


@dataclass(frozen=True)
class IsoFileEntry:
    """A file's name as recorded on the disc, its first sector and its length in bytes."""

    filename: str
    start_sector: int
    length: int


@dataclass(frozen=True)
class ReadRequest:
    """The sectors to read to load (part of) a file."""

    entry: IsoFileEntry
    sector_start: int
    num_sectors: int
    size: int


def _records(sector: bytes) -> Iterator[IsoFileEntry]:
    pos = 0
    while pos < len(sector) and sector[pos]:
        record_len = sector[pos]
        if pos + _NAME_OFFSET > len(sector):
            raise ValueError(f"directory record at offset {pos} is truncated")
        name_len = sector[pos + _NAME_LEN_OFFSET]
        name_end = pos + _NAME_OFFSET + name_len
        if name_end > len(sector):
            raise ValueError(f"directory record name at offset {pos} runs past the sector")
        raw_name = sector[pos + _NAME_OFFSET : name_end].split(b"\0", 1)[0]
        (start,) = struct.unpack_from("<I", sector, pos + _EXTENT_OFFSET)
        (length,) = struct.unpack_from("<I", sector, pos + _LENGTH_OFFSET)
        yield IsoFileEntry(raw_name.decode("latin-1"), start, length)
        pos += record_len


def parse_directory_sector(sector: bytes) -> list[IsoFileEntry]:
    """Decode the directory records of one sector, stopping at the first zero length byte."""
    return list(_records(bytes(sector)))


class IsoFileTable:
    """The files of one directory, looked up by their disc names."""

    def __init__(self, entries: Iterable[IsoFileEntry] = ()) -> None:
        self.entries: list[IsoFileEntry] = list(entries)
        if len(self.entries) > MAX_ENTRIES:
            raise OverflowError(f"at most {MAX_ENTRIES} directory entries are supported")

    @classmethod
    def from_sectors(cls, sectors: Iterable[bytes]) -> IsoFileTable:
        """Build the table from the raw sectors of a directory extent."""
        entries: list[IsoFileEntry] = []
        for sector in sectors:
            entries.extend(parse_directory_sector(sector))
        return cls(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IsoFileEntry]:
        return iter(self.entries)

    def find(self, filename: str) -> IsoFileEntry | None:
        """The entry for a plain file name such as 'hud.lmp', or None."""
        wanted = make_cdrom_path(filename)
        return next((entry for entry in self.entries if entry.filename == wanted), None)

    def read_request(self, filename: str, size: int = 0, start_offset: int = 0) -> ReadRequest:
        """The sectors holding ``size`` bytes of a file from ``start_offset``.

        A size of 0 means the whole file.
        """
        entry = self.find(filename)
        if entry is None:
            raise FileNotFoundError(f"can't find file {make_cdrom_path(filename)!r} in ISO table")
        if size == 0:
            size = entry.length
        return ReadRequest(
            entry=entry,
            sector_start=entry.start_sector + (start_offset >> 11),
            num_sectors=(size + 0x7FF) >> 11,
            size=size,
        )