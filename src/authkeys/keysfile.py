"""Reading and writing whole authorized_keys files.

Pipeline shape:
- read lines -> key records (bad lines are logged and dropped)
- callers edit the records in place
- render records -> lines -> file
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .errors import KeysFileError, ParseError
from .records import AuthorizedKey, KeyFormat, parse_line, render_record

log = logging.getLogger(__name__)


def parse_lines(lines: Iterable[str], source: str = "<input>") -> tuple[list[AuthorizedKey], Optional[KeyFormat]]:
    """Parse authorized_keys lines into key records.

    The first good line fixes the file's format; later lines of the other
    format are dropped like any other invalid line.

    Returns:
        The records in line order and the file's format (None if no record).
    """
    records: list[AuthorizedKey] = []
    fmt: Optional[KeyFormat] = None

    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        try:
            rec = parse_line(text)
        except ParseError as ex:
            log.warning("Invalid line in %s:%d: %s (%s)", source, lineno, text, ex)
            continue
        if rec is None:
            continue

        if fmt is None:
            fmt = rec.format
        elif rec.format is not fmt:
            log.warning("Switch from %s to %s in %s:%d: %s",
                        fmt.value, rec.format.value, source, lineno, text)
            continue

        records.append(rec)

    return records, fmt


def render_records(records: Iterable[AuthorizedKey]) -> str:
    """Render records as file content, one line each."""
    return "".join(render_record(r) + "\n" for r in records)


class AuthorizedKeysFile:
    """An authorized_keys file and the key records read from it.

    The file is read when the object is created. Records are shared, not
    copied: edit them through `records()` and call `persist()` to write the
    whole file back.

    Raises:
        KeysFileError: if the file cannot be opened.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._records: list[AuthorizedKey] = []
        self._format: Optional[KeyFormat] = None
        self.read()

    def read(self) -> None:
        """(Re)read the file, replacing the current records."""
        try:
            fh = open(self.path, "r", encoding="utf-8")
        except OSError as ex:
            log.error("Cannot open %s: %s", self.path, ex.strerror or ex)
            raise KeysFileError(f"cannot open {self.path}: {ex.strerror or ex}") from ex
        with fh:
            self._records, self._format = parse_lines(fh, str(self.path))
        log.debug("Read %d keys from %s", len(self._records), self.path)

    @property
    def format(self) -> Optional[KeyFormat]:
        return self._format

    def records(self) -> list[AuthorizedKey]:
        return list(self._records)

    keys = records

    def __iter__(self) -> Iterator[AuthorizedKey]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> AuthorizedKey:
        return self._records[index]

    def render(self) -> str:
        """Text of all records, what `persist()` writes out."""
        return render_records(self._records)

    as_string = render

    def persist(self) -> None:
        """Overwrite the file with the current records. Not atomic."""
        self.path.write_text(self.render(), encoding="utf-8")
        log.debug("Wrote %d keys to %s", len(self._records), self.path)

    save = persist
