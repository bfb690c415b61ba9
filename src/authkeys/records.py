"""Key records: one parsed authorized_keys line each.

Two line shapes exist, and a file only ever holds one of them:
    [options] <bits> <exponent> <modulus> [comment]    ssh-1 (legacy)
    [options] <keytype> <base64 key> [comment]         ssh-2

From the sshd manpage: the options field is optional; its presence is
determined by whether the line starts with a number or not (the options
field never starts with a number). Keytypes in use all start with `ssh-`.
"""

from __future__ import annotations
import enum
import logging
import re
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Sequence

from .errors import ParseError
from .options import Options, decode_options, encode_options
from .tokens import split_line, strip_quotes

log = logging.getLogger(__name__)

SSH2_RE = re.compile(r"^ssh-")
SSH1_RE = re.compile(r"^\d", re.ASCII)
DIGITS_RE = re.compile(r"[0-9]+")


class KeyFormat(enum.Enum):
    SSH1 = "ssh-1"
    SSH2 = "ssh-2"


def detect_format(first_field: str) -> Optional[KeyFormat]:
    """Tell the record format from a line's first field.

    Returns None when the field is neither, meaning it is an options field.
    """
    if SSH2_RE.match(first_field):
        return KeyFormat.SSH2
    if SSH1_RE.match(first_field):
        return KeyFormat.SSH1
    return None


@dataclass(eq=False)
class AuthorizedKey:
    """Fields shared by both key formats."""

    format: ClassVar[KeyFormat]

    options: Options = field(default_factory=Options, kw_only=True)
    comment: str = field(default="", kw_only=True)

    @property
    def type(self) -> str:
        return self.format.value

    @property
    def email(self) -> str:
        return self.comment

    @email.setter
    def email(self, value: str) -> None:
        self.comment = value

    def option(self, name: str):
        """Value of option `name`, or None if it is not set."""
        return self.options.get(name)

    def set_option(self, name: str, value=True) -> None:
        self.options[name] = value

    def delete_option(self, name: str) -> None:
        """Remove option `name`; removing a missing option is a no-op."""
        self.options.pop(name, None)

    def body(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return render_record(self)


@dataclass(eq=False)
class SSH1Key(AuthorizedKey):
    format: ClassVar[KeyFormat] = KeyFormat.SSH1

    keylen: int
    exponent: int
    key: str

    def body(self) -> str:
        return f"{self.keylen} {self.exponent} {self.key}"


@dataclass(eq=False)
class SSH2Key(AuthorizedKey):
    format: ClassVar[KeyFormat] = KeyFormat.SSH2

    encryption: str
    key: str

    def body(self) -> str:
        return f"{self.encryption} {self.key}"


def _to_int(value: str, what: str) -> int:
    # plain ASCII digits only, so the field renders back unchanged
    if not DIGITS_RE.fullmatch(value):
        raise ParseError(f"{what} is not an integer: {value!r}")
    number = int(value)
    if number <= 0:
        raise ParseError(f"{what} must be positive: {value!r}")
    return number


def build_record(fields: Sequence[str], options: Options, fmt: KeyFormat) -> AuthorizedKey:
    """Build a key record from the fields left after the options field.

    Raises:
        ParseError: too few fields for `fmt`, or an ssh-1 number that is not
            a positive run of digits.
    """
    fields = [strip_quotes(f) for f in fields]

    if fmt is KeyFormat.SSH1:
        if len(fields) < 3:
            raise ParseError(f"ssh-1 key needs 3 fields, got {len(fields)}")
        keylen, exponent, key = fields[:3]
        comment = " ".join(fields[3:])
        log.debug("Found %s bit ssh-1 key", keylen)
        return SSH1Key(
            keylen=_to_int(keylen, "key length"),
            exponent=_to_int(exponent, "exponent"),
            key=key,
            comment=comment,
            options=options,
        )

    if len(fields) < 2:
        raise ParseError(f"ssh-2 key needs 2 fields, got {len(fields)}")
    encryption, key = fields[:2]
    log.debug("Found ssh-2 key: %s", encryption)
    return SSH2Key(
        encryption=encryption,
        key=key,
        comment=" ".join(fields[2:]),
        options=options,
    )


def parse_line(line: str) -> Optional[AuthorizedKey]:
    """Parse one authorized_keys line into a key record.

    Blank lines and `#` comment lines give None.

    Raises:
        ParseError: if the line is malformed.
    """
    raw = line.strip()
    if not raw or raw.startswith("#"):
        return None

    fields = split_line(raw)
    log.debug("Parsed fields: %s", " ".join(f"[{f}]" for f in fields))

    fmt = detect_format(fields[0])
    options = Options()
    if fmt is None:
        options = decode_options(fields.pop(0))
        if not fields:
            raise ParseError(f"options without a key: {raw!r}")
        fmt = detect_format(strip_quotes(fields[0]))
        if fmt is None:
            raise ParseError(f"neither ssh-1 nor ssh-2 key: {raw!r}")

    return build_record(fields, options, fmt)


def render_record(r: AuthorizedKey) -> str:
    """Render a key record back to its line form, without newline."""
    parts = []
    opts = encode_options(r.options)
    if opts:
        parts.append(opts)
    parts.append(r.body())
    if r.comment:
        parts.append(r.comment)
    return " ".join(parts)
