"""The options field of an authorized_keys line.

An options field looks like:
    no-pty,from="a.example.com",from="b.example.com",command="uptime"

Values come in three shapes, kept as a tagged value:
- FLAG: a bare name (`no-pty`), rendered back bare
- SINGLE: `name="value"`
- MANY: a name given more than once, rendered once per value
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Iterator, MutableMapping, Union

from .errors import ParseError
from .tokens import split_options, strip_quotes

log = logging.getLogger(__name__)

PlainValue = Union[bool, str, list]


class OptionKind(enum.Enum):
    FLAG = "flag"
    SINGLE = "single"
    MANY = "many"


@dataclass(frozen=True)
class OptionValue:
    kind: OptionKind
    values: tuple[str, ...] = ()

    @classmethod
    def flag(cls) -> "OptionValue":
        return cls(OptionKind.FLAG)

    @classmethod
    def single(cls, value: str) -> "OptionValue":
        return cls(OptionKind.SINGLE, (value,))

    @classmethod
    def many(cls, values) -> "OptionValue":
        return cls(OptionKind.MANY, tuple(values))

    @classmethod
    def coerce(cls, value) -> "OptionValue":
        """Build a tagged value from a plain Python value.

        `True` is a flag, a list or tuple is MANY, anything else is SINGLE
        (numbers are stored as their string form).
        """
        if isinstance(value, OptionValue):
            return value
        if value is True:
            return cls.flag()
        if value is None or value is False:
            raise ValueError("option value must not be None or False; delete the option instead")
        if isinstance(value, (list, tuple)):
            return cls.many(str(v) for v in value)
        return cls.single(str(value))

    def append(self, value: "OptionValue") -> "OptionValue":
        """Return a MANY value with `value` appended after the current ones."""
        return OptionValue.many(self._as_items() + value._as_items())

    def plain(self) -> PlainValue:
        if self.kind is OptionKind.FLAG:
            return True
        if self.kind is OptionKind.SINGLE:
            return self.values[0]
        return list(self.values)

    def _as_items(self) -> tuple[str, ...]:
        # a repeated bare flag keeps its "1" marker inside a list
        if self.kind is OptionKind.FLAG:
            return ("1",)
        return self.values


class Options(MutableMapping):
    """Ordered, case-sensitive mapping of option name to value.

    Reading an option gives back `True`, a string, or a list of strings.
    The list is a copy; assign it back to change a repeated option.
    """

    def __init__(self, items=None) -> None:
        self._data: dict[str, OptionValue] = {}
        if items:
            pairs = items.items() if hasattr(items, "items") else items
            for name, value in pairs:
                self[name] = value

    def __getitem__(self, name: str) -> PlainValue:
        return self._data[name].plain()

    def __setitem__(self, name: str, value) -> None:
        if not name:
            raise ValueError("option name must not be empty")
        self._data[name] = OptionValue.coerce(value)

    def __delitem__(self, name: str) -> None:
        del self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Options({dict(self.items())!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Options):
            return list(self._data.items()) == list(other._data.items())
        return super().__eq__(other)

    def add(self, name: str, value) -> None:
        """Add a value, turning an existing entry into a list."""
        new = OptionValue.coerce(value)
        if name in self._data:
            self._data[name] = self._data[name].append(new)
        else:
            self[name] = new

    def kind(self, name: str) -> OptionKind:
        return self._data[name].kind

    def tagged(self, name: str) -> OptionValue:
        return self._data[name]


def decode_options(text: str) -> Options:
    """Decode a raw options field into an `Options` mapping."""
    opts = Options()
    for token in split_options(text):
        if not token:
            continue
        name, sep, value = token.partition("=")
        if not name:
            raise ParseError(f"empty option name in {token!r}")
        if sep:
            opts.add(name, OptionValue.single(strip_quotes(value)))
        else:
            opts.add(name, OptionValue.flag())
    log.debug("Parsed options: %s", " ".join(f"[{n}]" for n in opts))
    return opts


def encode_options(opts: Options) -> str:
    """Render an `Options` mapping as an options field ("" when empty)."""
    parts: list[str] = []
    for name in opts:
        tagged = opts.tagged(name)
        if tagged.kind is OptionKind.FLAG:
            parts.append(name)
        else:
            parts.extend(f'{name}="{v}"' for v in tagged.values)
    return ",".join(parts)
