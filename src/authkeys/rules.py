"""Edit rules.

A rule changes key records in place, for example adding `no-pty` to every
key or restricting one key type with `from="..."`.

We keep rules data-driven and small:
- only a handful of operations
- no dynamic imports
- no eval
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .errors import RuleError
from .records import AuthorizedKey, SSH1Key, SSH2Key


Transform = Callable[[AuthorizedKey], None]


@dataclass(frozen=True)
class Rule:
    """A single edit rule.

    If `key_type` is set, the rule only applies to matching records: the
    encryption (e.g. "ssh-ed25519") of ssh-2 keys, or "ssh-1".
    """
    name: str
    op: str
    arg: str
    key_type: Optional[str] = None


def _split_assignment(arg: str):
    """`name=value` -> (name, value); bare `name` -> (name, True)."""
    name, sep, value = arg.partition("=")
    name = name.strip()
    if not name:
        raise RuleError(f"missing option name in {arg!r}")
    if not sep:
        return name, True
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    return name, value


def key_type_of(r: AuthorizedKey) -> str:
    if isinstance(r, SSH2Key):
        return r.encryption
    return r.type


def compile_rule(rule: Rule) -> Transform:
    """Compile a Rule into a callable transform.

    Supported ops:
    - "set_option": arg is `name=value`, or `name` for a flag
    - "add_option": like set_option, but repeats the option
    - "delete_option": arg is the option name
    - "set_comment": arg is the new comment
    - "set_keylen": arg is the new key length (ssh-1 keys only)
    """
    op = rule.op.strip()

    def _guard(r: AuthorizedKey) -> bool:
        return rule.key_type is None or key_type_of(r) == rule.key_type

    if op == "set_option":
        name, value = _split_assignment(rule.arg)

        def xform(r: AuthorizedKey) -> None:
            if _guard(r):
                r.set_option(name, value)
        return xform

    if op == "add_option":
        name, value = _split_assignment(rule.arg)

        def xform(r: AuthorizedKey) -> None:
            if _guard(r):
                r.options.add(name, value)
        return xform

    if op == "delete_option":
        name = rule.arg.strip()
        if not name:
            raise RuleError("delete_option needs an option name")

        def xform(r: AuthorizedKey) -> None:
            if _guard(r):
                r.delete_option(name)
        return xform

    if op == "set_comment":
        def xform(r: AuthorizedKey) -> None:
            if _guard(r):
                r.comment = rule.arg
        return xform

    if op == "set_keylen":
        try:
            keylen = int(rule.arg)
        except ValueError:
            raise RuleError(f"key length is not an integer: {rule.arg!r}") from None
        if keylen <= 0:
            raise RuleError(f"key length must be positive: {keylen}")

        def xform(r: AuthorizedKey) -> None:
            if not _guard(r):
                return
            if not isinstance(r, SSH1Key):
                raise RuleError(f"set_keylen applies to ssh-1 keys only, got {r.type}")
            r.keylen = keylen
        return xform

    raise RuleError(f"unknown op: {rule.op!r}")


def compile_rules(rules: Iterable[Rule]) -> list[Transform]:
    """Compile many rules into transforms."""
    return [compile_rule(r) for r in rules]


def apply_rules(records: Iterable[AuthorizedKey], rules: Iterable[Rule]) -> None:
    """Apply rules, in order, to every record.

    Raises:
        RuleError
    """
    transforms = compile_rules(rules)
    for r in records:
        for t in transforms:
            t(r)
