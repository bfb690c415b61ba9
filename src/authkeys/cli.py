"""Command-line interface for authkeys.

- reads an authorized_keys file (or stdin)
- applies edit rules given as options
- prints the result, or writes it back with --write
"""

from __future__ import annotations
import argparse
import sys

from .config import Settings
from .errors import AuthKeysError
from .keysfile import AuthorizedKeysFile, parse_lines, render_records
from .logger import get_logger
from .records import SSH1Key
from .rules import Rule, apply_rules

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _summary(index: int, r) -> str:
    if isinstance(r, SSH1Key):
        what = f"{r.type} {r.keylen}"
    else:
        what = f"{r.type} {r.encryption}"
    opts = ",".join(r.options)
    return f"{index}\t{what}\t{opts or '-'}\t{r.comment}"


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="authkeys", description="Read and edit ssh authorized_keys files.")
    p.add_argument("path", nargs="?", default=str(settings.keys_path),
                   help="authorized_keys file or '-' for stdin (default: %(default)s)")
    p.add_argument("--set-option", action="append", default=[], metavar="NAME[=VALUE]",
                   help="Set an option on every key")
    p.add_argument("--add-option", action="append", default=[], metavar="NAME[=VALUE]",
                   help="Add a value to a repeatable option on every key")
    p.add_argument("--delete-option", action="append", default=[], metavar="NAME",
                   help="Remove an option from every key")
    p.add_argument("--comment", help="Replace the comment of every key")
    p.add_argument("--key-type", help="Only edit keys of this type (e.g. ssh-rsa, ssh-1)")
    p.add_argument("--list", action="store_true", help="List keys instead of printing the file")
    p.add_argument("--write", action="store_true", help="Write changes back to the file")
    p.add_argument("--log-level", default=settings.log_level, type=str.upper, choices=LOG_LEVELS,
                   help="Logging level (default: %(default)s)")
    return p


def _rules(args) -> list[Rule]:
    rules: list[Rule] = []
    for arg in args.set_option:
        rules.append(Rule(name="set_option", op="set_option", arg=arg, key_type=args.key_type))
    for arg in args.add_option:
        rules.append(Rule(name="add_option", op="add_option", arg=arg, key_type=args.key_type))
    for arg in args.delete_option:
        rules.append(Rule(name="delete_option", op="delete_option", arg=arg, key_type=args.key_type))
    if args.comment is not None:
        rules.append(Rule(name="comment", op="set_comment", arg=args.comment, key_type=args.key_type))
    return rules


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    p = build_parser(settings)
    args = p.parse_args(argv)

    # a bad AUTHKEYS_LOG_LEVEL arrives as the default, which argparse does not check
    if args.log_level not in LOG_LEVELS:
        p.error(f"invalid log level: {args.log_level!r}")
    log = get_logger("authkeys", level=args.log_level)

    if args.write and args.path == "-":
        p.error("--write needs a file path, not stdin")

    try:
        if args.path == "-":
            keysfile = None
            records, _ = parse_lines(sys.stdin, "<stdin>")
        else:
            keysfile = AuthorizedKeysFile(args.path)
            records = keysfile.records()
        apply_rules(records, _rules(args))
        if args.write:
            keysfile.persist()
    except (AuthKeysError, OSError) as ex:
        log.debug("failed: %r", ex)
        sys.stderr.write(f"error: {ex}\n")
        return 2

    if args.list:
        for i, r in enumerate(records):
            sys.stdout.write(_summary(i, r) + "\n")
    elif not args.write:
        sys.stdout.write(render_records(records))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
