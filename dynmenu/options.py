"""Short-option parsing in the traditional single-dash style."""

from __future__ import annotations

from collections.abc import Container, Sequence
from dataclasses import dataclass, field

from .errors import UsageError


@dataclass
class ParsedArgs:
    """The result of parsing a command line."""

    program: str
    flags: list[tuple[str, str | None]] = field(default_factory=list)
    operands: list[str] = field(default_factory=list)


def parse_flags(argv: Sequence[str], with_value: Container[str]) -> ParsedArgs:
    """Split argv into the program name, flags and operands.

    Flags may be grouped ("-ab"). A flag listed in with_value takes the
    rest of its argument, or else the next argument, as its value.
    Parsing stops at "--", at "-" alone, or at the first non-flag.
    """
    program = argv[0] if argv else ""
    args = list(argv[1:])
    flags: list[tuple[str, str | None]] = []
    pos = 0
    while pos < len(args) and args[pos].startswith("-") and len(args[pos]) > 1:
        arg = args[pos]
        if arg == "--":
            pos += 1
            break
        chars = arg[1:]
        for idx, char in enumerate(chars):
            if char in with_value:
                rest = chars[idx + 1:]
                if rest:
                    flags.append((char, rest))
                elif pos + 1 < len(args):
                    pos += 1
                    flags.append((char, args[pos]))
                else:
                    raise UsageError(f"option requires an argument -- {char}")
                break
            flags.append((char, None))
        pos += 1
    return ParsedArgs(program, flags, args[pos:])