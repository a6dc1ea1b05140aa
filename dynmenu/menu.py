"""Interactive menu state: item matching, input editing and paging."""

from __future__ import annotations

import enum
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from . import utf8
from .errors import UsageError

VERSION = "5.3"
BUFSIZ = 8192
WORD_DELIMITERS = b" "
USAGE = (
    "usage: dmenu [-bfiv] [-l lines] [-p prompt] [-fn font] [-m monitor]\n"
    "             [-nb color] [-nf color] [-sb color] [-sf color] [-w windowid]"
)


class Key(enum.Enum):
    """Non-character keys the menu reacts to."""

    HOME = "Home"
    END = "End"
    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    NEXT = "Next"
    PRIOR = "Prior"
    ESCAPE = "Escape"
    DELETE = "Delete"
    BACKSPACE = "BackSpace"
    TAB = "Tab"
    RETURN = "Return"


class Modifier(enum.Flag):
    """Modifier keys held during a key press."""

    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


_CONTROL_MAP: dict[object, Key] = {
    "a": Key.HOME,
    "b": Key.LEFT,
    "c": Key.ESCAPE,
    "d": Key.DELETE,
    "e": Key.END,
    "f": Key.RIGHT,
    "g": Key.ESCAPE,
    "h": Key.BACKSPACE,
    "i": Key.TAB,
    "n": Key.DOWN,
    "p": Key.UP,
}

_ALT_MAP: dict[object, Key] = {
    "g": Key.HOME,
    "G": Key.END,
    "h": Key.UP,
    "j": Key.NEXT,
    "k": Key.PRIOR,
    "l": Key.DOWN,
}


@dataclass(eq=False)
class Item:
    """One menu entry."""

    text: str
    out: bool = False


@dataclass
class Options:
    """Settings, from defaults and the command line."""

    topbar: bool = True
    centered: bool = False
    min_width: int = 500
    fonts: list[str] = field(default_factory=lambda: ["monospace:size=10"])
    prompt: str | None = None
    colors: dict[str, list[str]] = field(default_factory=lambda: {
        "norm": ["#bbbbbb", "#222222"],
        "sel": ["#eeeeee", "#005577"],
        "out": ["#000000", "#00ffff"],
    })
    lines: int = 0
    columns: int = 0
    monitor: int = -1
    fast: bool = False
    ignore_case: bool = False
    embed: str | None = None
    show_version: bool = False


class MenuExit(Exception):
    """The menu has finished; status is the exit status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"menu exited with status {status}")
        self.status = status


def contains(haystack: str, needle: str, ignore_case: bool = False) -> bool:
    """Whether needle occurs in haystack."""
    if ignore_case:
        return needle.lower() in haystack.lower()
    return needle in haystack


def starts_with(prefix: str, text: str, length: int, ignore_case: bool = False) -> bool:
    """Whether the first length characters of prefix and text agree."""
    if ignore_case:
        prefix, text = prefix.lower(), text.lower()
    return prefix[:length] == text[:length]


def match_items(items: Iterable[Item], text: str, ignore_case: bool = False) -> list[Item]:
    """Items containing every space-separated token of text.

    Exact matches come first, then those starting with the first token,
    then the rest, each group in input order.
    """
    tokens = [token for token in text.split(" ") if token]
    exact: list[Item] = []
    prefix: list[Item] = []
    substring: list[Item] = []
    first = tokens[0] if tokens else ""
    for item in items:
        if not all(contains(item.text, token, ignore_case) for token in tokens):
            continue
        if not tokens or starts_with(text, item.text, len(text) + 1, ignore_case):
            exact.append(item)
        elif starts_with(first, item.text, len(first), ignore_case):
            prefix.append(item)
        else:
            substring.append(item)
    return exact + prefix + substring


def read_items(stream: Iterable[str]) -> list[Item]:
    """Read one item per line, dropping the trailing newline."""
    return [Item(line.removesuffix("\n")) for line in stream]


def _atoi(value: str) -> int:
    value = value.lstrip()
    sign = 1
    if value[:1] in ("+", "-"):
        sign = -1 if value[0] == "-" else 1
        value = value[1:]
    digits = ""
    for char in value:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


def parse_args(argv: Sequence[str]) -> Options:
    """Build options from a command line (argv[0] is the program name)."""
    options = Options()
    args = list(argv[1:])
    pos = 0
    while pos < len(args):
        arg = args[pos]
        if arg == "-v":
            options.show_version = True
            return options
        if arg == "-b":
            options.topbar = False
        elif arg == "-f":
            options.fast = True
        elif arg == "-c":
            options.centered = True
        elif arg == "-i":
            options.ignore_case = True
        elif pos + 1 == len(args):
            raise UsageError(USAGE, status=1)
        else:
            pos += 1
            value = args[pos]
            if arg == "-g":
                options.columns = max(0, _atoi(value))
                if options.lines == 0:
                    options.lines = 1
            elif arg == "-l":
                options.lines = max(0, _atoi(value))
                if options.columns == 0:
                    options.columns = 1
            elif arg == "-m":
                options.monitor = _atoi(value)
            elif arg == "-p":
                options.prompt = value
            elif arg == "-fn":
                options.fonts[0] = value
            elif arg == "-nb":
                options.colors["norm"][1] = value
            elif arg == "-nf":
                options.colors["norm"][0] = value
            elif arg == "-sb":
                options.colors["sel"][1] = value
            elif arg == "-sf":
                options.colors["sel"][0] = value
            elif arg == "-w":
                options.embed = value
            else:
                raise UsageError(USAGE, status=1)
        pos += 1
    return options


def _is_control(byte: int) -> bool:
    return byte < 0x20 or byte == 0x7F


class Menu:
    """The state of a running menu, driven by key presses."""

    def __init__(self, items: Iterable[Item | str], options: Options | None = None, *,
                 width: int = 80, bar_height: int = 1, lrpad: int = 0,
                 measure: Callable[[str], int] | None = None,
                 out: TextIO | None = None) -> None:
        self.options = options if options is not None else Options()
        self.items = [item if isinstance(item, Item) else Item(item) for item in items]
        self.lines = min(self.options.lines, len(self.items))
        self.columns = self.options.columns or (1 if self.lines > 0 else 0)
        self.width = width
        self.bar_height = bar_height
        self.lrpad = lrpad
        self._measure = measure if measure is not None else len
        self.out = out
        self._text = bytearray()
        self.cursor = 0
        self.matches: list[Item] = []
        self.curr: int | None = None
        self.sel: int | None = None
        self.prev: int | None = None
        self.next: int | None = None
        prompt = self.options.prompt
        self.prompt_width = self._textw(prompt) - lrpad // 4 if prompt else 0
        self.input_width = width // 3
        self.match()

    @property
    def text(self) -> str:
        """The typed input."""
        return self._text.decode("utf-8", errors="replace")

    @property
    def selected(self) -> Item | None:
        """The highlighted item, if any."""
        return None if self.sel is None else self.matches[self.sel]

    def _textw(self, text: str) -> int:
        return self._measure(text) + self.lrpad

    def _textw_clamp(self, text: str, limit: int) -> int:
        if limit == 0:
            return 0
        width = self._textw(text)
        return width if limit < 0 else min(width, limit)

    def _right(self, index: int) -> int | None:
        return index + 1 if index + 1 < len(self.matches) else None

    def _left(self, index: int) -> int | None:
        return index - 1 if index > 0 else None

    def match(self) -> None:
        """Recompute the matching items from the input."""
        self.matches = match_items(self.items, self.text, self.options.ignore_case)
        self.curr = self.sel = 0 if self.matches else None
        self.calc_offsets()

    def insert(self, data: bytes | str) -> None:
        """Insert data at the cursor, unless the input would grow too long."""
        if isinstance(data, str):
            data = data.encode()
        if len(self._text) + len(data) > BUFSIZ - 1:
            return
        self._text[self.cursor:self.cursor] = data
        self.cursor += len(data)
        self.match()

    def erase(self, count: int) -> None:
        """Delete count bytes before the cursor."""
        count = min(count, self.cursor)
        del self._text[self.cursor - count:self.cursor]
        self.cursor -= count
        self.match()

    def next_rune(self, inc: int) -> int:
        """Offset of the next character start from the cursor in direction inc."""
        return utf8.next_rune(bytes(self._text), self.cursor, inc)

    def _byte_at(self, index: int) -> int:
        return self._text[index] if 0 <= index < len(self._text) else 0

    def _is_delimiter(self, index: int) -> bool:
        return self._byte_at(index) in WORD_DELIMITERS

    def move_word_edge(self, direction: int) -> None:
        """Move the cursor to the start (direction < 0) or end of a word."""
        if direction < 0:
            while self.cursor > 0 and self._is_delimiter(self.next_rune(-1)):
                self.cursor = self.next_rune(-1)
            while self.cursor > 0 and not self._is_delimiter(self.next_rune(-1)):
                self.cursor = self.next_rune(-1)
        else:
            while self._byte_at(self.cursor) and self._is_delimiter(self.cursor):
                self.cursor = self.next_rune(+1)
            while self._byte_at(self.cursor) and not self._is_delimiter(self.cursor):
                self.cursor = self.next_rune(+1)

    def calc_offsets(self) -> None:
        """Work out which items start the next and previous pages."""
        if self.lines > 0:
            limit = self.lines * self.columns * self.bar_height
        else:
            limit = self.width - (self.prompt_width + self.input_width
                                  + self._textw("<") + self._textw(">"))

        def cost(index: int) -> int:
            if self.lines > 0:
                return self.bar_height
            return self._textw_clamp(self.matches[index].text, limit)

        used = 0
        self.next = self.curr
        while self.next is not None:
            used += cost(self.next)
            if used > limit:
                break
            self.next = self._right(self.next)
        used = 0
        self.prev = self.curr
        while self.prev is not None and self._left(self.prev) is not None:
            used += cost(self.prev - 1)
            if used > limit:
                break
            self.prev -= 1

    def _delete_word(self) -> None:
        while self.cursor > 0 and self._is_delimiter(self.next_rune(-1)):
            self.erase(self.cursor - self.next_rune(-1))
        while self.cursor > 0 and not self._is_delimiter(self.next_rune(-1)):
            self.erase(self.cursor - self.next_rune(-1))

    def keypress(self, key: Key | str | None, modifiers: Modifier = Modifier.NONE,
                 text: bytes | str = "") -> str | None:
        """Handle one key press.

        key is a Key, a single key character, or None for text composed by
        an input method. Returns "PRIMARY" or "CLIPBOARD" when the key asks
        for that selection to be pasted, else None. Raises MenuExit when
        the menu is done.
        """
        data = text.encode() if isinstance(text, str) else bytes(text)
        if key is None:
            self._type(data)
            return None
        if Modifier.CONTROL in modifiers:
            if key in _CONTROL_MAP:
                key = _CONTROL_MAP[key]
            elif key in ("j", "J", "m", "M"):
                key = Key.RETURN
                modifiers &= ~Modifier.CONTROL
            elif key == "k":
                del self._text[self.cursor:]
                self.match()
            elif key == "u":
                self.erase(self.cursor)
            elif key == "w":
                self._delete_word()
            elif key in ("y", "Y"):
                return "CLIPBOARD" if Modifier.SHIFT in modifiers else "PRIMARY"
            elif key is Key.LEFT:
                self.move_word_edge(-1)
                return None
            elif key is Key.RIGHT:
                self.move_word_edge(+1)
                return None
            elif key is Key.RETURN:
                pass
            elif key == "[":
                raise MenuExit(1)
            else:
                return None
        elif Modifier.ALT in modifiers:
            if key == "b":
                self.move_word_edge(-1)
                return None
            if key == "f":
                self.move_word_edge(+1)
                return None
            if key not in _ALT_MAP:
                return None
            key = _ALT_MAP[key]
        self._dispatch(key, modifiers, data)
        return None

    def _type(self, data: bytes) -> None:
        if data and not _is_control(data[0]):
            self.insert(data)

    def _dispatch(self, key: Key | str, modifiers: Modifier, data: bytes) -> None:
        if not isinstance(key, Key):
            self._type(data)
            return
        if key is Key.DELETE:
            if self.cursor >= len(self._text):
                return
            self.cursor = self.next_rune(+1)
            key = Key.BACKSPACE
        if key is Key.BACKSPACE:
            if self.cursor > 0:
                self.erase(self.cursor - self.next_rune(-1))
        elif key is Key.END:
            self._end()
        elif key is Key.ESCAPE:
            raise MenuExit(1)
        elif key is Key.HOME:
            if self.sel == (0 if self.matches else None):
                self.cursor = 0
            else:
                self.sel = self.curr = 0
                self.calc_offsets()
        elif key is Key.LEFT:
            if self.cursor > 0 and (self.sel is None or self.sel == 0 or self.lines > 0):
                self.cursor = self.next_rune(-1)
            elif self.lines <= 0:
                self._up()
        elif key is Key.UP:
            self._up()
        elif key is Key.NEXT:
            if self.next is not None:
                self.sel = self.curr = self.next
                self.calc_offsets()
        elif key is Key.PRIOR:
            if self.prev is not None:
                self.sel = self.curr = self.prev
                self.calc_offsets()
        elif key is Key.RETURN:
            self._accept(modifiers)
        elif key is Key.RIGHT:
            if self.cursor < len(self._text):
                self.cursor = self.next_rune(+1)
            elif self.lines <= 0:
                self._down()
        elif key is Key.DOWN:
            self._down()
        elif key is Key.TAB:
            if self.sel is not None:
                self._text = bytearray(self.matches[self.sel].text.encode()[:BUFSIZ - 1])
                self.cursor = len(self._text)
                self.match()

    def _end(self) -> None:
        if self.cursor < len(self._text):
            self.cursor = len(self._text)
            return
        if self.next is not None:
            self.curr = len(self.matches) - 1
            self.calc_offsets()
            self.curr = self.prev
            self.calc_offsets()
            while self.next is not None and self.curr is not None:
                self.curr = self._right(self.curr)
                if self.curr is None:
                    break
                self.calc_offsets()
        self.sel = len(self.matches) - 1 if self.matches else None

    def _up(self) -> None:
        if self.sel is not None and self.sel > 0:
            self.sel -= 1
            if self.sel + 1 == self.curr:
                self.curr = self.prev
                self.calc_offsets()

    def _down(self) -> None:
        if self.sel is not None and self._right(self.sel) is not None:
            self.sel += 1
            if self.sel == self.next:
                self.curr = self.next
                self.calc_offsets()

    def _accept(self, modifiers: Modifier) -> None:
        item = self.selected
        chosen = item.text if item is not None and Modifier.SHIFT not in modifiers else self.text
        print(chosen, file=self.out if self.out is not None else sys.stdout)
        if Modifier.CONTROL not in modifiers:
            raise MenuExit(0)
        if item is not None:
            item.out = True

    def paste(self, data: bytes | str) -> None:
        """Insert pasted data up to its first newline."""
        if isinstance(data, str):
            data = data.encode()
        self.insert(data.split(b"\n", 1)[0])

    def visible_items(self) -> list[Item]:
        """The items on the current page."""
        if self.curr is None:
            return []
        end = self.next if self.next is not None else len(self.matches)
        return self.matches[self.curr:end]

    def numbers(self) -> str:
        """The "matched/total" counter."""
        return f"{len(self.matches)}/{len(self.items)}"