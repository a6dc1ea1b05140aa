# dynmenu

dynmenu is a small toolkit for keyboard-driven menus. It needs nothing beyond
the Python standard library, version 3.10 or later.

- `dynmenu.menu` is the menu engine. It holds the input line, the cursor and
  the candidates. It matches candidates as you type, moves the selection,
  pages through results and applies key bindings.
- `dynmenu.stest` filters a list of files by their properties. You can use it
  to build the list of candidates a menu shows, such as every executable on
  your `PATH`. It is installed as the `stest` command.
- `dynmenu.options`, `dynmenu.utf8` and `dynmenu.errors` are the supporting
  pieces: short-option parsing, lenient UTF-8 character handling, and the
  exceptions used for fatal and usage errors.

## Installing

```
pip install .
```

## The `stest` command

`stest` takes file names as arguments. With no arguments it reads them one per
line from standard input. It prints every name that passes all the tests you
ask for:

```
stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]
```

| flag | passes when the file |
|------|----------------------|
| `-a` | may be hidden (names starting with `.` are skipped otherwise) |
| `-b` | is a block special file |
| `-c` | is a character special file |
| `-d` | is a directory |
| `-e` | exists |
| `-f` | is a regular file |
| `-g` | has its set-group-id flag set |
| `-h` | is a symbolic link |
| `-l` | (changes input) tests the entries of each directory argument instead, printing entry names |
| `-n file` | was modified after `file` |
| `-o file` | was modified before `file` |
| `-p` | is a named pipe |
| `-q` | (changes output) prints nothing and exits 0 at the first match |
| `-r` | is readable |
| `-s` | is not empty |
| `-u` | has its set-user-id flag set |
| `-v` | (inverts) selects the names that fail the tests instead |
| `-w` | is writable |
| `-x` | is executable |

Flags may be grouped, as in `-fx`. A name that cannot be examined fails the
tests. If the reference file of `-n` or `-o` cannot be examined, `stest`
reports the error on standard error and ignores that flag.

The exit status is 0 when at least one name was selected, 1 when none was, and
2 for a usage error (an unknown flag, or `-n`/`-o` without a file).

List the executables in the current directory:

```
stest -fx *
```

List every non-hidden executable in the directories on your `PATH`:

```
echo "$PATH" | tr ':' '\n' | stest -flx
```

Names in the current directory changed after `reference.txt`:

```
ls | stest -n reference.txt
```

The same filter is available from Python through `stest.parse_args(argv)`,
which returns a `Criteria` and the list of operands, and `Tester(criteria,
out).run(operands, stream)`, which returns the exit status.

## The menu engine

`dynmenu.menu` provides:

- `read_items(stream)` turns lines of text into `Item` objects, dropping the
  trailing newline.
- `match_items(items, text, ignore_case)` splits the input on spaces and keeps
  the items that contain every word. Exact matches come first, then items that
  start with the first word, then the rest, each group in input order.
- `parse_args(argv)` reads menu options into an `Options`: `-b` (bottom),
  `-c` (centred), `-f` (fast), `-i` (case-insensitive matching), `-l` lines,
  `-g` columns, `-m` monitor, `-p` prompt, `-fn` font, `-nb`/`-nf`/`-sb`/`-sf`
  colours, `-w` window id, and `-v`, which sets `show_version`. An unknown
  option, or an option missing its value, raises `UsageError`.
- `Menu(items, options, width=..., bar_height=..., lrpad=..., measure=...,
  out=...)` holds the state of a running menu. `measure` gives the width of a
  string (by default its length) and is used to decide how many items fit on a
  page.

Drive a `Menu` with `Menu.keypress(key, modifiers, text)`, where `key` is a
`Key`, a single key character, or `None` for text composed by an input method,
and `modifiers` is a combination of `Modifier` values:

- Printable keys insert their text at the cursor and the matches are
  recomputed.
- Left/Right move the cursor, or the selection once the cursor is at an end;
  Up/Down move the selection; Next/Prior turn pages; Home/End go to the start
  or end of the input, then of the list.
- BackSpace and Delete remove one character; Ctrl-U erases to the start of the
  input, Ctrl-K to the end, Ctrl-W the word before the cursor. Ctrl-Left and
  Ctrl-Right, Alt-B and Alt-F move by words.
- Ctrl-A, B, C, D, E, F, G, H, I, N and P stand for Home, Left, Escape,
  Delete, End, Right, Escape, BackSpace, Tab, Down and Up; Alt-G, Alt-Shift-G,
  Alt-H, J, K and L for Home, End, Up, Next, Prior and Down.
- Tab copies the selected item into the input.
- Return prints the selected item, or with Shift the typed text, and raises
  `MenuExit(0)`. With Ctrl it prints without finishing and marks the item's
  `out` flag. Ctrl-J and Ctrl-M act as Return.
- Escape and Ctrl-[ raise `MenuExit(1)`.
- Ctrl-Y returns `"PRIMARY"`, and Ctrl-Shift-Y `"CLIPBOARD"`, to ask for that
  selection; hand its contents to `Menu.paste(data)`, which inserts them up to
  the first newline.

`Menu.visible_items()` gives the items on the current page, `Menu.selected`
the highlighted item, `Menu.text` the input, and `Menu.numbers()` the
"matched/total" counter.

## What dynmenu does not do

The menu engine draws nothing, opens no window, grabs no keyboard and loads no
fonts or colours; there is no menu command. The font, colour, monitor, window
id and placement options are parsed into `Options` but nothing acts on them.
To show a menu, write a front end that reads key presses, feeds them to a
`Menu`, draws what `visible_items()` returns and stops when `MenuExit` is
raised.

## Running the tests

```
pip install .[test]
pytest
```