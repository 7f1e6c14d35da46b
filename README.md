# tuihist

`tuihist` is a library of building blocks for terminal user interfaces
around shell history. It requires Python 3.10 or later and depends on
`regex`, `wcwidth` and `scipy`.

## Modules

- `tuihist.style`: `Color` (named colours plus `Color.rgb(r, g, b)` and
  `Color.indexed(i)`), `Modifier` flags (`BOLD`, `ITALIC`, ...) and an
  immutable, incremental `Style`. `Style.with_fg`, `with_bg`,
  `with_modifier` and `without_modifier` return new styles;
  `Style.patch(other)` gives the style equal to applying one after the
  other; `Style.reset()` resets everything.
- `tuihist.layout`: `Rect` (with `area`, `inner`, `union`,
  `intersection`, `intersects`, and `Rect.clipped` to keep the area within
  65535 cells), `Margin`, `Constraint` (`percentage`, `ratio`, `length`,
  `minimum`, `maximum`) and `Layout`, which splits a rect along a
  `Direction` by solving the constraints as a linear program. Results of
  `Layout.split` are cached.
- `tuihist.buffer`: a `Buffer` of `Cell`s. `set_string` / `set_stringn`
  place text grapheme by grapheme, taking display width into account and
  blanking cells hidden by wide characters; `merge` combines two buffers;
  `diff` lists the `(x, y, cell)` updates that turn one frame into another.
  `str_width` measures terminal columns. Access outside the buffer raises
  `IndexError`.
- `tuihist.backend`: `CrosstermBackend` writes a buffer diff as ANSI escape
  sequences to any text stream, and offers cursor hide/show/move,
  `clear_region` with a `ClearType`, `append_lines`, `size` and
  `get_cursor` (which reads the terminal's position report from a given
  reader, or standard input).
- `tuihist.cursor`: a `Cursor` over an input line, counted in characters,
  with insertion, deletion and word jumps in Emacs or Sublime style
  (`WordJumpMode`, `WordJumper`).
- `tuihist.history`: the `History` record (timestamp, command, cwd, exit,
  duration in nanoseconds, session, hostname, id), `format_history` and
  `print_list` with the keys `{command}`, `{directory}`, `{exit}`,
  `{duration}`, `{time}`, `{relativetime}`, `{host}` and `{user}`.
  Literal braces are written `{{` and `}}`; a bad template or unknown key
  raises `FormatError`. `ListMode.from_flags(human, cmd_only)` chooses the
  default layout. `print_list` writes the last entry first and stops quietly
  on a broken pipe.
- `tuihist.history_list`: `HistoryList` renders entries bottom-up into a
  buffer, with a selection marker, duration, age and command;
  `ListState` holds the scroll offset and selection.
- `tuihist.fuzzy`: `fuzzy_indices(choice, pattern)` scores a subsequence
  match (case-insensitive unless the pattern has upper case);
  `fuzzy_search` ranks `(History, count)` pairs by match, frequency, age and
  directory distance (`path_dist`), keeps one entry per command and at most
  200, filtered by `FilterMode` and a `Context`.
- `tuihist.stats`: `interesting_command` strips `sudo` and keeps the
  subcommand of `cargo`, `go`, `git`, `npm`, `yarn` and `pnpm`;
  `compute_stats` prints a coloured bar chart of the top commands and
  totals, and raises `ValueError` when there are none.
- `tuihist.duration`: `format_duration` shows only the most significant
  unit of a `timedelta`, e.g. `3m` or `120ms`.

## Examples

```python
from tuihist.layout import Constraint, Direction, Layout, Rect

chunks = (
    Layout()
    .with_direction(Direction.VERTICAL)
    .with_constraints([Constraint.length(5), Constraint.minimum(0)])
    .split(Rect(2, 2, 10, 10))
)
# chunks[0] covers rows 2..7, chunks[1] rows 7..12
```

```python
from tuihist.buffer import Buffer
from tuihist.layout import Rect
from tuihist.style import Color, Style

before = Buffer.empty(Rect(0, 0, 10, 1))
after = Buffer.empty(Rect(0, 0, 10, 1))
after.set_string(0, 0, "hello", Style().with_fg(Color.RED))

for x, y, cell in before.diff(after):
    print(x, y, cell.symbol)
```

```python
from tuihist.stats import interesting_command

interesting_command("sudo   cargo build foo bar")  # "cargo build"
interesting_command("sudo")                        # "sudo"
```

## What it does not do

`tuihist` is a library only. It has no command-line program, does not
record or store history (there is no database; you supply `History`
entries and their counts), ships no shell integration, imports no history
files and does not sync with any server. It has no ready-made interactive
search screen: it does not switch the terminal into raw mode or read key
events, though its pieces can be used to build one.

## Running the tests

Install the `test` extra and run `pytest`.