# television

Building blocks for a general purpose fuzzy finder: channel prototypes read
from TOML files, the "cable" that holds them by name, channels that run a
source command and collect its entries, templates that format entries, and
the actions that key bindings refer to.

No third-party libraries are needed.

## Channel prototypes

A channel is described by a TOML document with a `[metadata]` table and a
`[source]` table, and optionally `[preview]`, `[ui]`, `[keybindings]` and
`[history]` tables and a `watch` interval:

```toml
[metadata]
name = "files"
description = "A channel to select files and directories"
requirements = ["fd", "bat"]

[source]
command = ["fd -t f", "fd -t f --hidden"]
display = "{split:/:-1}"
output = "{}"

[preview]
command = "bat -n --color=always {}"
env = { "BAT_THEME" = "ansi" }

[keybindings]
shortcut = "f1"
quit = ["esc", "ctrl-c"]
```

```python
from television.prototypes import ChannelPrototype

prototype = ChannelPrototype.from_toml(text)
prototype.source.command.command_count()   # 2
prototype.source.command.get_nth(2).raw    # wraps around to "fd -t f"
```

`ChannelPrototype.from_dict` takes data that is already parsed;
`ChannelPrototype.from_command(name, command)` and
`ChannelPrototype.stdin(preview, entry_delimiter)` build prototypes in code.
Invalid documents raise `PrototypeError`.

`parse_source_entry_delimiter` accepts a single character or one of the
escapes `\n`, `\t`, `\r` and `\0`. `BinaryRequirement.init()` looks a
required program up on the `PATH`; `is_met()` then tells whether it was found.

## The cable

`Cable` is a `dict` of channel names to prototypes. `load_cable(cable_dir)`
loads every `*.toml` file found below a directory; it returns `None` and
prints a hint when there are none. Files that fail to parse are reported on
standard error and skipped.

```python
from pathlib import Path
from television.cable import load_cable

cable = load_cable(Path.home() / ".config" / "television" / "cable")
if cable is not None:
    files = cable.get_channel("files")      # a copy; UnknownChannelError if missing
    shortcuts = cable.channel_shortcuts()   # {Action(SWITCH_TO_CHANNEL, name): binding}
```

`Cable.from_prototypes` builds one from prototypes already in memory.

## Running a channel

```python
from television.channel import Channel
from television.prototypes import ChannelPrototype

channel = Channel(ChannelPrototype.from_command("custom", "ls"))
channel.load()
channel.total_count()
channel.toggle_selection(channel.entries[0])
```

`read_entries(source, index)` runs the source's n-th command in a shell and
returns its entries as a list, split on the source's entry delimiter (a
newline unless set otherwise). Blank entries are dropped. When the command
prints nothing usable on standard output, the non-blank lines of its
standard error are returned instead. `Channel.cycle_sources()` moves to the
next source command and reloads, when a channel has several.

## Remote control entries

`television.remote_control.cable_entries(cable, sort_alphabetically)` lists
one `CableEntry` per channel, with its shortcut, description and checked
binary requirements.

## Templates

```python
from television.templates import Template

Template.parse("Hello, {}").format("World")         # "Hello, World"
Template.parse("{split:/:-1}").format("/a/b/c")     # "c"
```

Sections in braces hold a pipeline of operations separated by `|`
(`split`, `join`, `upper`, `lower`, `trim`, `append`, `prepend`,
`substring`, `replace`, `reverse`, `sort`, `unique`, `filter`, `filter_not`,
`strip_ansi`). Text that does not parse is kept as a raw template in which
every `{}` is replaced by the input.

## Entries and actions

```python
from television.entry import Entry, into_ranges

into_ranges([1, 2, 7, 8])                      # [(1, 3), (7, 9)]
entry = Entry("src/main.rs").with_line_number(12)
```

Entries compare and hash by their raw text and line number.

`television.action` defines `ActionKind` and `Action`; only configurable
kinds may appear in key bindings (`ActionKind.from_config_name`).

## What this package does not do

It has no interactive terminal interface, no command to run, no parsing of
command-line arguments and no fuzzy matching of entries against a query.
It does not read the application's main configuration file, keep a search
history, or download channel files.