# dwmkit

Building blocks for a tiling window manager setup, in plain Python with no third-party
dependencies.

## What is in it

- `dwmkit.layout`: the `Client` and `Monitor` model, the master/stack `tile` layout and
  `monocle`. It also covers gaps (`get_gaps`, `set_gaps`), per-client size factors
  (`get_facts`, and `adjust_cfact`, which keeps factors within 0.25–4.0) and
  `attach_at_index`, which inserts a client at the position its `idx` gives.
- `dwmkit.tilers`: tile arrangements that place a range of tiled clients inside an area.
  These are left to right, top to bottom, monocle, three gapless grids, grid, horizontal
  grid, dwindle, spiral and tatami. They are named by `TileArrangement` and run through
  `arrange_tiles`.
- `dwmkit.flextile`: split layouts (`SplitLayout`) that combine the arrangements for the
  master, stack and secondary stack areas. It provides `flextile`, `split`,
  `mirror_layout`, `rotate_layout_axis` (which raises `ValueError` for an unknown axis)
  and `inc_nstack`. It also builds the layout symbol (`set_flex_symbols`,
  `monocle_symbols`, `deck_symbols`).
- `dwmkit.tags`: tag bitmask helpers.
  - `shift_tags` rotates the view circularly. It can skip to occupied tags, and raises
    `ValueError` if none can ever be reached.
  - `swap_tags` and `reorganize_tags` move clients between tags.
  - `tag_icon` picks a tag's icon.
  - `stack_position` resolves absolute, relative (`inc`), from-the-end and
    previous-selection (`PREVSEL`) stack arguments.
- `dwmkit.state`: `MonitorFields` and `ClientFields` pack workspace and client settings
  into 32-bit values and unpack them again. Helpers do the same for floating position and
  size; `unpack_float_size` raises `ValueError` on a zero side.
- `dwmkit.status`: status text with inline `^...^` drawing codes.
  - `parse_status2d` turns it into `TextRun` and `Command` items.
  - `status2d_width` measures it with a text-width function you supply.
  - `click_status_signal` finds the block signal under a click position.
  - `strip_control_chars` removes characters below the space character.
- `dwmkit.colors`: `parse_resources` reads X resource text of the form `name: value`.
  `load_colors` then replaces default colours with the resource values that are valid
  `#rrggbb` strings (`is_valid_color`). Lookup also tries wildcard forms such as
  `*name`. `RESOURCE_NAMES` lists the colour resources used.
- `dwmkit.blocks`: a status bar made from shell command blocks (`Block`, `StatusBar`).
  - Each block runs as `echo "$(command)"` under `/bin/sh`.
  - A block's output is cut to its first line, at most `CMDLENGTH` characters, by
    `trim_output`. Trailing spaces are removed.
  - The outputs are joined by `compose_status`.
  - Blocks rerun on their intervals, on `SIGUSR1` (all blocks) and on `SIGRTMIN` plus
    the block's signal number (that block).
  - In clickable mode, a block's output is prefixed with its signal number as a control
    character.
- `dwmkit.ipc`: the window manager's socket protocol. It covers framing
  (`encode_message`, `decode_header`, `MessageType`), JSON request builders
  (`build_run_command`, `build_get_client`, `build_subscribe`) and a connection class,
  `IpcClient`, which can be used as a context manager. Protocol errors raise `IpcError`.

## Installation

```
pip install .
```

## Command-line tools

### dwmkit-blocks

Runs the status blocks until `SIGINT` or `SIGTERM`. It writes the status whenever it
changes.

```
dwmkit-blocks -d
```

- With `-d`, the status is printed to standard output.
- Without `-d`, the root window name is set by running `xsetroot -name`.
- The tool exits with an error if `DISPLAY` is not set. Without `-d`, it also exits with
  an error if `xsetroot` is not on the path.
- The built-in block list runs scripts from a fixed scripts directory (`SCRIPT_DIR`). To
  use other commands, build a `StatusBar` with your own `Block` list.

### dwmkit-msg

Talks to the window manager over `/tmp/dwm.sock`:

```
dwmkit-msg get_monitors
dwmkit-msg get_tags
dwmkit-msg get_layouts
dwmkit-msg get_dwm_client 12345
dwmkit-msg run_command view 2
dwmkit-msg --ignore-reply subscribe tag_change_event
dwmkit-msg help
```

- Arguments to `run_command` are sent as integers or floats when they look like numbers,
  and as strings otherwise.
- `subscribe` keeps printing events until the connection ends.

## Library use

```python
from dwmkit.layout import Client, Monitor, tile

monitor = Monitor(wx=0, wy=0, ww=1920, wh=1080)
monitor.clients = [Client(), Client(), Client()]
tile(monitor)
for client in monitor.clients:
    print(client.x, client.y, client.w, client.h)
```

```python
from dwmkit.status import parse_status2d

for item in parse_status2d("^c#ff0000^CPU 12%^d^ | 14:02"):
    print(item)
```

```python
from dwmkit.ipc import MessageType, encode_message, build_get_client

frame = encode_message(MessageType.GET_DWM_CLIENT, build_get_client(12345))
```

## What it does not do

dwmkit is not a window manager and does not connect to an X server.

- The layouts move and resize in-memory `Client` objects. Nothing is drawn and no window
  is touched.
- `dwmkit.state` only encodes and decodes values. It does not read or write window
  properties.
- `dwmkit.colors` works on resource text you pass in. It does not query the resource
  database itself.
- `dwmkit.status` parses and measures status text but does not render it.
- `dwmkit-blocks` cannot pass the clicked mouse button to a block started by a signal,
  so `BLOCK_BUTTON` is not set in that case.
- `dwmkit-msg` needs a window manager already listening on the socket.

## Running the tests

```
pip install .[test]
pytest
```