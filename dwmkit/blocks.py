"""Status bar built from the output of shell command blocks refreshed on timers and signals."""

from __future__ import annotations

import math
import os
import selectors
import shutil
import signal
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

CMDLENGTH = 60
DELIMITER = " "
CLICKABLE_BLOCKS = True
LEADING_DELIMITER = False
SCRIPT_DIR = "/home/y/.dwm/dwmblocks_scripts/riced_scripts/"


@dataclass(frozen=True)
class Block:
    """A shell command shown in the bar, rerun every ``interval`` seconds or on ``signal``."""

    command: str
    interval: int = 0
    signal: int = 0

    def shell_command(self) -> str:
        """The command line handed to the shell."""
        return f'echo "$({self.command})"'


def _block(name: str, interval: int, sig: int) -> Block:
    return Block(SCRIPT_DIR + name, interval, sig)


DEFAULT_BLOCKS = (
    _block("left_bracket", 0, 0), _block("d_memory", 5, 20),
    _block("d_mem_percent", 5, 21), _block("right_bracket", 0, 0),
    _block("left_bracket", 0, 0), _block("d_vol_icon", 20, 10),
    _block("d_progressbar", 20, 11), _block("d_vol_percent", 20, 12),
    _block("right_bracket", 0, 0),
    _block("left_bracket", 0, 0), _block("d_bluetooth", 1, 13),
    _block("d_network", 5, 4), _block("right_bracket", 0, 0),
    _block("left_bracket", 0, 0), _block("d_date", 1, 14),
    _block("d_time", 1, 15), _block("right_bracket", 0, 0),
)


def _buffer_size(cmdlength: int) -> int:
    # The longest UTF-8 character is four bytes.
    return cmdlength * 4 + 1


def trim_output(data: bytes, cmdlength: int = CMDLENGTH) -> str:
    """Keep the first line of ``data``, at most ``cmdlength`` characters, without trailing spaces."""
    data = data[: _buffer_size(cmdlength)]
    count = j = 0
    while j < len(data) and data[j] != 0x0A and count < cmdlength:
        count += 1
        lead = data[j]
        skip = 1
        while lead & 0xC0 == 0xC0:
            lead = (lead << 1) & 0xFF
            skip += 1
        j += skip
    return data[:j].rstrip(b" ").decode("utf-8", errors="replace")


def compose_status(outputs: Sequence[str], delimiter: str = DELIMITER,
                   leading: bool = LEADING_DELIMITER) -> str:
    """Join non-empty block outputs with the delimiter."""
    status = ""
    for output in outputs:
        if output and (leading or status):
            status += delimiter
        status += output
    return status


def _print_status(text: str) -> None:
    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def _set_root_name(text: str) -> None:
    subprocess.run(["xsetroot", "-name", text], check=False)


class StatusBar:
    """Block outputs, the shared timer and the last status written."""

    def __init__(
        self,
        blocks: Sequence[Block] = DEFAULT_BLOCKS,
        writer: Optional[Callable[[str], None]] = None,
        delimiter: str = DELIMITER,
        cmdlength: int = CMDLENGTH,
        clickable: bool = CLICKABLE_BLOCKS,
        leading: bool = LEADING_DELIMITER,
    ) -> None:
        self.blocks = tuple(blocks)
        self.writer = writer or _print_status
        self.delimiter = delimiter
        self.cmdlength = cmdlength
        self.clickable = clickable
        self.leading = leading
        self.outputs = [""] * len(self.blocks)
        self.last_status = ""
        self.timer = 0
        intervals = [b.interval for b in self.blocks if b.interval]
        self.timer_tick = math.gcd(*intervals) if intervals else 0
        self.max_interval = max(intervals + [1])
        self._busy: set[int] = set()
        self._pending: list[int] = []

    def due_blocks(self, time: int) -> list[int]:
        """Indices of the blocks to run at the given timer value; 0 runs every block."""
        return [
            i for i, b in enumerate(self.blocks)
            if time == 0 or (b.interval and time % b.interval == 0)
        ]

    def advance_timer(self) -> list[int]:
        """Return the blocks due now and move the timer on by one tick."""
        due = self.due_blocks(self.timer)
        self.timer = (self.timer + self.timer_tick - 1) % self.max_interval + 1
        return due

    def update(self, index: int, data: bytes) -> str:
        """Store a block's new output and release it for the next run."""
        output = trim_output(data, self.cmdlength)
        read = len(data[: _buffer_size(self.cmdlength)])
        signal_id = self.blocks[index].signal
        if self.clickable and read > 1 and signal_id > 0:
            output = chr(signal_id) + output
        self.outputs[index] = output
        self._busy.discard(index)
        return output

    def status(self) -> str:
        """The full status text."""
        return compose_status(self.outputs, self.delimiter, self.leading)

    def refresh(self) -> bool:
        """Write the status if it changed; return whether it was written."""
        status = self.status()
        if status == self.last_status:
            return False
        self.last_status = status
        self.writer(status)
        return True

    def _queue_signal(self, signum, frame) -> None:
        self._pending.append(signum)

    def _exec_block(self, sel: selectors.BaseSelector, index: int,
                    button: Optional[str] = None) -> None:
        if index in self._busy:
            return
        env = dict(os.environ)
        if button is not None:
            env["BLOCK_BUTTON"] = button
        try:
            proc = subprocess.Popen(
                ["/bin/sh", "-c", self.blocks[index].shell_command()],
                stdout=subprocess.PIPE, stdin=subprocess.DEVNULL, env=env,
            )
        except OSError:
            return
        self._busy.add(index)
        os.set_blocking(proc.stdout.fileno(), False)
        sel.register(proc.stdout.fileno(), selectors.EVENT_READ, (index, proc, bytearray()))

    def _read_block(self, sel: selectors.BaseSelector, key: selectors.SelectorKey) -> None:
        index, proc, buf = key.data
        try:
            chunk = os.read(key.fd, 4096)
        except BlockingIOError:
            return
        if chunk:
            buf.extend(chunk)
            return
        sel.unregister(key.fd)
        proc.stdout.close()
        proc.wait()
        self.update(index, bytes(buf))

    def _handle_signal(self, sel: selectors.BaseSelector, signum: int) -> bool:
        if signum in (signal.SIGINT, signal.SIGTERM):
            return False
        if signum == signal.SIGUSR1:
            for i in self.due_blocks(0):
                self._exec_block(sel, i)
            return True
        if hasattr(signal, "SIGRTMIN"):
            block_signal = signum - signal.SIGRTMIN
            for i, block in enumerate(self.blocks):
                if block.signal == block_signal:
                    # The sender's button value is not exposed to Python handlers.
                    self._exec_block(sel, i)
                    break
        return True

    @staticmethod
    def _drain(fd: int) -> None:
        while True:
            try:
                if not os.read(fd, 512):
                    return
            except BlockingIOError:
                return

    def run(self) -> None:
        """Run blocks on their timers and signals until SIGINT or SIGTERM."""
        handled = {signal.SIGINT, signal.SIGTERM, signal.SIGUSR1}
        if hasattr(signal, "SIGRTMIN"):
            handled |= {signal.SIGRTMIN + b.signal for b in self.blocks if b.signal > 0}

        rfd, wfd = os.pipe()
        os.set_blocking(rfd, False)
        os.set_blocking(wfd, False)
        old_wakeup = signal.set_wakeup_fd(wfd)
        self._pending.clear()
        previous = {s: signal.signal(s, self._queue_signal) for s in handled}
        sel = selectors.DefaultSelector()
        sel.register(rfd, selectors.EVENT_READ, None)

        running = True
        next_alarm: Optional[float] = time.monotonic()
        try:
            while running:
                timeout = None if next_alarm is None else max(0.0, next_alarm - time.monotonic())
                events = sel.select(timeout)
                if next_alarm is not None and time.monotonic() >= next_alarm:
                    next_alarm = next_alarm + self.timer_tick if self.timer_tick else None
                    for i in self.advance_timer():
                        self._exec_block(sel, i)
                for key, _ in events:
                    if key.data is None:
                        self._drain(rfd)
                    else:
                        self._read_block(sel, key)
                while self._pending:
                    if not self._handle_signal(sel, self._pending.pop(0)):
                        running = False
                self.refresh()
        finally:
            signal.set_wakeup_fd(old_wakeup)
            for s, handler in previous.items():
                signal.signal(s, handler)
            for key in list(sel.get_map().values()):
                if key.data is not None:
                    key.data[1].stdout.close()
            sel.close()
            os.close(rfd)
            os.close(wfd)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the status bar; ``-d`` writes to standard output instead of the root window."""
    args = list(sys.argv[1:] if argv is None else argv)
    debug = "-d" in args
    if not os.environ.get("DISPLAY") or (not debug and shutil.which("xsetroot") is None):
        sys.stderr.write("dwmblocks: Failed to open display\n")
        return 1
    bar = StatusBar(writer=_print_status if debug else _set_root_name)
    bar.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())