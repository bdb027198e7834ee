"""
Event loop - one consumer, many producers

The main thread pulls one event at a time off a queue, applies it to the
App and redraws. Keys arrive from a reader thread, resizes from SIGWINCH,
and command results from a single background worker, so background work
runs serially and never blocks input.
"""

import sys
import queue
import signal
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from rich.console import Console
from rich.live import Live

from .app import App
from .events import Command, Failure, Key, Resize
from .terminal import KeyReader, raw_mode


logger = logging.getLogger(__name__)

# How often the reader thread checks whether it should stop
READ_POLL_INTERVAL = 0.1


class EventLoop:
    """Runs an App full-screen until it asks to quit"""

    def __init__(self, app: App, console: Optional[Console] = None):
        self.app = app
        self.console = console or Console()
        # SimpleQueue.put is reentrant, so the SIGWINCH handler may post
        # while the main thread is inside get()
        self.events: queue.SimpleQueue = queue.SimpleQueue()
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ghofig-worker")
        self._stop = threading.Event()

    def post(self, event):
        self.events.put(event)

    def submit(self, command: Optional[Command]):
        """Run a command off the main loop; its message is posted back"""
        if command is None:
            return
        future = self.executor.submit(command)
        future.add_done_callback(self._on_done)

    def _on_done(self, future: Future):
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Background command failed: {error!r}")
            self.post(Failure(error))
        else:
            self.post(future.result())

    def _read_keys(self, reader: KeyReader):
        try:
            while not self._stop.is_set():
                if not reader.wait(READ_POLL_INTERVAL):
                    continue
                name = reader.read_key()
                if name is not None:
                    self.post(Key(name))
        except (OSError, EOFError) as e:
            self.post(Failure(e))

    def _on_winch(self, signum, frame):
        width, height = self.console.size
        self.post(Resize(width, height))

    def run(self):
        """Block until the user quits; raises if the loop cannot continue"""
        fd = sys.stdin.fileno()
        reader = KeyReader(fd)
        reader_thread = threading.Thread(target=self._read_keys, args=(reader,),
                                         name="ghofig-keys", daemon=True)
        previous_winch = signal.signal(signal.SIGWINCH, self._on_winch)

        try:
            with raw_mode(fd), Live(console=self.console, screen=True,
                                    auto_refresh=False, transient=True) as live:
                reader_thread.start()

                width, height = self.console.size
                self.app.update(Resize(width, height))
                live.update(self.app.render(), refresh=True)

                while not self.app.should_quit:
                    event = self.events.get()
                    if isinstance(event, Failure):
                        raise event.error

                    self.submit(self.app.update(event))
                    live.update(self.app.render(), refresh=True)
        finally:
            self._stop.set()
            signal.signal(signal.SIGWINCH, previous_winch)
            self.executor.shutdown(wait=False, cancel_futures=True)
            if reader_thread.is_alive():
                reader_thread.join(timeout=READ_POLL_INTERVAL * 2)
