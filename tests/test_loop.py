"""
Event Loop Tests

1. Background commands - results and exceptions posted back to the queue
2. Resize signals - posted safely while the main thread waits on the queue
3. run() - quitting, and re-raising failures
"""

import io
import os
import queue
import signal
import sys
import threading
import time
from contextlib import contextmanager

import pytest
from rich.console import Console

from ghofig.config_file import ConfigFile
from ghofig.lookup_db import LookupStore
from ghofig.reference_parser import write_database
from ghofig.tui import App, EventLoop
from ghofig.tui import loop as loop_module
from ghofig.tui.events import ConfigSaved, Failure, Key, Resize


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def app(tmp_path):
    db_path = tmp_path / "configs.db"
    write_database(db_path, [("font-size", "Font size in points.")])

    store = LookupStore(db_path)
    yield App(store, ConfigFile(tmp_path / "config"))
    store.close()


@pytest.fixture
def event_loop(app):
    console = Console(file=io.StringIO(), width=80, height=24)
    event_loop = EventLoop(app, console=console)
    yield event_loop
    event_loop.executor.shutdown(wait=True)


class FakeStdin:
    def fileno(self):
        return 0


class IdleKeyReader:
    """Reader for a terminal nobody types into"""

    def __init__(self, fd):
        self.fd = fd

    def wait(self, timeout):
        time.sleep(timeout)
        return False

    def read_key(self):
        return None


class FakeLive:
    def __init__(self, *args, **kwargs):
        self.updates = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def update(self, renderable, refresh=False):
        self.updates += 1


@contextmanager
def no_raw_mode(fd):
    yield


@pytest.fixture
def headless(monkeypatch):
    """Let run() work without a real terminal"""
    monkeypatch.setattr(sys, "stdin", FakeStdin())
    monkeypatch.setattr(loop_module, "raw_mode", no_raw_mode)
    monkeypatch.setattr(loop_module, "KeyReader", IdleKeyReader)
    monkeypatch.setattr(loop_module, "Live", FakeLive)


# =============================================================================
# BACKGROUND COMMANDS
# =============================================================================

class TestSubmit:

    def test_result_posted(self, event_loop):
        event_loop.submit(lambda: ConfigSaved(7))

        assert event_loop.events.get(timeout=5) == ConfigSaved(7)

    def test_exception_becomes_failure(self, event_loop):
        def broken():
            raise ValueError("worker exploded")

        event_loop.submit(broken)
        event = event_loop.events.get(timeout=5)

        assert isinstance(event, Failure)
        assert isinstance(event.error, ValueError)

    def test_none_is_ignored(self, event_loop):
        event_loop.submit(None)
        event_loop.executor.shutdown(wait=True)

        assert event_loop.events.empty()

    def test_commands_run_in_order(self, event_loop):
        for token in range(20):
            event_loop.submit(lambda token=token: ConfigSaved(token))

        tokens = [event_loop.events.get(timeout=5).token for _ in range(20)]
        assert tokens == list(range(20))


# =============================================================================
# RESIZE SIGNALS
# =============================================================================

class TestResizeSignal:

    def test_handler_posts_console_size(self, event_loop):
        event_loop._on_winch(signal.SIGWINCH, None)
        assert event_loop.events.get(timeout=1) == Resize(80, 24)

    def test_signals_during_get_do_not_stall(self, event_loop):
        """Resize posts interleave with a busy consumer on the main thread"""
        key_count = 5000
        stop = threading.Event()

        def post_keys():
            for _ in range(key_count):
                event_loop.post(Key("a"))

        def send_winch():
            while not stop.is_set():
                os.kill(os.getpid(), signal.SIGWINCH)
                time.sleep(0.0005)

        previous = signal.signal(signal.SIGWINCH, event_loop._on_winch)
        producers = [threading.Thread(target=post_keys), threading.Thread(target=send_winch)]

        keys = resizes = 0
        try:
            for thread in producers:
                thread.start()

            while keys < key_count or resizes == 0:
                event = event_loop.events.get(timeout=5)
                if isinstance(event, Key):
                    keys += 1
                else:
                    resizes += 1
        finally:
            stop.set()
            for thread in producers:
                thread.join()
            signal.signal(signal.SIGWINCH, previous)

        assert keys == key_count
        assert resizes > 0


# =============================================================================
# RUN
# =============================================================================

class TestRun:

    def test_returns_on_quit(self, event_loop, app, headless):
        event_loop.post(Key("q"))
        event_loop.run()

        assert app.should_quit

    def test_failure_is_raised(self, event_loop, app, headless):
        event_loop.post(Failure(RuntimeError("terminal closed")))

        with pytest.raises(RuntimeError, match="terminal closed"):
            event_loop.run()
        assert not app.should_quit

    def test_restores_signal_handler(self, event_loop, headless):
        previous = signal.getsignal(signal.SIGWINCH)
        event_loop.post(Key("q"))
        event_loop.run()

        assert signal.getsignal(signal.SIGWINCH) == previous

    def test_keys_drive_the_app(self, event_loop, app, headless):
        event_loop.post(Key("enter"))
        event_loop.post(Key("esc"))
        event_loop.post(Key("q"))
        event_loop.run()

        assert app.should_quit
        assert app.search.query == ""
