"""Progress session wrapping an iterable."""

import logging
import operator
import sys
import time
from dataclasses import replace

from waiting.progress.render import render_line
from waiting.progress.styles import SESSION_OPTIONS, SessionConfig
from waiting.shared.terminal import DEFAULT_COLUMNS, terminal_width

logger = logging.getLogger(__name__)


class Progress:
    """Iterator that redraws a progress line each time an item is pulled.

    Items pass through unchanged. The line is drawn once on construction,
    once per item, and once more when the wrapped iterator is exhausted.
    The session ends, clearing the line exactly once, when the source is
    exhausted or raises, when ``close()`` or ``__exit__`` runs, or when the
    session is garbage collected. A loop that stops early should use the
    session as a context manager, or let the session go out of scope.

    Usage:
        for path in Progress(paths).title("Copying").text_style("fraction"):
            copy(path)

        with Progress(read_records(), total=count) as records:
            for record in records:
                handle(record)

    Args:
        iterable: Anything iterable. Its remaining length is read with
            operator.length_hint; iterables without a hint get a sliding bar.
        total: Explicit total, overriding the length hint.
        config: Initial SessionConfig, copied into the session.
        file: Output stream, defaults to sys.stdout at write time.
        clock: Monotonic clock returning seconds.
        columns: Callable returning the terminal width or None.
    """

    def __init__(self, iterable, total=None, config=None, *, file=None,
                 clock=time.monotonic, columns=terminal_width):
        self._iterator = iter(iterable)
        self._total = total
        self.config = replace(config) if config is not None else SessionConfig()
        self.progress_count = 0
        self.start_time = None
        self._file = file
        self._clock = clock
        self._columns = columns
        self._closed = False
        self._render()

    # -- configuration ---------------------------------------------------

    def title(self, title):
        """Set the label drawn before the numbers."""
        self.config.update(title=title)
        return self

    def text_style(self, style):
        """Set the numeric suffix style (enum member or its name)."""
        self.config.update(text_style=style)
        return self

    def bar_style(self, style):
        self.config.update(bar_style=style)
        return self

    def max_width(self, max_width):
        """Cap the bar body at ``max_width`` columns."""
        self.config.update(max_width=max_width)
        return self

    def with_elapsed(self):
        self.config.show_elapsed = True
        return self

    def no_clear_on_end(self):
        """Leave the final line on screen instead of blanking it."""
        self.config.clear_on_end = False
        return self

    # -- state -----------------------------------------------------------

    @property
    def total(self):
        """Known total for the current frame, or None."""
        if self._total is not None:
            return self._total
        remaining = operator.length_hint(self._iterator, -1)
        if remaining < 0:
            return None
        return self.progress_count + remaining

    def elapsed(self):
        """Seconds since the first pull, 0 before it."""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def render_line(self):
        """Current progress line, without the leading carriage return."""
        columns = self._columns() or DEFAULT_COLUMNS
        return render_line(self.config, self.progress_count, self.total, self.elapsed(), columns)

    # -- lifecycle -------------------------------------------------------

    def __iter__(self):
        return self

    def __next__(self):
        if self._closed:
            raise StopIteration
        if self.start_time is None:
            self.start_time = self._clock()
        try:
            item = next(self._iterator)
        except StopIteration:
            self._render()
            self.close()
            raise
        except BaseException:
            # The source failed; the session is over either way
            self.close()
            raise
        self.progress_count += 1
        self._render()
        return item

    def close(self):
        """End the session, clearing the line if configured. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Progress '%s' finished after %d items", self.config.title, self.progress_count)
        if self.config.clear_on_end:
            columns = self._columns() or DEFAULT_COLUMNS
            self._write("\r" + " " * columns + "\r")
        else:
            self._write("\n")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        if not getattr(self, "_closed", True):
            self.close()

    def _render(self):
        self._write("\r" + self.render_line())

    def _write(self, text):
        stream = self._file if self._file is not None else sys.stdout
        if stream is None:
            return
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError) as e:
            # A closed terminal must not stop the wrapped iteration
            logger.debug("Progress output failed: %s", e)


def progress(iterable, total=None, **options):
    """Wrap ``iterable`` in a Progress with options applied before the first frame.

    Accepts the SessionConfig options (title, text_style, bar_style,
    max_width, with_elapsed, clear_on_end) alongside Progress's own
    config, file, clock and columns arguments.
    """
    settings = {k: options.pop(k) for k in SESSION_OPTIONS if k in options}
    config = options.pop("config", None)
    config = replace(config) if config is not None else SessionConfig()
    return Progress(iterable, total, config.update(**settings), **options)
