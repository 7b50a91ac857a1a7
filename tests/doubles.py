"""Stream doubles for driving the dispatch loop into failure paths."""

import io


class ReaderAlwaysErr:
    """Input source whose every readline() raises."""

    def __init__(self, error=None):
        self.error = error or OSError("failed on read")

    def readline(self):
        raise self.error


class WriterErr(io.StringIO):
    """Output sink that fails on the Nth write (1-based) and every later one."""

    def __init__(self, fail_on=1, error=None):
        super().__init__()
        self.fail_on = fail_on
        self.writes = 0
        self.error = error or OSError("failed on write")

    def write(self, s):
        self.writes += 1
        if self.writes >= self.fail_on:
            raise self.error
        return super().write(s)


class FlushErr(io.StringIO):
    """Output sink whose flush() always raises."""

    def __init__(self, error=None):
        super().__init__()
        self.error = error or OSError("failed on flush")

    def flush(self):
        raise self.error
