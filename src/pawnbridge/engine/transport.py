"""Line-oriented transport to an external engine process."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from PyQt6.QtCore import QObject, QProcess, pyqtSignal

_LOGGER = logging.getLogger(__name__)


class LineSignal(Protocol):
    """Minimal signal interface used by :class:`EngineBridge`."""

    def connect(self, slot: Callable[..., object]) -> object: ...


class EngineTransport(Protocol):
    """What the bridge needs from a channel to the engine."""

    line_received: LineSignal
    failed: LineSignal

    def start(self) -> None: ...

    def write_line(self, line: str) -> None: ...

    def close(self) -> None: ...


class ProcessTransport(QObject):
    """Runs the engine with :class:`QProcess` and splits stdout into lines.

    All signals are delivered on the thread that owns this object (the GUI
    thread), so the bridge never sees concurrent callbacks.
    """

    line_received = pyqtSignal(str)
    failed = pyqtSignal(str)

    _QUIT_WAIT_MS = 2000

    def __init__(
        self,
        program: str,
        arguments: Sequence[str] = (),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._program = program
        self._arguments = list(arguments)
        self._process: QProcess | None = None
        self._buffer = b""

    @property
    def is_running(self) -> bool:
        return (
            self._process is not None
            and self._process.state() != QProcess.ProcessState.NotRunning
        )

    def start(self) -> None:
        """Launch the engine process (no-op when already running)."""
        if self._process is not None:
            return
        process = QProcess(self)
        process.setProgram(self._program)
        process.setArguments(self._arguments)
        process.setProcessChannelMode(QProcess.ProcessChannelMode.SeparateChannels)
        process.readyReadStandardOutput.connect(self._on_stdout)
        process.errorOccurred.connect(self._on_error)
        process.finished.connect(self._on_finished)
        self._process = process
        _LOGGER.info("Starting engine: %s %s", self._program, " ".join(self._arguments))
        # Writes issued before the process is up are buffered by QProcess.
        process.start()

    def write_line(self, line: str) -> None:
        if self._process is None:
            _LOGGER.warning("Dropping engine command, process not started: %s", line)
            return
        _LOGGER.debug(">> %s", line)
        self._process.write((line + "\n").encode("utf-8"))

    def close(self) -> None:
        """Wait briefly for a clean exit, then kill the process."""
        process = self._process
        if process is None:
            return
        self._process = None
        if process.state() == QProcess.ProcessState.NotRunning:
            return
        process.closeWriteChannel()
        if not process.waitForFinished(self._QUIT_WAIT_MS):
            _LOGGER.warning("Engine did not exit in time; killing it")
            process.kill()
            process.waitForFinished(self._QUIT_WAIT_MS)

    # ── QProcess callbacks ───────────────────────────────────────────────

    def _on_stdout(self) -> None:
        process = self._process
        if process is None:
            return
        self.feed(bytes(process.readAllStandardOutput().data()))

    def feed(self, chunk: bytes) -> None:
        """Split *chunk* into complete lines; keep the trailing remainder.

        Only whole lines are decoded, so a UTF-8 sequence split across two
        reads is reassembled first.
        """
        self._buffer += chunk
        *raw_lines, self._buffer = self._buffer.split(b"\n")
        for raw in raw_lines:
            line = raw.decode("utf-8", errors="replace").strip()
            if line:
                _LOGGER.debug("<< %s", line)
                self.line_received.emit(line)

    def _on_error(self, error: QProcess.ProcessError) -> None:
        if self._process is None:
            # Raised by close() killing the process.
            return
        if error == QProcess.ProcessError.Crashed:
            # Reported by _on_finished.
            return
        message = f"{error.name}: {self._program}"
        _LOGGER.error("Engine process error (%s)", message)
        self.failed.emit(message)

    def _on_finished(self, exit_code: int, _status: QProcess.ExitStatus) -> None:
        if self._process is not None:
            # Not initiated by close(): the engine went away on its own.
            _LOGGER.error("Engine process exited unexpectedly (code %d)", exit_code)
            self.failed.emit(f"engine exited with code {exit_code}")
