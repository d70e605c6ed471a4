# Event Logger - Driver and Tool Event Logging with DI
#
# Console + optional log file, with level gating, buffered writes and
# size-based rotation. Timestamps come from an injected TimeProvider so the
# log can be stamped from the RTC itself.

import os

# ── Log-level constants ──────────────────────────────────────────────
LOG_DEBUG = 0
LOG_INFO = 1
LOG_WARN = 2
LOG_ERR = 3

LEVEL_NAMES = {
    "DEBUG": LOG_DEBUG,
    "INFO": LOG_INFO,
    "WARN": LOG_WARN,
    "ERR": LOG_ERR,
}


class EventLogger:
    """
    Centralized event logger.

    Logs events to console and, when ``logfile`` is set, appends them to a
    file. Supports four severity levels: debug, info, warning, error.

    Level gating (``log_level``):
        DEBUG < INFO < WARN < ERR.  Messages below the configured level
        are silently discarded. error() is never gated.

    Buffering:
        Entries are kept in memory and appended to the file once a
        level-specific threshold is reached; error() flushes immediately.

    Attributes:
        time_provider: TimeProvider instance (None -> 'NO_TIME' stamps)
        logfile: Path to log file, or None for console only
        max_size: Max file size before rotation (bytes)
        buffer: In-memory buffer for log entries (flushed periodically)
        flush_count: Number of successful flush operations
    """

    def __init__(
        self,
        time_provider=None,
        logfile=None,
        max_size=50000,
        info_flush_threshold: int = 5,
        warn_flush_threshold: int = 3,
        log_level: str = "INFO",
        debug_to_file: bool = False,
        debug_flush_threshold: int = 10,
    ):
        """
        Initialize EventLogger with dependency injection.

        Does not attempt to create log file (deferred to first write).

        Args:
            time_provider: TimeProvider instance for timestamps
            logfile (str): Path to log file (default: None, console only)
            max_size (int): Max log size before rotation in bytes (default: 50000)
            info_flush_threshold (int): Flush after N info entries buffered (default: 5)
            warn_flush_threshold (int): Flush after N warning entries buffered (default: 3)
            log_level (str): Minimum level to emit - "DEBUG", "INFO", "WARN", or "ERR" (default: "INFO")
            debug_to_file (bool): Whether debug messages are buffered/written to the file (default: False)
            debug_flush_threshold (int): Flush after N debug entries buffered (default: 10)
        """
        self.time_provider = time_provider
        self.logfile = logfile
        self.max_size = max_size
        self.buffer = []
        self.flush_count = 0
        self._log_size = 0
        self._stamping = False
        self.info_flush_threshold = info_flush_threshold
        self.warn_flush_threshold = warn_flush_threshold
        self._level = LEVEL_NAMES.get(log_level, LOG_INFO)
        self._debug_to_file = debug_to_file
        self.debug_flush_threshold = debug_flush_threshold

        print(f"[EventLogger] Initialized: {self.logfile} (level={log_level}, debug_to_file={debug_to_file})")

    # ── Formatting helpers ────────────────────────────────────────────

    def _get_timestamp(self) -> str:
        """
        Get formatted timestamp from TimeProvider.

        Returns:
            str: Timestamp 'YYYY-MM-DD HH:MM:SS', 'NO_TIME' without a
            provider, or 'TIME_ERROR' if the provider fails
        """
        if self.time_provider is None:
            return "NO_TIME"
        # An RTC-backed provider logs its own failures through this logger
        if self._stamping:
            return "TIME_ERROR"
        self._stamping = True
        try:
            return self.time_provider.now_timestamp()
        except Exception as exc:
            # Raw print: logging here would recurse
            print(f"[EventLogger] _get_timestamp error: {exc}")
            return "TIME_ERROR"
        finally:
            self._stamping = False

    def _format(self, level_tag: str, module: str, message: str) -> str:
        timestamp = self._get_timestamp()
        return f"[{timestamp}] [{level_tag}] [{module}] {message}\n"

    # ── Public logging methods ────────────────────────────────────────

    def debug(self, module: str, message: str) -> None:
        """
        Log debug/diagnostic message (lowest severity).

        Printed to console; only buffered for the file when
        ``debug_to_file`` is True.
        """
        if self._level > LOG_DEBUG:
            return
        log_entry = self._format("DEBUG", module, message)
        print(log_entry.rstrip())
        if self._debug_to_file:
            self.buffer.append(log_entry)
            if len(self.buffer) >= self.debug_flush_threshold:
                self.flush()

    def info(self, module: str, message: str) -> None:
        if self._level > LOG_INFO:
            return
        log_entry = self._format("INFO", module, message)
        print(log_entry.rstrip())
        self.buffer.append(log_entry)

        if len(self.buffer) >= self.info_flush_threshold:
            self.flush()

    def warning(self, module: str, message: str) -> None:
        if self._level > LOG_WARN:
            return
        log_entry = self._format("WARN", module, message)
        print(log_entry.rstrip())
        self.buffer.append(log_entry)

        if len(self.buffer) >= self.warn_flush_threshold:
            self.flush()

    def error(self, module: str, message: str) -> None:
        """
        Log error message (high severity).

        Triggers immediate flush to ensure error is persisted.
        """
        log_entry = self._format("ERR", module, message)
        print(log_entry.rstrip())
        self.buffer.append(log_entry)
        self.flush()

    # ── Flush / rotation ──────────────────────────────────────────────

    def flush(self) -> None:
        """
        Append all buffered log entries to the log file.

        Without a logfile the buffer is simply discarded (entries were
        already printed). Write errors are reported on the console and the
        buffer is dropped either way.
        """
        if not self.buffer:
            return

        if self.logfile is None:
            self.buffer = []
            return

        try:
            with open(self.logfile, "a") as f:
                for entry in self.buffer:
                    f.write(entry)
                    self._log_size += len(entry)
            self.flush_count += 1
        except OSError as e:
            print(f"[EventLogger] WARNING: Error during flush: {e}")
        finally:
            self.buffer = []

    def check_size(self) -> None:
        """
        Check log file size and rotate if needed.

        When the log exceeds max_size the current file is renamed with a
        timestamp (e.g. rtc_2026-02-16_143022.log) and a fresh file is
        started on the next write.
        """
        if self.logfile is None or self._log_size <= self.max_size:
            return
        try:
            self.flush()

            ts = self._get_timestamp().replace(" ", "_").replace(":", "")
            root, ext = os.path.splitext(self.logfile)
            rotated_name = f"{root}_{ts}{ext or '.log'}"

            os.rename(self.logfile, rotated_name)
            self._log_size = 0
            self.info("EventLogger", f"Log rotated -> {rotated_name}")
        except OSError as e:
            self._log_size = 0
            print(f"[EventLogger] WARNING: Log rotation failed: {e}")
