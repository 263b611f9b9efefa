"""User interface utilities for caskup."""

import sys
import time
import threading
import re
import atexit

ANSI_PATTERN = re.compile(r'\x1b\[[0-9;]*m')


# Terminal colors for better output
class Colors:
    BOLD = "\033[1m"
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    DIM = "\033[2m"


class StatusIcons:
    """Status icons for consistent visual feedback across the application"""
    SUCCESS = "✓"
    FAILED = "✗"
    WARNING = "⚠"
    INFO = "ℹ"


def strip_ansi(text):
    """Remove ANSI color codes from text"""
    return ANSI_PATTERN.sub('', str(text))


def print_header(title):
    """Print a section header"""
    print(SectionDivider.format_header(title, color=Colors.BLUE))
    print()


def print_success(message):
    print(f"{Colors.GREEN}{StatusIcons.SUCCESS} {message}{Colors.RESET}")


def print_error(message):
    print(f"{Colors.RED}{StatusIcons.FAILED} {message}{Colors.RESET}")


def print_warning(message):
    print(f"{Colors.YELLOW}{StatusIcons.WARNING} {message}{Colors.RESET}")


def print_info(message):
    print(f"{Colors.CYAN}{StatusIcons.INFO} {message}{Colors.RESET}")


def print_separator(width=40):
    print("-" * width)


class ProgressIndicator:
    """Spinner shown while a blocking operation runs.

    The spinner only animates when stdout is a terminal; otherwise start and
    stop do nothing.
    """

    # Class-level registry to track active progress indicators for cleanup
    _active_indicators = set()
    _registry_lock = threading.Lock()
    _cleanup_registered = False

    def __init__(self, message, stream=None):
        self.message = message
        self.stream = stream or sys.stdout
        self.spinner_chars = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
        self.spinner_index = 0
        self.running = False
        self.thread = None
        self._lock = threading.Lock()
        self._cursor_hidden = False
        self.enabled = self._is_tty()

        with ProgressIndicator._registry_lock:
            ProgressIndicator._active_indicators.add(self)
            if not ProgressIndicator._cleanup_registered:
                atexit.register(ProgressIndicator._cleanup_all)
                ProgressIndicator._cleanup_registered = True

    def _is_tty(self):
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    @classmethod
    def _cleanup_all(cls):
        """Restore the cursor for any indicator still running at exit"""
        with cls._registry_lock:
            indicators = list(cls._active_indicators)
        for indicator in indicators:
            indicator._restore_cursor()

    def _restore_cursor(self):
        with self._lock:
            self.running = False
            if self._cursor_hidden:
                try:
                    self.stream.write("\033[?25h")
                    self.stream.flush()
                except (OSError, ValueError):
                    pass
                self._cursor_hidden = False

    def start(self):
        """Start the progress indicator"""
        if not self.enabled:
            return
        with self._lock:
            if self.running:
                return
            self.running = True
            try:
                self.stream.write("\033[?25l")
                self.stream.flush()
                self._cursor_hidden = True
            except OSError:
                pass

        self.thread = threading.Thread(target=self._animate)
        self.thread.daemon = True
        self.thread.start()

    def stop(self):
        """Stop the progress indicator and clear its line"""
        with self._lock:
            was_running = self.running
            self.running = False

        if self.thread:
            self.thread.join()
            self.thread = None

        if was_running:
            try:
                self.stream.write("\033[2K\033[0G")
                self.stream.flush()
            except OSError:
                pass
        self._restore_cursor()

        with ProgressIndicator._registry_lock:
            ProgressIndicator._active_indicators.discard(self)

    def _animate(self):
        """Animation loop (thread-safe)"""
        while True:
            with self._lock:
                if not self.running:
                    break
                current_message = self.message

            spinner = self.spinner_chars[self.spinner_index % len(self.spinner_chars)]
            self.spinner_index += 1
            try:
                self.stream.write(f"\033[2K\033[0G{Colors.CYAN}{spinner}{Colors.RESET} {current_message}")
                self.stream.flush()
            except (OSError, ValueError):
                break

            time.sleep(0.2)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False


def progress_wrapper(message, func, *args, **kwargs):
    """Wrapper to run a function with a progress indicator"""
    progress = ProgressIndicator(message)
    progress.start()
    try:
        return func(*args, **kwargs)
    finally:
        progress.stop()


class SubprocessCounter:
    """Counter to track subprocess calls made during a run."""

    def __init__(self):
        self._count = 0
        self._by_command = {}
        self._lock = threading.Lock()

    def increment(self, command_name: str = "subprocess"):
        """Increment the counter for a subprocess call."""
        with self._lock:
            self._count += 1
            self._by_command[command_name] = self._by_command.get(command_name, 0) + 1

    def get_count(self) -> int:
        with self._lock:
            return self._count

    def get_breakdown(self) -> dict:
        with self._lock:
            return dict(self._by_command)

    def reset(self):
        with self._lock:
            self._count = 0
            self._by_command.clear()

    def report(self, prefix: str = "") -> str:
        """Generate a report of subprocess calls.

        Args:
            prefix: Optional prefix for the report

        Returns:
            Formatted string with the total and a per-command breakdown
        """
        breakdown = self.get_breakdown()
        text = f"{prefix}Subprocess calls: {self.get_count()}"
        if breakdown:
            details = ", ".join(f"{name}: {count}" for name, count in sorted(breakdown.items()))
            text += f" ({details})"
        return text


# Global instance for tracking subprocess calls
subprocess_counter = SubprocessCounter()


class SectionDivider:
    """Format section headers and dividers for consistent UI"""

    @staticmethod
    def format_header(title, width=60, color=None):
        """Format a main section header

        Args:
            title: The title text
            width: Total width of the header line
            color: Optional color code from Colors class

        Returns:
            Formatted header string
        """
        if color:
            return f"\n{color}{Colors.BOLD}==== {title} ===={Colors.RESET}\n{'─' * width}"
        return f"\n{Colors.BOLD}==== {title} ===={Colors.RESET}\n{'─' * width}"


class BoxChars:
    """Unicode box drawing characters for tables"""
    # Heavy borders (for header)
    TOP_LEFT = '┏'
    TOP_RIGHT = '┓'
    TOP_SEP = '┳'
    HEAVY_HORIZONTAL = '━'
    HEAVY_VERTICAL = '┃'

    # Mixed borders (header/content separator)
    HEADER_LEFT = '┡'
    HEADER_RIGHT = '┩'
    HEADER_SEP = '╇'

    # Light borders (for content)
    BOTTOM_LEFT = '└'
    BOTTOM_RIGHT = '┘'
    BOTTOM_SEP = '┴'
    HORIZONTAL = '─'
    VERTICAL = '│'


class AsciiBoxChars:
    """ASCII fallback with the same attribute names as BoxChars"""
    TOP_LEFT = TOP_RIGHT = TOP_SEP = '+'
    HEADER_LEFT = HEADER_RIGHT = HEADER_SEP = '+'
    BOTTOM_LEFT = BOTTOM_RIGHT = BOTTOM_SEP = '+'
    HEAVY_HORIZONTAL = HORIZONTAL = '-'
    HEAVY_VERTICAL = VERTICAL = '|'


class TableFormatter:
    """Format data as a nicely bordered table"""

    def __init__(self, use_unicode=True):
        """Initialize table formatter

        Args:
            use_unicode: Whether to use Unicode box drawing characters
        """
        self.box = BoxChars() if use_unicode else AsciiBoxChars()
        self.use_unicode = use_unicode

    def format_table(self, headers, rows):
        """Format data as a bordered table

        Args:
            headers: List of column headers
            rows: List of row tuples/lists

        Returns:
            Formatted table string
        """
        if not headers or not rows:
            return ""

        box = self.box

        # Calculate column widths
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(strip_ansi(cell)))

        # Add padding
        widths = [w + 2 for w in widths]

        lines = []

        segments = [box.HEAVY_HORIZONTAL * w for w in widths]
        lines.append(box.TOP_LEFT + box.TOP_SEP.join(segments) + box.TOP_RIGHT)

        header_cells = [f" {header.ljust(widths[i] - 2)} " for i, header in enumerate(headers)]
        lines.append(box.HEAVY_VERTICAL + box.HEAVY_VERTICAL.join(header_cells) + box.HEAVY_VERTICAL)

        lines.append(box.HEADER_LEFT + box.HEADER_SEP.join(segments) + box.HEADER_RIGHT)

        for row in rows:
            row_cells = []
            for i, cell in enumerate(row):
                if i >= len(widths):
                    break
                cell_str = str(cell)
                # Pad on visible width so colored cells line up
                padding = widths[i] - 2 - len(strip_ansi(cell_str))
                row_cells.append(f" {cell_str}{' ' * padding} ")
            lines.append(box.VERTICAL + box.VERTICAL.join(row_cells) + box.VERTICAL)

        segments = [box.HORIZONTAL * w for w in widths]
        lines.append(box.BOTTOM_LEFT + box.BOTTOM_SEP.join(segments) + box.BOTTOM_RIGHT)

        return '\n'.join(lines)
