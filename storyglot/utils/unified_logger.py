"""
Unified logging system for StoryGlot
Provides consistent logging across the CLI, the web API and the translation core
"""
import sys
import os
from datetime import datetime
from typing import Optional, Dict, Any, Callable
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(Enum):
    """Types of log messages for special handling"""
    GENERAL = "general"
    GATEWAY_REQUEST = "gateway_request"
    PROGRESS = "progress"
    PAGE_COMMIT = "page_commit"
    TRANSLATION_START = "translation_start"
    TRANSLATION_END = "translation_end"
    ERROR_DETAIL = "error_detail"


class Colors:
    """ANSI color codes for terminal output"""
    NO_COLOR = os.environ.get('NO_COLOR') is not None or not sys.stdout.isatty()

    YELLOW = '' if NO_COLOR else '\033[93m'
    WHITE = '' if NO_COLOR else '\033[97m'
    GRAY = '' if NO_COLOR else '\033[90m'
    RED = '' if NO_COLOR else '\033[91m'
    ENDC = '' if NO_COLOR else '\033[0m'

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.YELLOW = cls.WHITE = cls.GRAY = cls.RED = cls.ENDC = ''


class UnifiedLogger:
    """
    Unified logger that provides consistent logging across all interfaces
    """

    def __init__(self,
                 name: str = "StoryGlot",
                 console_output: bool = True,
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO,
                 web_callback: Optional[Callable] = None,
                 storage_callback: Optional[Callable] = None):
        """
        Initialize the unified logger

        Args:
            name: Logger name/identifier
            console_output: Whether to output to console
            enable_colors: Whether to use colored output
            min_level: Minimum log level to display
            web_callback: Callback for web interface (WebSocket emission)
            storage_callback: Callback for storing logs (e.g., in memory)
        """
        self.name = name
        self.console_output = console_output
        self.enable_colors = enable_colors
        self.min_level = min_level
        self.web_callback = web_callback
        self.storage_callback = storage_callback
        self._start_time: Optional[datetime] = None

        if not enable_colors:
            Colors.disable()

    def _format_timestamp(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _format_console_message(self, level: LogLevel, message: str,
                                log_type: LogType = LogType.GENERAL,
                                data: Optional[Dict[str, Any]] = None) -> str:
        """Format message for console output"""
        data = data or {}
        timestamp = self._format_timestamp()

        level_colors = {
            LogLevel.DEBUG: Colors.GRAY,
            LogLevel.INFO: Colors.WHITE,
            LogLevel.WARNING: Colors.YELLOW,
            LogLevel.ERROR: Colors.RED,
            LogLevel.CRITICAL: Colors.RED
        }
        color = level_colors.get(level, Colors.WHITE)

        if log_type == LogType.PROGRESS:
            return self._format_progress(data)
        elif log_type == LogType.TRANSLATION_START:
            return self._format_translation_start(data)
        elif log_type == LogType.TRANSLATION_END:
            return self._format_translation_end(message, data)
        elif log_type == LogType.ERROR_DETAIL:
            return self._format_error_detail(message, data)
        elif log_type == LogType.GATEWAY_REQUEST:
            return (f"{Colors.GRAY}[{timestamp}] -> {data.get('source_language', '?')} to "
                    f"{data.get('target_language', '?')} ({data.get('chars', 0)} chars){Colors.ENDC}")
        else:
            level_str = f"[{level.name}]" if level != LogLevel.INFO else ""
            return f"{color}[{timestamp}] {level_str} {message}{Colors.ENDC}"

    def _format_progress(self, data: Dict[str, Any]) -> str:
        percentage = data.get('percentage', 0)
        current = data.get('current', 0)
        total = data.get('total', 0)

        bar_length = 30
        filled = int(bar_length * percentage / 100)
        bar = '█' * filled + '░' * (bar_length - filled)
        return f"{Colors.WHITE}PROGRESS: {current}/{total} blocks [{bar}] {percentage:.1f}%{Colors.ENDC}"

    def _format_translation_start(self, data: Dict[str, Any]) -> str:
        self._start_time = datetime.now()
        targets = ', '.join(data.get('target_languages', [])) or '(none)'
        output = [f"{Colors.YELLOW}TRANSLATION STARTED{Colors.ENDC}",
                  f"{Colors.WHITE}Languages: {data.get('source_language', 'Unknown')} → {targets}{Colors.ENDC}"]
        if data.get('total_units'):
            output.append(f"{Colors.WHITE}Total blocks: {data['total_units']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_translation_end(self, message: str, data: Dict[str, Any]) -> str:
        output = [f"\n{Colors.WHITE}{message.upper()}{Colors.ENDC}"]
        if self._start_time:
            output.append(f"{Colors.GRAY}Duration: {datetime.now() - self._start_time}{Colors.ENDC}")
            self._start_time = None
        stats = data.get('stats')
        if stats:
            output.append(f"{Colors.WHITE}Translated: {stats.get('translated', 0)}  "
                          f"Reused: {stats.get('reused', 0)}{Colors.ENDC}")
            if stats.get('failed', 0) > 0:
                output.append(f"{Colors.YELLOW}Failed blocks (kept source text): {stats['failed']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_error_detail(self, message: str, data: Dict[str, Any]) -> str:
        output = [f"{Colors.RED}[{self._format_timestamp()}] ERROR: {message}{Colors.ENDC}"]
        if 'details' in data:
            output.append(f"{Colors.RED}Details: {data['details']}{Colors.ENDC}")
        return '\n'.join(output)

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """
        Main logging method

        Args:
            level: Log level
            message: Log message
            log_type: Type of log for special formatting
            data: Additional data for the log entry
        """
        if level.value < self.min_level.value:
            return

        if self.console_output:
            try:
                console_msg = self._format_console_message(level, message, log_type, data)
                if console_msg:
                    print(console_msg, flush=True)
            except UnicodeEncodeError:
                safe_message = message.encode('ascii', 'replace').decode('ascii')
                print(f"[{self._format_timestamp()}] {safe_message}", flush=True)

        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'level': level.name,
            'type': log_type.value,
            'message': message,
            'data': data or {}
        }

        if self.web_callback:
            self.web_callback(log_entry)

        if self.storage_callback:
            self.storage_callback(log_entry)

    # Convenience methods
    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def warning(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.WARNING, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)


# Global logger instance
_global_logger = None


def get_logger(name: str = "StoryGlot", **kwargs) -> UnifiedLogger:
    """
    Get or create the global logger instance

    Args:
        name: Logger name
        **kwargs: Additional arguments for UnifiedLogger

    Returns:
        UnifiedLogger instance
    """
    global _global_logger
    if _global_logger is None:
        from storyglot.config import DEBUG_MODE
        kwargs.setdefault('min_level', LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO)
        _global_logger = UnifiedLogger(name, **kwargs)
    return _global_logger


def setup_cli_logger(enable_colors: bool = True) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    from storyglot.config import DEBUG_MODE

    return get_logger(
        console_output=True,
        enable_colors=enable_colors,
        min_level=LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
    )


def setup_web_logger(web_callback: Callable, storage_callback: Callable) -> UnifiedLogger:
    """Create a logger for one web job.

    Unlike the CLI logger this is not the global instance: concurrent jobs
    of different sessions each push to their own callbacks.
    """
    from storyglot.config import DEBUG_MODE

    return UnifiedLogger(
        console_output=True,
        enable_colors=True,
        min_level=LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO,
        web_callback=web_callback,
        storage_callback=storage_callback
    )


# === Module-level convenience functions ===

def log(level: LogLevel, message: str,
        log_type: LogType = LogType.GENERAL,
        data: Optional[Dict[str, Any]] = None):
    """Log through the global logger."""
    get_logger().log(level, message, log_type, data)


def debug(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    log(LogLevel.DEBUG, message, log_type, data)


def info(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    log(LogLevel.INFO, message, log_type, data)


def warning(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    log(LogLevel.WARNING, message, log_type, data)


def error(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    log(LogLevel.ERROR, message, log_type, data)
