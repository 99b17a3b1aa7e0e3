import logging
import sys
from datetime import datetime


class ProgressLogger:
    """
    Logs progress through a batch of sentences.
    Emits a line every 10% so long runs stay visible in the log file.
    """
    def __init__(self, total, desc="Progress", logger=None):
        self.total = total
        self.current = 0
        self.desc = desc
        self.logger = logger or logging.getLogger()
        self.start_time = datetime.now()
        self.last_log_percent = -1

    def update(self, n=1, item_desc=None):
        """Update progress by n items."""
        self.current += n
        percent = int((self.current / self.total) * 100) if self.total > 0 else 0

        if percent - self.last_log_percent >= 10 or item_desc or self.current == self.total:
            elapsed = (datetime.now() - self.start_time).total_seconds()
            rate = self.current / elapsed if elapsed > 0 else 0
            eta_seconds = (self.total - self.current) / rate if rate > 0 else 0

            msg_parts = [f"{self.desc}: {self.current}/{self.total} ({percent}%)"]
            if item_desc:
                msg_parts.append(f"- {item_desc}")
            if eta_seconds > 0 and self.current < self.total:
                msg_parts.append(f"[ETA: {int(eta_seconds)}s]")

            self.logger.info(" ".join(msg_parts))
            self.last_log_percent = percent

    def close(self):
        """Mark progress as complete."""
        if self.current < self.total:
            self.current = self.total
            self.update(0)


def setup_logging(log_file=None, level=logging.INFO, debug=False):
    """
    Set up logging for the analyzer.

    Args:
        log_file: Optional path of a log file. Console only when None.
        level: Logging level (default: INFO).
        debug: If True, enables DEBUG level with file/line context, which
            also shows every fired request.
    """
    # Clear existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if debug:
        level = logging.DEBUG

    if debug:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    else:
        format_string = '%(asctime)s - %(levelname)s - %(message)s'

    # logs go to stderr, stdout carries parse results
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(file_handler)

    logging.info("=" * 80)
    logging.info(f"NEW RUN STARTED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    if debug:
        logging.info("DEBUG MODE ENABLED - Verbose logging active")
    logging.info("=" * 80)


def log_with_context(message, context=None, level=logging.DEBUG, logger=None):
    """
    Log a message with additional context (request, stack state, etc.).

    Args:
        message: Main log message
        context: Dict of contextual information
        level: Log level (default: DEBUG)
        logger: Logger to use (default: root logger)
    """
    logger = logger or logging.getLogger()
    logger.log(level, message)

    if context and logger.isEnabledFor(logging.DEBUG):
        for key, value in context.items():
            # Truncate long values
            str_value = str(value)
            if len(str_value) > 200:
                str_value = str_value[:200] + "..."
            logger.debug(f"  └─ {key}: {str_value}")
