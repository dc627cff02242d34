import logging
import os
from logging.handlers import RotatingFileHandler

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

class Logger:
    """
    A logger that writes to a rotating file and optionally to console.
    """
    def __init__(self, name, log_file=None, log_level=None, log_format=None, console_log=True):
        """
        Initialize a new logger.

        Args:
            name (str): Logger name, e.g. 'service-store'
            log_file (str, optional): Log file name. Defaults to {name}.log
            log_level (int | str, optional): Logging level. Defaults to LOG_LEVEL or DEBUG.
            log_format (str, optional): Format string for records.
            console_log (bool, optional): Whether to log to console. Defaults to True.
        """
        self.name = name
        self.log_file = log_file if log_file else f"{name}.log"
        self.log_level = self._resolve_level(log_level if log_level is not None else os.getenv('LOG_LEVEL', 'DEBUG'))
        self.console_log = console_log
        self.log_format = log_format if log_format else DEFAULT_FORMAT

        self.logger = logging.getLogger(name)
        self.logger.setLevel(self.log_level)
        self.logger.propagate = False

        # Reusing a name replaces the handlers instead of stacking them
        if self.logger.handlers:
            for handler in list(self.logger.handlers):
                handler.close()
            self.logger.handlers.clear()

        formatter = logging.Formatter(self.log_format)

        logs_dir = self.logs_dir()
        os.makedirs(logs_dir, exist_ok=True)
        file_handler = RotatingFileHandler(os.path.join(logs_dir, self.log_file), maxBytes=10*1024*1024, backupCount=5)
        file_handler.setLevel(self.log_level)
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        if console_log:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(self.log_level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

    @staticmethod
    def logs_dir() -> str:
        """Directory for log files: LOG_DIR, or logs/ at the project root."""
        default = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), 'logs')
        return os.path.abspath(os.getenv('LOG_DIR', default))

    @staticmethod
    def _resolve_level(level) -> int:
        if isinstance(level, int):
            return level
        return getattr(logging, str(level).upper(), logging.DEBUG)

    def debug(self, message):
        self.logger.debug(message)

    def info(self, message):
        self.logger.info(message)

    def warning(self, message):
        self.logger.warning(message)

    def error(self, message):
        self.logger.error(message)

    def critical(self, message):
        self.logger.critical(message)
