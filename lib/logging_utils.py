"""
Logging utilities for the Google Maps client.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

MASK = "***"


class SecretMaskingFilter(logging.Filter):
    """Replaces secrets (API keys) in log records with a mask, dood!

    Attached to handlers, so records of third-party loggers (httpx logs
    full request URLs at INFO) are masked too.
    """

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        self.secrets: List[str] = [secret for secret in secrets if secret]

    def mask(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = logging.getLevelName(levelStr.upper())
    if isinstance(level, int):
        return level
    logger.error(f"Invalid log level '{levelStr}'")
    return default


def configureLogger(
    localLogger: logging.Logger, config: Dict[str, Any], secretFilter: Optional[SecretMaskingFilter] = None
) -> None:
    """Configure individual logger from config file settings."""

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    handlers: List[logging.Handler] = []

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel) or logLevel
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(consoleLogLevel)
        handlers.append(consoleHandler)
        logger.info(f"Logging {localLogger.name} to console, logLevel: {consoleLogLevel}")

    if "file" in config:
        logFile = config["file"]
        try:
            Path(logFile).parent.mkdir(parents=True, exist_ok=True)
            fileLogLevel = logLevel
            if "file-level" in config:
                fileLogLevel = getLogLevelByStr(config["file-level"], logLevel) or logLevel

            fileHandler: logging.Handler
            if config.get("rotate", False):
                fileHandler = TimedRotatingFileHandler(
                    filename=logFile,
                    when="midnight",
                    interval=1,
                    backupCount=7,
                    encoding="utf-8",
                )
            else:
                fileHandler = logging.FileHandler(logFile, encoding="utf-8")

            fileHandler.setLevel(fileLogLevel)
            handlers.append(fileHandler)
            logger.info(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileLogLevel}")
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")

    for handler in handlers:
        handler.setFormatter(formatter)
        if secretFilter is not None:
            handler.addFilter(secretFilter)
        localLogger.addHandler(handler)


def initLogging(config: Dict[str, Any], secrets: Iterable[str] = ()) -> None:
    """Configure logging from the ``[logging]`` config section.

    Args:
        config: Logging section (level, console, file, rotate, per-logger overrides)
        secrets: Values that must never appear in log output
    """
    secretFilter = SecretMaskingFilter(secrets)

    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config, secretFilter)
    logLevel = rootLogger.getEffectiveLevel()

    # httpx logs every request URL (credential included) at INFO
    if logLevel < logging.WARNING:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig, secretFilter)

    logger.info(f"Logging configured: root level={logging.getLevelName(logLevel)}")
