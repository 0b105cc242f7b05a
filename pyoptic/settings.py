"""
Configuration for the rebuild engine, and the package logger.
"""
import logging
from enum import Enum
from typing import TypedDict, ReadOnly


class Fallback(str, Enum):
    """
    How to rebuild an object that is neither registered nor recognised
    (not immerable, not a dataclass, named tuple or pydantic model).
    """
    RECORD = "record"   # rebuilt as a plain dict, tagged identity is lost
    COPY = "copy"       # shallow copy keeping the class
    ERROR = "error"     # refuse with UnsupportedContainerError


class Settings(TypedDict):
    """
    Represents the settings consulted by a Registry while rebuilding.
    """
    share_unchanged: ReadOnly[bool]
    fallback: ReadOnly[Fallback]


def default_settings() -> Settings:
    """
    Returns the default Settings.
    """
    return {
        "share_unchanged": True,
        "fallback": Fallback.RECORD,
    }


def configure_logger(level: int = logging.DEBUG, name: str = "pyoptic") \
    -> logging.Logger:
    """
    Attaches a message-only stream handler to the package logger.
    Calling it again only adjusts the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.propagate = False
    return logger
