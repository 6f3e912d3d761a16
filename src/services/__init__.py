"""Services package exports."""

from src.services.i18n_service import Translator, get_translator, init_translator
from src.services.logging_service import configure_logging, get_logger

__all__ = [
    "Translator",
    "configure_logging",
    "get_logger",
    "get_translator",
    "init_translator",
]
