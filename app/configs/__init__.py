from app.configs.settings import DEFAULT_ERROR_MESSAGE, file_logger, settings

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "file_logger",
    "settings",
]
