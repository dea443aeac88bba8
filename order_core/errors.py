"""
Error classes surfaced to the operator plus helpers to log and phrase them.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional


class ErrorCodes:
    FILE_ACCESS_DENIED = "FILE_ACCESS_DENIED"
    CSV_PARSE_ERROR = "CSV_PARSE_ERROR"
    SAVE_ERROR = "SAVE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


DEFAULT_MESSAGES = {
    ErrorCodes.FILE_ACCESS_DENIED: "Access to the file was denied. Please check the file exists and you have permission to read it.",
    ErrorCodes.CSV_PARSE_ERROR: "Unable to read the CSV file. Please check that it's properly formatted and try again.",
    ErrorCodes.SAVE_ERROR: "Failed to save the file. Please check your permissions and try again.",
    ErrorCodes.VALIDATION_ERROR: "Invalid data detected. Please check your inputs and try again.",
    ErrorCodes.PLAYER_NOT_FOUND: "Player not found. Please reload the file and try again.",
}


class AppError(Exception):
    code = ErrorCodes.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.details = details or {}
        self.user_message = user_message


class FileAccessError(AppError):
    code = ErrorCodes.FILE_ACCESS_DENIED


class CsvParseError(AppError):
    code = ErrorCodes.CSV_PARSE_ERROR


class SaveError(AppError):
    code = ErrorCodes.SAVE_ERROR


class ValidationError(AppError):
    code = ErrorCodes.VALIDATION_ERROR


class PlayerNotFoundError(AppError):
    code = ErrorCodes.PLAYER_NOT_FOUND


def user_message_for(error: BaseException) -> str:
    if isinstance(error, AppError):
        if error.user_message:
            return error.user_message
        return DEFAULT_MESSAGES.get(error.code, f"Application error: {error}")
    return f"An unexpected error occurred: {error}\n\nPlease try again."


def report_error(error: BaseException, logger: logging.Logger, context: str = "") -> str:
    """Log full detail for the console/log file and return the operator-facing text."""
    prefix = f"{context}: " if context else ""
    if isinstance(error, AppError):
        logger.error("%s%s [%s] details=%s", prefix, error, error.code, error.details, exc_info=error)
    else:
        logger.exception("%sunexpected error", prefix, exc_info=error)
    return user_message_for(error)
