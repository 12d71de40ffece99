"""Failure taxonomy for meal plan fetches and updates."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum

import httpx

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    MISSING_CONFIGURATION = "missing_configuration"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    UNKNOWN_ERROR = "unknown_error"


USER_MESSAGES = {
    ErrorCategory.MISSING_CONFIGURATION: "Configuration needed: set the server URL and API key.",
    ErrorCategory.API_ERROR: "The server rejected the request.",
    ErrorCategory.NETWORK_ERROR: "Connection error: could not reach the server.",
    ErrorCategory.PARSE_ERROR: "The server sent a response that could not be read.",
    ErrorCategory.UNKNOWN_ERROR: "Failed to load data.",
}


class MealCalendarError(Exception):
    """Base class for errors raised by this package."""


class MissingConfigurationError(MealCalendarError):
    pass


class ApiError(MealCalendarError):
    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"API Error {status_code}: {body or 'Unknown error'}")
        self.status_code = status_code
        self.body = body


class ParseError(MealCalendarError):
    pass


@dataclass(frozen=True)
class ClassifiedError:
    category: ErrorCategory
    message: str
    status_code: int | None = None
    body: str | None = None

    @property
    def user_message(self) -> str:
        return user_message(self.category)


def user_message(category: ErrorCategory) -> str:
    return USER_MESSAGES[category]


def check_configuration(base_url: str | None, api_key: str | None) -> None:
    """Raise MissingConfigurationError unless both URL and key are non-blank."""
    missing = []
    if not base_url or not base_url.strip():
        missing.append("server URL")
    if not api_key or not api_key.strip():
        missing.append("API key")
    if missing:
        raise MissingConfigurationError(f"Missing {' and '.join(missing)}")


def _categorize(failure: BaseException) -> ErrorCategory:
    if isinstance(failure, MissingConfigurationError):
        return ErrorCategory.MISSING_CONFIGURATION
    if isinstance(failure, (ApiError, httpx.HTTPStatusError)):
        return ErrorCategory.API_ERROR
    if isinstance(failure, (ParseError, json.JSONDecodeError, httpx.DecodingError)):
        return ErrorCategory.PARSE_ERROR
    if isinstance(failure, (httpx.TransportError, OSError)):
        return ErrorCategory.NETWORK_ERROR
    return ErrorCategory.UNKNOWN_ERROR


def classify(failure: BaseException, log: logging.Logger | None = None) -> ClassifiedError:
    """Map a failure from the meal plan server into an ErrorCategory.

    Every failure gets a category; anything unrecognised is UNKNOWN_ERROR.
    """
    log = log or logger
    category = _categorize(failure)

    status_code = None
    body = None
    if isinstance(failure, ApiError):
        status_code, body = failure.status_code, failure.body
    elif isinstance(failure, httpx.HTTPStatusError):
        status_code, body = failure.response.status_code, failure.response.text

    if category is ErrorCategory.API_ERROR:
        message = f"API Error {status_code}: {body or 'Unknown error'}"
    elif category is ErrorCategory.MISSING_CONFIGURATION:
        message = str(failure) or "Missing URL or API Key"
    else:
        message = f"{type(failure).__name__} - {failure}"

    log.error("Refresh failed [%s]: %s", category.value, message)
    return ClassifiedError(category=category, message=message, status_code=status_code, body=body)
