# path: unitrack/core/exceptions.py
"""
Таксономия ошибок приложения.

Каждая ошибка знает свой HTTP-статус и текст для клиента; рендерит их
обработчик в unitrack/core/api/errors.py. details — диагностический контекст
(например, какие ячейки нашлись в шапке Excel).
"""

from __future__ import annotations

from typing import Any, Optional


class UnitrackError(Exception):
    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, *, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class ValidationError(UnitrackError):
    message = "Validation failed"


class InvalidIPFormatError(ValidationError):
    message = "Invalid IP address format"


class InvalidFilenameError(ValidationError):
    message = "Invalid filename format. Expected: CABLE STOCK(MM.DD.YYYY).xlsx"


class InvalidWorkbookError(ValidationError):
    message = "File is not a readable xlsx workbook"


class UnitInUseError(ValidationError):
    message = "Unit is the primary user of shared computers"


class DuplicateNameError(UnitrackError):
    message = "Name already exists"


class DuplicateIPError(UnitrackError):
    message = "IP Address Already Exists."


class PrimaryUserNotFoundError(UnitrackError):
    message = "Primary user not found"


class MissingIPError(UnitrackError):
    message = "IP address is required"


class NotFoundError(UnitrackError):
    status_code = 404
    message = "Not found"


class DuplicateItemError(UnitrackError):
    message = "Item already exists in this location"


class HeaderNotFoundError(UnitrackError):
    message = "Could not find header row"


class HeaderValidationError(UnitrackError):
    message = "Header validation failed"


class NoValidItemsError(UnitrackError):
    message = "No valid items found in file"


class SnapshotNotFoundError(NotFoundError):
    message = "No data found for this month"


class ServerError(UnitrackError):
    status_code = 500
    message = "Server Error"
