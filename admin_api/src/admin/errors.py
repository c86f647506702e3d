import functools
import logging
from typing import Any, Callable, Optional

from fastapi import status

from ...utils.helperFunctions import api_response

logger = logging.getLogger(__name__)


class AdminAPIError(Exception):
	"""Base for every outcome that short-circuits an operation into the envelope."""

	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

	def __init__(self, message: str, result: Any = None, status_code: Optional[int] = None):
		super().__init__(message)
		self.message = message
		self.result = result
		if status_code is not None:
			self.status_code = status_code

	def to_response(self):
		return api_response(self.status_code, False, self.result, self.message)


class ValidationError(AdminAPIError):
	status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AdminAPIError):
	status_code = status.HTTP_404_NOT_FOUND


class EmptyResultError(AdminAPIError):
	"""A valid query that matched nothing. Not a failure; callers pick 202 or 203."""

	def __init__(self, message: str, status_code: int, result: Any = None):
		super().__init__(message, [] if result is None else result, status_code)


class StoreError(AdminAPIError):
	"""Any failure below the controller: driver errors, bad ids, schema errors."""


def envelope_errors(prefix: str, error_result: Any = None) -> Callable:
	"""Turn whatever an operation raises into its envelope response.

	``AdminAPIError`` subclasses keep their own status; anything else becomes a
	500 StoreError whose message embeds the failure description.
	"""

	def decorator(func):
		@functools.wraps(func)
		async def wrapper(*args, **kwargs):
			try:
				return await func(*args, **kwargs)
			except AdminAPIError as e:
				return e.to_response()
			except Exception as e:
				logger.exception("%s failed", func.__name__)
				result = list(error_result) if isinstance(error_result, list) else error_result
				return StoreError(f"{prefix}: {e}", result).to_response()
		return wrapper

	return decorator
