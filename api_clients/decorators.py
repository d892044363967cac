# Decorators for API client functions
import functools
import logging

import requests

from exceptions import FetchError

logger = logging.getLogger(__name__)


def raise_fetch_error(func):
    """
    Decorator converting `requests` failures into FetchError.
    Assumes the wrapped function:
    - Takes the target URL as its first positional argument.
    - Returns the successful result or lets a
      `requests.exceptions.RequestException` escape on failure.

    The raised FetchError carries the target URL, the HTTP status when the
    exception holds a response, and the exception text as reason. Any
    response attached to the exception is closed.
    """
    @functools.wraps(func)
    def wrapper(url, *args, **kwargs):
        try:
            return func(url, *args, **kwargs)
        except requests.exceptions.RequestException as e:
            status = None
            response = getattr(e, 'response', None)
            if response is not None:
                status = response.status_code
                response.close()
            logger.debug(f"{func.__name__} raised {type(e).__name__} for {url[:80]}: {e}")
            raise FetchError(url, status=status, reason=str(e)) from e
    return wrapper
