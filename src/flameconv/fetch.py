import pathlib
import sys

import requests
from retrying import retry

from flameconv.configured_logger import logger
from flameconv.errors import InputError

DEFAULT_TIMEOUT = 30


class _ServerError(Exception):
    pass


def _should_retry(exception: BaseException) -> bool:
    return isinstance(exception, (_ServerError, requests.ConnectionError,
                                  requests.Timeout))


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


@retry(stop_max_attempt_number=5,
       wait_fixed=1000,
       retry_on_exception=_should_retry)
def _download(url: str, timeout: float) -> bytes:
    logger.debug(f'Fetching {url}')
    response = requests.get(url, timeout=timeout)
    if response.status_code >= 500:
        raise _ServerError(f'{url} returned {response.status_code}')
    if response.status_code != 200:
        raise InputError(f'{url} returned {response.status_code}')
    return response.content


def fetch_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    try:
        return _download(url, timeout)
    except (_ServerError, requests.RequestException) as e:
        raise InputError(f'failed to fetch {url}: {e}') from e


def read_input(source: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Reads a profile from stdin ("-"), an http(s) URL or a local file.

    Undecodable bytes are replaced rather than rejected: garbage simply fails
    to parse line by line later on.
    """
    if source == '-':
        data = sys.stdin.buffer.read()
    elif is_url(source):
        data = fetch_url(source, timeout)
    else:
        try:
            data = pathlib.Path(source).read_bytes()
        except OSError as e:
            raise InputError(f'cannot read {source}: {e}') from e
    logger.debug(f'Read {len(data)} bytes from {source}')
    return data.decode('utf-8', errors='replace')
