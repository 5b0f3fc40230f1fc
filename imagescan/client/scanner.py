"""
Module providing a client for the remote image scanning service.
"""

import logging
from typing import Iterable, List
from urllib.parse import quote

import httpx

from pydantic import TypeAdapter, ValidationError

from .exceptions import (
    ScannerUnavailable,
    ScannerTimeout,
    ScannerResponseError,
    InvalidScanResponse
)
from .models import ScanResult, ScanResultSummary


logger = logging.getLogger(__name__)


#: The default timeout for requests, in seconds
DEFAULT_TIMEOUT = 30.0


SCAN_RESULT = TypeAdapter(ScanResult)
SCAN_RESULT_SUMMARIES = TypeAdapter(List[ScanResultSummary])


def image_list(images):
    """
    Return the given images as a list, rejecting a single image string.
    """
    # A str is itself an iterable of str, which would split into characters
    if isinstance(images, (str, bytes)):
        raise TypeError(f'expected an iterable of images, got {type(images).__name__}')
    return list(images)


def decode(response, adapter, default = None):
    """
    Decode the body of the given response using the given type adapter.

    If the body is JSON null and a default is given, the default is validated instead.
    """
    try:
        data = response.json()
    except ValueError as exc:
        raise InvalidScanResponse(f'response body is not valid JSON: {exc}') from exc
    if data is None and default is not None:
        data = default
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidScanResponse(f'unexpected response body: {exc}') from exc


class Scanner:
    """
    Client for a Trivy-backed image scanning service.

    Each operation uses a new HTTP client, so a single instance can safely be
    shared between tasks.
    """
    def __init__(self, url, timeout = DEFAULT_TIMEOUT, transport = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings):
        """
        Build a scanner from a settings object.
        """
        return cls(settings.url, timeout = settings.timeout)

    def client(self):
        return httpx.AsyncClient(timeout = self.timeout, transport = self.transport)

    async def request(self, method, url, **kwargs):
        """
        Make a request to the scanning service and return the response.

        Transport errors and non-2xx statuses are converted into scanner errors.
        """
        try:
            async with self.client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.exception(f'Timed out requesting {method} {url}')
            raise ScannerTimeout(f'timed out after {self.timeout}s: {method} {url}') from exc
        except httpx.DecodingError as exc:
            raise InvalidScanResponse(f'response body could not be decoded: {exc}') from exc
        except httpx.RequestError as exc:
            logger.exception(f'Error requesting {method} {url}')
            raise ScannerUnavailable(f'{exc.__class__.__name__}: {exc}') from exc
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ScannerResponseError(
                f'{method} {url} returned {response.status_code}',
                status_code = response.status_code
            ) from exc
        return response

    async def submit(self, images: Iterable[str]) -> None:
        """
        Submit the given images for scanning.

        Scanning happens asynchronously in the service, so the results must be
        fetched separately once they become available.
        """
        images = image_list(images)
        logger.info(f'Submitting {len(images)} image(s) for scanning')
        response = await self.request('POST', f'{self.url}/scan/images', json = images)
        # The acknowledgement has no fixed schema, so it is only logged
        if response.content:
            try:
                acknowledgement = response.json()
            except ValueError as exc:
                raise InvalidScanResponse(f'response body is not valid JSON: {exc}') from exc
            logger.debug(f'Scan submission response: {acknowledgement}')

    async def result(self, image: str) -> ScanResult:
        """
        Return the detailed scan result for the given image.
        """
        # The image is a single path segment, so slashes must be escaped as well
        url = f"{self.url}/scan-results/trivy/{quote(image, safe = '')}"
        response = await self.request('GET', url)
        result = decode(response, SCAN_RESULT)
        logger.debug(f'Scan result for {image}: {result}')
        return result

    async def results(self, images: Iterable[str]) -> List[ScanResultSummary]:
        """
        Return the scan result summaries for the given images.

        An empty list of images gives an empty list of summaries without
        contacting the service.
        """
        images = image_list(images)
        if not images:
            logger.debug('No images given, skipping scan results request')
            return []
        response = await self.request(
            'GET',
            f'{self.url}/scan-results/trivy',
            params = [('images', image) for image in images]
        )
        summaries = decode(response, SCAN_RESULT_SUMMARIES, default = [])
        logger.debug(f'Scan result summaries: {summaries}')
        return summaries
