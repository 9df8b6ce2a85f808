# src/fxconvert/adapters/providers/ecb.py
"""
ECB Provider for Daily Euro Reference Rates

This module fetches the European Central Bank daily reference-rate XML feed
and parses it into a RateSet with EUR as base.

Feed shape (namespaces omitted):
    <Envelope>
      <Cube>
        <Cube time="2024-12-04">
          <Cube currency="USD" rate="1.0534"/>
          ...

The parser is namespace-agnostic and looks for the dated Cube at any depth,
so extra wrapper elements in the envelope do not break it.

Files that USE this module:
- fxconvert.app (builds EcbRateProvider for the update pipeline)
- tests.test_ecb_provider (unit tests)

Files that this module USES:
- fxconvert.adapters.providers.base (RateProvider interface)
- fxconvert.domain (RateSet, FetchError, ParseError, InvalidRateSetError)
- fxconvert.config (settings for feed URL and timeout)
"""
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple, Union

import requests

from fxconvert import __version__
from fxconvert.adapters.providers.base import RateProvider
from fxconvert.config import settings
from fxconvert.domain.errors import FetchError, InvalidRateSetError, ParseError
from fxconvert.domain.models import RateSet

log = logging.getLogger(__name__)

USER_AGENT = f"fxconvert/{__version__}"
ECB_BASE_CURRENCY = "EUR"


def _local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree puts on qualified tags."""
    return tag.rsplit("}", 1)[-1]


def parse_feed(payload: Union[str, bytes], base: str = ECB_BASE_CURRENCY) -> RateSet:
    """
    Parse an ECB eurofxref XML document into a RateSet.

    Args:
        payload: XML document as text or bytes
        base: Currency the feed quotes against (implicit in the feed)

    Returns:
        RateSet with the feed date, the given base and one entry per line item

    Raises:
        ParseError: On malformed XML, missing dated Cube, incomplete line
            items, an empty rate list, unparseable rates or an invalid date
    """
    try:
        root = ET.fromstring(payload)
    except ET.ParseError as e:
        raise ParseError(f"Failed to parse XML: {e}") from e

    time_cube = None
    for element in root.iter():
        if _local_name(element.tag) == "Cube" and "time" in element.attrib:
            time_cube = element
            break
    if time_cube is None:
        raise ParseError("Failed to parse XML: no Cube element with a 'time' attribute")

    entries: List[Tuple[str, str]] = []
    for line in time_cube:
        if _local_name(line.tag) != "Cube":
            continue
        currency = line.get("currency")
        rate = line.get("rate")
        if currency is None or rate is None:
            raise ParseError(f"Rate line missing currency or rate attribute: {line.attrib}")
        entries.append((currency, rate))

    if not entries:
        raise ParseError(f"Feed for {time_cube.get('time')} contains no rates")

    try:
        return RateSet.from_feed(time_cube.get("time", ""), entries, base=base)
    except InvalidRateSetError as e:
        raise ParseError(str(e)) from e


class EcbRateProvider(RateProvider):
    base_currency = ECB_BASE_CURRENCY

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize ECB feed provider.

        Args:
            url: Optional feed URL (defaults to settings.ecb_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            session: Optional requests session (one is created if omitted)
        """
        self.url = url or settings.ecb_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def fetch_rates(self) -> RateSet:
        """
        Fetch and parse the current ECB snapshot.

        Returns:
            RateSet with EUR as base

        Raises:
            FetchError: On timeout, connection failure or non-2xx status
            ParseError: On malformed feed content
        """
        log.info("Fetching exchange rates from ECB: %s", self.url)
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            log.warning("ECB request timed out after %s seconds", self.timeout)
            raise FetchError(f"ECB request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            log.warning("ECB request failed (network/connection error): %s", e)
            raise FetchError(f"HTTP request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            log.error("ECB returned HTTP %d", resp.status_code)
            raise FetchError(f"ECB returned status: {resp.status_code}")

        try:
            rate_set = parse_feed(resp.content, base=self.base_currency)
        except ParseError as e:
            log.error("ECB payload could not be parsed: %s", e.detail)
            raise

        log.info(
            "Successfully parsed %d exchange rates for %s",
            len(rate_set.rates), rate_set.date,
        )
        return rate_set

    def close(self) -> None:
        self.session.close()
