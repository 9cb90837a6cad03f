"""Remote version descriptor — fetch and version field extraction.

Supports XML documents (a Maven pom.xml, with or without its namespace)
and JSON documents. The version is the first field with the wanted name in
document order; the rest of the schema is ignored.
"""

import json
import logging
import xml.etree.ElementTree as ET
from urllib.error import URLError
from urllib.request import Request, urlopen

from versionwatch.branding import AppBranding
from versionwatch.core.errors import NetworkError, ParseError
from versionwatch.core.models import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def fetch_descriptor(url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Download the descriptor document. Raises NetworkError on failure."""
    req = Request(url, headers={'User-Agent': AppBranding.user_agent()})
    try:
        with urlopen(req, timeout=timeout) as resp:
            data = resp.read()
    except (URLError, OSError) as e:
        raise NetworkError(f"Failed to fetch {url}: {e}") from e

    logger.debug("Fetched %d bytes from %s", len(data), url)
    return data


def parse_version(data: bytes, field: str = 'version') -> str:
    """Extract the first ``field`` value from an XML or JSON descriptor."""
    stripped = data.lstrip()
    if stripped[:1] in (b'{', b'['):
        version = _find_in_json(_load_json(stripped), field)
    else:
        version = _find_in_xml(_load_xml(stripped), field)

    if version is None:
        raise ParseError(f"No '{field}' field in descriptor")
    version = version.strip()
    if not version:
        raise ParseError(f"Empty '{field}' field in descriptor")
    return version


def _load_json(data: bytes):
    try:
        # Numbers stay as their source text, so 1.10 is not read back as 1.1
        return json.loads(data.decode('utf-8'), parse_float=str, parse_int=str)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f"Malformed JSON descriptor: {e}") from e


def _load_xml(data: bytes) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML descriptor: {e}") from e


def _find_in_json(node, field: str) -> str | None:
    """Depth-first, in key order; the first string or number match wins."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == field and isinstance(value, str):
                return value
            found = _find_in_json(value, field)
            if found is not None:
                return found
    elif isinstance(node, list):
        for item in node:
            found = _find_in_json(item, field)
            if found is not None:
                return found
    return None


def _find_in_xml(root: ET.Element, field: str) -> str | None:
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        # Drop the "{namespace}" prefix, pom.xml declares a default namespace
        local_name = element.tag.rsplit('}', 1)[-1]
        if local_name == field:
            return ''.join(element.itertext())
    return None
