"""
Block configuration blob codec.

configdata is stored as base64 of a JSON object. Decoding never raises:
a missing, corrupt or non-object blob decodes to an empty dict so that
callers fall back to their defaults.
"""

import base64
import binascii
import json
import logging

logger = logging.getLogger(__name__)


def decode_configdata(blob):
    """Decode a configdata blob into a dict."""
    if not blob:
        return {}
    try:
        raw = base64.b64decode(blob, validate=True)
        data = json.loads(raw.decode('utf-8'))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        logger.warning(f"Undecodable block configdata, using defaults: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Block configdata is a {type(data).__name__}, not an object; using defaults")
        return {}
    return data


def encode_configdata(data):
    """Encode a dict into a configdata blob."""
    raw = json.dumps(data, sort_keys=True, separators=(',', ':'))
    return base64.b64encode(raw.encode('utf-8')).decode('ascii')
