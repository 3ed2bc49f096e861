from __future__ import annotations

import json
import logging
import plistlib
from pathlib import Path
from typing import Any, Callable, Optional, Union
from xml.parsers.expat import ExpatError

import yaml

logger = logging.getLogger(__name__)

Collection = Union[dict, list]


def _parse_json(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))


def _parse_yaml(data: bytes) -> Any:
    return yaml.safe_load(data.decode("utf-8"))


def _parse_plist(data: bytes) -> Any:
    return plistlib.loads(data)


_parsers: dict[str, Callable[[bytes], Any]] = {
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".plist": _parse_plist,
}

_PARSE_ERRORS = (ValueError, ExpatError, yaml.YAMLError)


def _sniff(data: bytes) -> list[Callable[[bytes], Any]]:
    head = data.lstrip()[:16]
    if head.startswith(b"bplist") or head.startswith(b"<?xml") or head.startswith(b"<plist"):
        return [_parse_plist]
    return [_parse_json, _parse_yaml]


def read_collection(data: bytes, *, suffix: str = "") -> Optional[Collection]:
    """
    Interpret *data* as a mapping or an ordered sequence.

    The parser is picked by *suffix*; unknown suffixes fall back to sniffing
    the content. Returns ``None`` when nothing yields a dict or a list.
    """
    parser = _parsers.get(suffix.lower())
    candidates = [parser] if parser else _sniff(data)
    for parse in candidates:
        try:
            value = parse(data)
        except _PARSE_ERRORS as exc:
            logger.debug("Parser %s rejected data: %s", parse.__name__, exc)
            continue
        if isinstance(value, (dict, list)):
            return value
        logger.debug("Parser %s produced %s, not a collection", parse.__name__, type(value).__name__)
    return None


def read_collection_file(path: Path) -> Optional[Collection]:
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.debug("Cannot read resource %s: %s", path, exc)
        return None
    return read_collection(data, suffix=path.suffix)
