import json
from typing import Any, List, Tuple
from urllib.parse import urlencode

import yaml

FORMATS = ("json", "yaml", "query")


def to_json(value: Any, indent: int = 4) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def to_yaml(value: Any) -> str:
    return yaml.safe_dump(value, sort_keys=False, allow_unicode=True, default_flow_style=False)


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    if value is None:
        return ""
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]):
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def to_query_pairs(value: Any) -> List[Tuple[str, str]]:
    """
    Flattens a cleaned payload into bracket-notation form fields:
    {"list_of_objects": [{"key1": "John"}]} -> [("list_of_objects[0][key1]", "John")]
    """
    pairs: List[Tuple[str, str]] = []
    _flatten("", value, pairs)
    return pairs


def to_query_string(value: Any) -> str:
    return urlencode(to_query_pairs(value))


def render(value: Any, fmt: str) -> str:
    if fmt == "json":
        return to_json(value)
    if fmt == "yaml":
        return to_yaml(value)
    if fmt == "query":
        return to_query_string(value)
    raise ValueError(f"Unknown output format: {fmt} (expected one of {', '.join(FORMATS)})")
