from __future__ import annotations

import json
from typing import Any

import orjson

from domain.models import CircuitLayout


def dump_json_bytes(payload: Any) -> bytes:
    try:
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    except TypeError:
        return json.dumps(payload, ensure_ascii=True, default=str, indent=2).encode("utf-8")


def dump_layout(layout: CircuitLayout, title: str | None = None) -> bytes:
    payload = layout.to_dict()
    if title:
        payload["title"] = title
    return dump_json_bytes(payload)
