"""
JSON/YAML helpers for value trees (Symbol, Pair, lists and atoms).

The sexp printed form in `wgutil.sexp` is the persistence format. This
module gives the same trees a lossless JSON/YAML rendition for
inspection and export, via an intermediate structure of plain dicts
and lists. The tagged-dict shapes are kept stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any

import yaml

from wgutil.forms import Pair, Symbol


def form_to_data(form: Any) -> Any:
    if form is None or isinstance(form, (bool, int, float, str)):
        return form
    if isinstance(form, Symbol):
        return {"type": "symbol", "name": form.name}
    if isinstance(form, Pair):
        return {
            "type": "pair",
            "key": form_to_data(form.key),
            "value": form_to_data(form.value),
        }
    if isinstance(form, (list, tuple)):
        return [form_to_data(item) for item in form]
    if hasattr(form, "to_form"):
        return form_to_data(form.to_form())
    raise TypeError(f"Unsupported form type: {type(form)}")


def form_from_data(d: Any) -> Any:
    if d is None or isinstance(d, (bool, int, float, str)):
        return d
    if isinstance(d, list):
        return [form_from_data(item) for item in d]
    if isinstance(d, dict):
        t = d.get("type")
        if t == "symbol":
            return Symbol(d["name"])
        if t == "pair":
            return Pair(form_from_data(d["key"]), form_from_data(d["value"]))
        raise TypeError(f"Unsupported form dict type: {t}")
    raise TypeError(f"Unsupported form data: {type(d)}")


def form_to_json(form: Any) -> str:
    return json.dumps(form_to_data(form), sort_keys=True)


def form_from_json(s: str) -> Any:
    d = json.loads(s)
    return form_from_data(d)


def form_to_yaml(form: Any) -> str:
    return yaml.safe_dump(form_to_data(form))


def form_from_yaml(s: str) -> Any:
    d = yaml.safe_load(s)
    return form_from_data(d)


__all__ = [
    "form_to_data",
    "form_from_data",
    "form_to_json",
    "form_from_json",
    "form_to_yaml",
    "form_from_yaml",
]
