from __future__ import annotations
import hashlib, re
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus

from .models import ParamValue, Params, ResponseFormat

JSON_TOKEN_RE = re.compile(r'"token":\{"\$t":"(.*?)"\}')
XML_TOKEN_RE = re.compile(r"<token>(.*?)</token>")

def convert_method(method: str) -> str:
    """Map a method identifier to the remote operation name: pet_find -> pet.find."""
    return method.replace("_", ".")

def get_signature(api_secret: Optional[str], api_key: str, response_format: str) -> str:
    """
    md5 of secret + "key=" + key + "&format=" + format.
    The service recomputes this from the query, so the order is fixed.
    """
    raw = f"{api_secret or ''}key={api_key}&format={response_format}"
    return hashlib.md5(raw.encode("utf-8")).hexdigest()

def to_scalar(value: ParamValue) -> str:
    """String form of a query value, PHP-style: True -> "1", False -> "0"."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, ResponseFormat):
        return value.value
    return str(value)

def flatten_params(params: Params, prefix: Optional[str] = None) -> Iterable[Tuple[str, str]]:
    """
    Yield (key, value) pairs in insertion order.
    Lists become key[0], key[1]...; mappings become key[sub]; None values are dropped.
    """
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            yield from flatten_params(value, name)
        elif isinstance(value, (list, tuple)):
            yield from flatten_params({str(i): v for i, v in enumerate(value)}, name)
        else:
            yield name, to_scalar(value)

def _encode(text: str) -> str:
    # PHP urlencode also escapes "~"
    return quote_plus(text).replace("~", "%7E")

def build_query(params: Params) -> str:
    """Encode params the way PHP's http_build_query does (form encoding, '+' for spaces)."""
    return "&".join(f"{_encode(k)}={_encode(v)}" for k, v in flatten_params(params))

def _extract(pattern: re.Pattern) -> Callable[[Optional[str]], Optional[str]]:
    def extractor(body: Optional[str]) -> Optional[str]:
        if not body:
            return None
        m = pattern.search(body)
        return m.group(1) if m else None
    return extractor

# one narrow extractor per response format
TOKEN_EXTRACTORS: Dict[ResponseFormat, Callable[[Optional[str]], Optional[str]]] = {
    ResponseFormat.JSON: _extract(JSON_TOKEN_RE),
    ResponseFormat.XML: _extract(XML_TOKEN_RE),
}

def extract_token(body: Optional[str], response_format: ResponseFormat) -> Optional[str]:
    """Pull the session token out of a raw auth.getToken body; None if absent."""
    return TOKEN_EXTRACTORS[response_format](body)

def parse_param_pairs(pairs: List[str]) -> Dict[str, ParamValue]:
    """
    Turn ["animal=dog", "breed=Pug", "breed=Boxer"] into a mapping.
    Repeated keys collect into a list, in the order given.
    """
    out: Dict[str, ParamValue] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected key=value, got {pair!r}")
        if key in out:
            prev = out[key]
            out[key] = (prev if isinstance(prev, list) else [prev]) + [value]
        else:
            out[key] = value
    return out
