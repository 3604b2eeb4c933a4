"""
Types shared by the Petfinder client.

Includes:
- ResponseFormat: the two payload formats the service can return
- ClientConfig: credentials plus request-building configuration
- Params / ParamsInput: operation parameters, scalar or mapping
- Fetcher: the transport capability the client delegates to

"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Mapping, Optional, Protocol, Union

API_URL = "http://api.petfinder.com/"

class ResponseFormat(str, Enum):
    JSON = "json"
    XML = "xml"

    @classmethod
    def parse(cls, value: Union[str, "ResponseFormat"]) -> Optional["ResponseFormat"]:
        """Return the matching member, or None for anything else."""
        try:
            return cls(value)
        except ValueError:
            return None

# Query values: scalars, lists (key[0]=...), nested mappings (key[sub]=...)
ParamValue = Union[str, int, float, bool, None, List["ParamValue"], Mapping[str, "ParamValue"]]
Params = Mapping[str, ParamValue]

# operation input: a bare animal / id / location, or a full mapping
Scalar = Union[str, int]
ParamsInput = Union[Scalar, Params]

@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    api_secret: Optional[str] = None
    response_format: ResponseFormat = ResponseFormat.XML
    base_url: str = API_URL
    methods_requiring_token: FrozenSet[str] = field(default_factory=frozenset)

class Fetcher(Protocol):
    def fetch(self, url: str) -> str: ...
