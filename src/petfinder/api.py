"""
Blocking client for the Petfinder API (v1).

Provides one method per remote operation:
- `auth_get_token`, `breed_list`
- `pet_get`, `pet_get_random`, `pet_find`
- `shelter_find`, `shelter_get`, `shelter_get_pets`, `shelter_list_by_breed`

Every method returns the raw response body (JSON or XML text) unparsed.
Methods taking a single conventional parameter (animal, id, location) accept
either that value alone or a full parameter mapping.

The token and last request are plain instance state and are not safe for
unsynchronized use from several threads; guard the client with a lock or give
each thread its own instance.
"""
from __future__ import annotations
import dataclasses, sys
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from http_client import HttpClient

from .errors import AuthenticationExtractionFailure, ConfigurationError
from .models import API_URL, ClientConfig, Fetcher, Params, ParamsInput, ResponseFormat
from .utils import build_query, convert_method, extract_token, get_signature, to_scalar

AUTH_METHOD = "auth_getToken"

def _normalize(data: Optional[ParamsInput], key: str) -> Dict[str, Any]:
    # only str/int (or bool, sent as 1/0) scalars; anything else goes in a mapping
    if isinstance(data, Mapping):
        return dict(data)
    if isinstance(data, (list, tuple)):
        raise TypeError(f"expected a scalar or a mapping for {key!r}, got {type(data).__name__}")
    return {key: "" if data is None else to_scalar(data)}

class PetfinderAPI:

    def __init__(
        self,
        api_key: str,
        api_secret: Optional[str] = None,
        *,
        response_format: Union[str, ResponseFormat] = ResponseFormat.XML,
        transport: Optional[Fetcher] = None,
        base_url: str = API_URL,
        methods_requiring_token: Iterable[str] = (),
        strict_token: bool = False,
    ):
        fmt = ResponseFormat.parse(response_format)
        if fmt is None:
            raise ConfigurationError(f"invalid response format: {response_format!r}")
        self.config = ClientConfig(
            api_key=api_key,
            api_secret=api_secret,
            response_format=fmt,
            base_url=base_url,
            methods_requiring_token=frozenset(convert_method(m) for m in methods_requiring_token),
        )
        self.strict_token = strict_token
        self._owns_transport = transport is None
        self.transport: Fetcher = transport if transport is not None else HttpClient()
        self._token: Optional[str] = None
        self._last_request: Optional[str] = None

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "PetfinderAPI":
        return cls(
            config.api_key,
            config.api_secret,
            response_format=config.response_format,
            base_url=config.base_url,
            methods_requiring_token=config.methods_requiring_token,
            **kwargs,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        # only close a transport we created ourselves
        if self._owns_transport and isinstance(self.transport, HttpClient):
            self.transport.close()

    # state accessors

    @property
    def response_format(self) -> ResponseFormat:
        return self.config.response_format

    def set_response_format(self, fmt: Union[str, ResponseFormat]) -> bool:
        """Switch between json and xml. Returns False, leaving the format as is, for anything else."""
        parsed = ResponseFormat.parse(fmt)
        if parsed is None:
            return False
        self.config = dataclasses.replace(self.config, response_format=parsed)
        return True

    def get_last_request(self) -> Optional[str]:
        return self._last_request

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> bool:
        self._token = token
        return True

    # remote operations

    def auth_get_token(self) -> str:
        """Returns a token valid for a timed session."""
        return self._call_method(AUTH_METHOD, {"sig": self.get_signature()})

    def breed_list(self, data: ParamsInput) -> str:
        """Returns a list of breeds for a particular animal."""
        return self._call_method("breed_list", _normalize(data, "animal"))

    def pet_get(self, data: ParamsInput) -> str:
        """Returns a record for a single pet."""
        return self._call_method("pet_get", _normalize(data, "id"))

    def pet_get_random(self, data: Optional[Params] = None) -> str:
        """Returns a record for a randomly selected pet."""
        return self._call_method("pet_getRandom", dict(data or {}))

    def pet_find(self, data: ParamsInput) -> str:
        """Returns a collection of pet records near a location."""
        return self._call_method("pet_find", _normalize(data, "location"))

    def shelter_find(self, data: ParamsInput) -> str:
        """Returns a collection of shelter records near a location."""
        return self._call_method("shelter_find", _normalize(data, "location"))

    def shelter_get(self, data: ParamsInput) -> str:
        """Returns a record for a single shelter."""
        return self._call_method("shelter_get", _normalize(data, "id"))

    def shelter_get_pets(self, data: ParamsInput) -> str:
        """Returns a list of IDs or pet records for an individual shelter."""
        return self._call_method("shelter_getPets", _normalize(data, "id"))

    def shelter_list_by_breed(self, data: Params) -> str:
        """Returns a list of shelter IDs listing animals of a particular breed."""
        return self._call_method("shelter_listByBreed", dict(data or {}))

    # request building

    def requires_token(self, method: str) -> bool:
        name = convert_method(method)
        return name != convert_method(AUTH_METHOD) and name in self.config.methods_requiring_token

    def get_signature(self) -> str:
        return get_signature(self.config.api_secret, self.config.api_key, self.config.response_format.value)

    def build_request(self, method: str, data: Optional[Params] = None) -> str:
        """
        base url + dotted method + query.
        key and format always lead the query; caller data may override their values.
        """
        params: Dict[str, Any] = {
            "key": self.config.api_key,
            "format": self.config.response_format.value,
        }
        params.update(data or {})
        return f"{self.config.base_url}{convert_method(method)}?{build_query(params)}"

    def _fetch_token(self) -> Optional[str]:
        body = self.auth_get_token()
        token = extract_token(body, self.config.response_format)
        if token is not None:
            self.set_token(token)
        elif self.strict_token:
            raise AuthenticationExtractionFailure(self.config.response_format.value, body)
        else:
            print(f"[warn] no token in auth.getToken {self.config.response_format.value} response", file=sys.stderr)
        return token

    def _call_method(self, method: str, data: Optional[Dict[str, Any]] = None) -> str:
        data = dict(data or {})

        if self.requires_token(method):
            if not self.get_token():
                self._fetch_token()
            data["token"] = self.get_token()

        request = self.build_request(method, data)
        if method == AUTH_METHOD:
            request = request.replace("&amp;", "&")
        self._last_request = request
        return self.transport.fetch(request)
