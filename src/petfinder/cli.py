"""
Command-line entrypoint for the Petfinder client.

- Parses CLI args and env config
- Initializes HttpClient and PetfinderAPI
- Calls one remote operation and writes the raw body to stdout

Configuration errors exit with 2, HTTP errors with 1.
"""
from __future__ import annotations
import argparse, sys
from typing import Any, Dict

import httpx

from http_client import HttpClient

from .api import PetfinderAPI
from .config import OPERATIONS, parse_args
from .errors import ConfigurationError, PetfinderError
from .utils import parse_param_pairs

# operations whose single positional value maps to a conventional key
SCALAR_KEYS = {
    "breed.list": "animal",
    "pet.get": "id",
    "pet.find": "location",
    "shelter.find": "location",
    "shelter.get": "id",
    "shelter.getPets": "id",
}

def build_params(args: argparse.Namespace) -> Dict[str, Any]:
    try:
        params = parse_param_pairs(args.param)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    if args.value is not None:
        key = SCALAR_KEYS.get(args.operation)
        if key is None:
            raise ConfigurationError(f"{args.operation} takes --param options only")
        params.setdefault(key, args.value)
    return params

def run(args: argparse.Namespace) -> str:
    if not args.api_key:
        raise ConfigurationError("missing API key (--api-key or PETFINDER_API_KEY)")
    params = build_params(args)

    with HttpClient(connect_timeout=args.connect_timeout, read_timeout=args.read_timeout) as http:
        api = PetfinderAPI(
            args.api_key,
            args.api_secret,
            response_format=args.response_format,
            transport=http,
            base_url=args.base_url,
            methods_requiring_token=args.token_methods,
        )
        if args.token:
            api.set_token(args.token)

        method = getattr(api, OPERATIONS[args.operation])
        try:
            if args.operation == "auth.getToken":
                return method()
            return method(params)
        finally:
            if args.show_request:
                print(api.get_last_request(), file=sys.stderr)

def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        body = run(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)
    except httpx.HTTPError as e:
        print(f"HTTP error: {e}", file=sys.stderr)
        sys.exit(1)
    except PetfinderError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        sys.exit(130)
    sys.stdout.write(body)
    if body and not body.endswith("\n"):
        sys.stdout.write("\n")

if __name__ == "__main__":
    main()
