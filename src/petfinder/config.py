from __future__ import annotations
import argparse, os

from .models import API_URL, ResponseFormat

# CLI operation name -> PetfinderAPI method
OPERATIONS = {
    "auth.getToken": "auth_get_token",
    "breed.list": "breed_list",
    "pet.get": "pet_get",
    "pet.getRandom": "pet_get_random",
    "pet.find": "pet_find",
    "shelter.find": "shelter_find",
    "shelter.get": "shelter_get",
    "shelter.getPets": "shelter_get_pets",
    "shelter.listByBreed": "shelter_list_by_breed",
}

def operation_name(value: str) -> str:
    # accept pet.find or pet_find
    name = value.replace("_", ".")
    if name not in OPERATIONS:
        raise argparse.ArgumentTypeError(f"unknown operation {value!r} (choose from {', '.join(OPERATIONS)})")
    return name

def env_list(name: str) -> list[str]:
    # comma-separated env value, e.g. PETFINDER_TOKEN_METHODS=pet.get,pet.find
    return [v.strip() for v in os.getenv(name, "").split(",") if v.strip()]

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="petfinder", description="Petfinder API client")
    p.add_argument("operation", type=operation_name, help="remote operation, e.g. pet.find")
    p.add_argument("value", nargs="?", default=None, help="animal, id or location for single-parameter operations")
    p.add_argument("--param", "-p", action="append", default=[], metavar="KEY=VALUE",
                   help="extra request parameter; repeat a key to send a list")
    p.add_argument("--api-key", default=os.getenv("PETFINDER_API_KEY"))
    p.add_argument("--api-secret", default=os.getenv("PETFINDER_API_SECRET"))
    p.add_argument("--format", dest="response_format",
                   default=os.getenv("PETFINDER_FORMAT", ResponseFormat.XML.value))
    p.add_argument("--token", default=os.getenv("PETFINDER_TOKEN"))
    p.add_argument("--token-method", dest="token_methods", action="append", type=operation_name,
                   default=env_list("PETFINDER_TOKEN_METHODS"), metavar="OPERATION",
                   help="operation that sends the session token; repeatable")
    p.add_argument("--base-url", default=os.getenv("PETFINDER_BASE_URL", API_URL))
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))
    p.add_argument("--show-request", action="store_true", help="print the request URL to stderr")
    return p

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
