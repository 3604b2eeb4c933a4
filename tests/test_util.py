import hashlib
import pytest
from petfinder.models import ResponseFormat
from petfinder.utils import build_query, convert_method, extract_token, get_signature, parse_param_pairs

def test_convert_method():
    assert convert_method("shelter_listByBreed") == "shelter.listByBreed"
    assert convert_method("pet_find") == "pet.find"
    assert convert_method("auth_getToken") == "auth.getToken"

def test_signature_matches_md5_of_ordered_input():
    expected = hashlib.md5(b"shhkey=abc&format=xml").hexdigest()
    assert get_signature("shh", "abc", "xml") == expected

def test_signature_without_secret():
    assert get_signature(None, "abc", "json") == hashlib.md5(b"key=abc&format=json").hexdigest()

def test_build_query_keeps_order_and_form_encodes():
    q = build_query({"key": "abc", "format": "xml", "location": "New York, NY"})
    assert q == "key=abc&format=xml&location=New+York%2C+NY"

def test_build_query_lists_nested_none_and_bools():
    q = build_query({"breed": ["Pug", "Boxer"], "opts": {"a": 1}, "token": None, "output": True})
    assert q == "breed%5B0%5D=Pug&breed%5B1%5D=Boxer&opts%5Ba%5D=1&output=1"

def test_extract_token_json():
    body = '{"petfinder":{"auth":{"token":{"$t":"tok123"},"expires":{"$t":"1"}}}}'
    assert extract_token(body, ResponseFormat.JSON) == "tok123"

def test_extract_token_xml():
    body = "<petfinder><auth><token>tok456</token><expires>1</expires></auth></petfinder>"
    assert extract_token(body, ResponseFormat.XML) == "tok456"

def test_extract_token_missing_or_wrong_format():
    assert extract_token("", ResponseFormat.XML) is None
    assert extract_token(None, ResponseFormat.JSON) is None
    assert extract_token("<token>x</token>", ResponseFormat.JSON) is None

def test_parse_param_pairs():
    assert parse_param_pairs(["animal=dog", "breed=Pug", "breed=Boxer", "q=a=b"]) == {
        "animal": "dog",
        "breed": ["Pug", "Boxer"],
        "q": "a=b",
    }
    with pytest.raises(ValueError):
        parse_param_pairs(["novalue"])

def test_response_format_parse():
    assert ResponseFormat.parse("json") is ResponseFormat.JSON
    assert ResponseFormat.parse(ResponseFormat.XML) is ResponseFormat.XML
    assert ResponseFormat.parse("yaml") is None

def test_build_query_escapes_tilde():
    assert build_query({"location": "~home"}) == "location=%7Ehome"
