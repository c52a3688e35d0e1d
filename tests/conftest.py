"""
Pytest configuration and shared fixtures for jsonwarden tests.

Provides immutable test case containers and the facade, codec and linter
instances the test modules share.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from jsonwarden import ErrorKind
from jsonwarden import Json
from jsonwarden import Linter
from jsonwarden import NativeCodec


@dataclass(frozen=True)
class JsonCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    ``kind`` names the error a failing case must raise.
    """

    description: str
    input_data: Any
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""
    kind: ErrorKind | None = None


@pytest.fixture
def facade() -> Json:
    """Provides a facade with default collaborators."""
    return Json()


@pytest.fixture
def codec() -> NativeCodec:
    return NativeCodec()


@pytest.fixture
def linter() -> Linter:
    return Linter()


@pytest.fixture
def json_fail_cases() -> list[JsonCase]:
    """
    Provides JSON strings that must fail linting and decoding.

    These cases from json.org JSON_checker ensure strict standards compliance
    and proper error reporting for malformed JSON.
    """
    fail_docs = [
        # https://json.org/JSON_checker/test/fail1.json
        '"A JSON payload should be an object or array, not a string."',
        # https://json.org/JSON_checker/test/fail2.json
        '["Unclosed array"',
        # https://json.org/JSON_checker/test/fail3.json
        '{unquoted_key: "keys must be quoted"}',
        # https://json.org/JSON_checker/test/fail4.json
        '["extra comma",]',
        # https://json.org/JSON_checker/test/fail5.json
        '["double extra comma",,]',
        # https://json.org/JSON_checker/test/fail6.json
        '[   , "<-- missing value"]',
        # https://json.org/JSON_checker/test/fail7.json
        '["Comma after the close"],',
        # https://json.org/JSON_checker/test/fail8.json
        '["Extra close"]]',
        # https://json.org/JSON_checker/test/fail9.json
        '{"Extra comma": true,}',
        # https://json.org/JSON_checker/test/fail10.json
        '{"Extra value after close": true} "misplaced quoted value"',
        # https://json.org/JSON_checker/test/fail11.json
        '{"Illegal expression": 1 + 2}',
        # https://json.org/JSON_checker/test/fail12.json
        '{"Illegal invocation": alert()}',
        # https://json.org/JSON_checker/test/fail13.json
        '{"Numbers cannot have leading zeroes": 013}',
        # https://json.org/JSON_checker/test/fail14.json
        '{"Numbers cannot be hex": 0x14}',
        # https://json.org/JSON_checker/test/fail15.json
        '["Illegal backslash escape: \\x15"]',
        # https://json.org/JSON_checker/test/fail16.json
        "[\\naked]",
        # https://json.org/JSON_checker/test/fail17.json
        '["Illegal backslash escape: \\017"]',
        # https://json.org/JSON_checker/test/fail18.json
        '[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]',
        # https://json.org/JSON_checker/test/fail19.json
        '{"Missing colon" null}',
        # https://json.org/JSON_checker/test/fail20.json
        '{"Double colon":: null}',
        # https://json.org/JSON_checker/test/fail21.json
        '{"Comma instead of colon", null}',
        # https://json.org/JSON_checker/test/fail22.json
        '["Colon instead of comma": false]',
        # https://json.org/JSON_checker/test/fail23.json
        '["Bad value", truth]',
        # https://json.org/JSON_checker/test/fail24.json
        "['single quote']",
        # https://json.org/JSON_checker/test/fail25.json
        '["\ttab\tcharacter\tin\tstring\t"]',
        # https://json.org/JSON_checker/test/fail26.json
        '["tab\\   character\\   in\\  string\\  "]',
        # https://json.org/JSON_checker/test/fail27.json
        '["line\nbreak"]',
        # https://json.org/JSON_checker/test/fail28.json
        '["line\\\nbreak"]',
        # https://json.org/JSON_checker/test/fail29.json
        "[0e]",
        # https://json.org/JSON_checker/test/fail30.json
        "[0e+]",
        # https://json.org/JSON_checker/test/fail31.json
        "[0e+-1]",
        # https://json.org/JSON_checker/test/fail32.json
        '{"Comma instead if closing brace": true,',
        # https://json.org/JSON_checker/test/fail33.json
        '["mismatch"}',
        # https://code.google.com/archive/p/simplejson/issues/3
        '["A\u001fZ control characters in string"]',
    ]

    # Scalar payloads and nesting limits are left to the caller
    skips = {
        1: "scalar payloads are valid JSON",
        18: "nesting is only limited by max_depth",
    }

    return [
        JsonCase(
            description=f"fail{idx + 1}.json",
            input_data=doc,
            should_fail=True,
            skip_reason=skips.get(idx + 1, ""),
        )
        for idx, doc in enumerate(fail_docs)
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonCase]:
    """
    Provides JSON strings that must lint and decode successfully.

    These test cases validate standards compliance for valid JSON structures.
    """
    return [
        JsonCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
        ),
        JsonCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonCase]:
    """
    Provides basic JSON value test cases for fundamental decoding.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonCase("null value", "null", False, None),
        JsonCase("true boolean", "true", False, True),
        JsonCase("false boolean", "false", False, False),
        JsonCase("integer", "42", False, 42),
        JsonCase("negative integer", "-17", False, -17),
        JsonCase("float", "3.14", False, 3.14),
        JsonCase("empty string", '""', False, ""),
        JsonCase("simple string", '"hello"', False, "hello"),
        JsonCase("empty array", "[]", False, []),
        JsonCase("empty object", "{}", False, {}),
        JsonCase("simple array", "[1, 2, 3]", False, [1, 2, 3]),
        JsonCase("simple object", '{"key": "value"}', False, {"key": "value"}),
    ]


@pytest.fixture
def decode_failure_cases() -> list[JsonCase]:
    """
    Provides inputs that fail decoding with default options.

    Each case names the error kind the facade must report.
    """
    return [
        JsonCase("wrong closer", "[1}", True, kind=ErrorKind.MALFORMED),
        JsonCase("mismatch", '["mismatch"}', True, kind=ErrorKind.MALFORMED),
        JsonCase("object closer", '{"a": 1]', True, kind=ErrorKind.MALFORMED),
        JsonCase("empty mismatch", "[}", True, kind=ErrorKind.MALFORMED),
        JsonCase(
            "raw NUL in string",
            '["\x00test"]',
            True,
            kind=ErrorKind.CONTROL_CHARACTER,
        ),
        JsonCase(
            "raw NUL outside string",
            "[1, \x00]",
            True,
            kind=ErrorKind.CONTROL_CHARACTER,
        ),
        JsonCase(
            "other control outside string",
            "[\x01]",
            True,
            kind=ErrorKind.SYNTAX,
        ),
        JsonCase("unterminated", "[", True, kind=ErrorKind.SYNTAX),
        JsonCase("empty document", "", True, kind=ErrorKind.SYNTAX),
        JsonCase("missing colon", '{"a" 1}', True, kind=ErrorKind.SYNTAX),
        JsonCase("trailing comma", "[1,]", True, kind=ErrorKind.SYNTAX),
        JsonCase("NaN literal", "[NaN]", True, kind=ErrorKind.SYNTAX),
        JsonCase("Infinity", "Infinity", True, kind=ErrorKind.SYNTAX),
        JsonCase("-Infinity", "[-Infinity]", True, kind=ErrorKind.SYNTAX),
        JsonCase("extra data", "[1] [2]", True, kind=ErrorKind.SYNTAX),
        JsonCase(
            "invalid lead byte",
            b'["\xc1"]',
            True,
            kind=ErrorKind.INVALID_ENCODING,
        ),
        JsonCase(
            "truncated sequence",
            b'["\xe2\x82"]',
            True,
            kind=ErrorKind.INVALID_ENCODING,
        ),
        JsonCase(
            "lone surrogate in text",
            '["\ud800"]',
            True,
            kind=ErrorKind.INVALID_ENCODING,
        ),
    ]


def _self_referencing_list() -> list[Any]:
    value: list[Any] = [1]
    value.append(value)
    return value


def _self_referencing_dict() -> dict[str, Any]:
    value: dict[str, Any] = {"name": "loop"}
    value["self"] = value
    return value


@pytest.fixture
def encode_failure_cases() -> list[JsonCase]:
    """
    Provides values that fail encoding with default options.

    ``expected_output`` is the text returned once partial output is enabled,
    or None where the failure cannot be suppressed.
    """
    return [
        JsonCase(
            "self-referencing list",
            _self_referencing_list(),
            True,
            "[1,null]",
            kind=ErrorKind.RECURSION,
        ),
        JsonCase(
            "self-referencing dict",
            _self_referencing_dict(),
            True,
            '{"name":"loop","self":null}',
            kind=ErrorKind.RECURSION,
        ),
        JsonCase(
            "positive infinity",
            float("inf"),
            True,
            "0",
            kind=ErrorKind.NON_FINITE_NUMBER,
        ),
        JsonCase(
            "nested NaN",
            {"value": [1.5, float("nan")]},
            True,
            '{"value":[1.5,0]}',
            kind=ErrorKind.NON_FINITE_NUMBER,
        ),
        JsonCase(
            "set",
            {1, 2},
            True,
            "null",
            kind=ErrorKind.UNSUPPORTED_TYPE,
        ),
        JsonCase(
            "object member",
            ["a", object()],
            True,
            '["a",null]',
            kind=ErrorKind.UNSUPPORTED_TYPE,
        ),
        JsonCase(
            "tuple key",
            {(1, 2): "pair"},
            True,
            kind=ErrorKind.INVALID_KEY_NAME,
        ),
        JsonCase(
            "infinite key",
            {float("inf"): 1},
            True,
            kind=ErrorKind.INVALID_KEY_NAME,
        ),
    ]
