"""
Pytest configuration and shared fixtures for json_read_adapter tests.

Provides immutable rewrite cases shared by the whole-buffer, streaming and
decoding test modules.
"""

from dataclasses import dataclass

import pytest
from hypothesis import strategies as st


@dataclass(frozen=True)
class RewriteCase:
    """
    Immutable container for one rewrite expectation.

    Holds the raw input bytes and the exact bytes the rewrite must produce.
    """

    description: str
    input_data: bytes
    expected_output: bytes


U64_MAX = b"18446744073709551615"


@pytest.fixture
def rewrite_cases() -> list[RewriteCase]:
    """
    Provides documents whose non-standard tokens must be neutralized.
    """
    return [
        RewriteCase(
            "nan and infinities in an object",
            b'{"nan":NaN,"inf":Infinity,"-inf":-Infinity}',
            b'{"nan":0  ,"inf":0       ,"-inf":-0       }',
        ),
        RewriteCase(
            "only the bare NaN is rewritten",
            b'{"nan":"nan","Infinity":"-Infinity","other":NaN}',
            b'{"nan":"nan","Infinity":"-Infinity","other":0  }',
        ),
        RewriteCase("bare NaN document", b"NaN", b"0" + b" " * 2),
        RewriteCase("bare Infinity document", b"Infinity", b"0" + b" " * 7),
        RewriteCase(
            "array of constants",
            b"[Infinity, -Infinity, NaN]",
            b"[0       , -0       , 0  ]",
        ),
        RewriteCase(
            "115-digit integer",
            b"9" * 115,
            b"0" + b" " * 114,
        ),
        RewriteCase(
            "one past the u64 maximum",
            b"[18446744073709551616]",
            b"[0" + b" " * 19 + b"]",
        ),
        RewriteCase(
            "negative oversized integer keeps its sign",
            b"[-18446744073709551616]",
            b"[-0" + b" " * 19 + b"]",
        ),
        RewriteCase(
            "oversized integer as object value",
            b'{"id": 123456789012345678901234567890, "ok": true}',
            b'{"id": 0' + b" " * 29 + b', "ok": true}',
        ),
        RewriteCase(
            "aborted prefix followed by NaN",
            b"NNaN",
            b"N0  ",
        ),
        RewriteCase(
            "aborted prefix followed by Infinity",
            b"IInfinity",
            b"I0       ",
        ),
        RewriteCase(
            "escaped backslash closes the string",
            b'["a\\\\",NaN]',
            b'["a\\\\",0  ]',
        ),
        RewriteCase(
            "oversized exponent digits",
            b"[1e123456789012345678901]",
            b"[1e0" + b" " * 20 + b"]",
        ),
    ]


@pytest.fixture
def passthrough_cases() -> list[RewriteCase]:
    """
    Provides documents the rewrite must leave byte-for-byte intact.
    """
    docs = [
        ("escaped quotes inside a string", b'"NaN\\"NaN\\"NaN"'),
        ("prefix overlap without a full match", b"Inferior"),
        ("truncated NaN", b"[Na"),
        ("truncated Infinity", b"Infinit"),
        ("lowercase constants", b"[nan, infinity]"),
        ("large float", b"9999999999999999999999999999.99999"),
        ("exponent", b"999999999E10"),
        ("negative exponent", b"999999999E-10"),
        ("lowercase exponent", b"999999999e-10"),
        ("u64 maximum", b"[" + U64_MAX + b"]"),
        ("i64 minimum", b"[-9223372036854775808]"),
        ("leading zeros", b"[000000000000000000000001]"),
        ("digits inside a string", b'["99999999999999999999999999"]'),
        ("constants inside keys", b'{"NaN": 1, "Infinity": 2}'),
        ("string after digits", b'123"NaN"'),
        ("empty document", b""),
        ("unicode text", '{"name": "Ünïcödé NaN ∞"}'.encode()),
    ]
    return [RewriteCase(desc, doc, doc) for desc, doc in docs]


_SOUP_TOKENS = [
    b"NaN",
    b"Infinity",
    b"-Infinity",
    b"N",
    b"Na",
    b"Inf",
    b'"',
    b"\\",
    b"1",
    b"9" * 25,
    b".",
    b"e",
    b"E",
    b"-",
    b",",
    b"[",
    b"]",
    b" ",
]

# Byte strings dense in constants, digit runs, quotes and escapes
token_soup = st.lists(st.sampled_from(_SOUP_TOKENS), max_size=60).map(
    b"".join
)
