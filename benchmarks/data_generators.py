"""
Test data generators for rewrite benchmarks.

Creates JSON documents the way Python's json module writes them, with varying
densities of tokens the rewrite has to neutralize:
- Clean documents with nothing to rewrite
- Float-heavy documents sprinkled with NaN and +/-Infinity
- Documents carrying integers past the 64-bit range
- String-heavy documents whose strings mention the constants
"""

import json
import math
import random
import string
from typing import Any

# Constants for random data generation
_CONSTANT_PROBABILITY = 0.2
_BIG_INT_PROBABILITY = 0.3
_CONSTANTS = [math.nan, math.inf, -math.inf]


def generate_test_data(data_type: str) -> bytes:
    """Generates a UTF-8 JSON document of the given shape."""
    generators = {
        "clean_object": _generate_clean_object,
        "constant_heavy": _generate_constant_heavy,
        "big_integers": _generate_big_integers,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(generators[data_type]()).encode("utf-8")


def _random_string(length: int) -> str:
    """Generates a random ASCII string."""
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def _generate_clean_object() -> dict[str, Any]:
    """Generates an object with nothing to rewrite."""
    return {
        "records": [
            {
                "id": i,
                "name": _random_string(12),
                "score": round(random.uniform(0, 100), 3),
                "active": random.choice([True, False]),
                "tags": [_random_string(5) for _ in range(3)],
            }
            for i in range(500)
        ]
    }


def _generate_constant_heavy() -> dict[str, Any]:
    """Generates measurement series where some readings are NaN or infinite."""

    def reading() -> float:
        if random.random() < _CONSTANT_PROBABILITY:
            return random.choice(_CONSTANTS)
        return random.uniform(-1000.0, 1000.0)

    return {
        "series": {
            f"sensor_{i}": [reading() for _ in range(100)] for i in range(50)
        }
    }


def _generate_big_integers() -> dict[str, Any]:
    """Generates identifiers some of which overflow 64 bits."""

    def identifier() -> int:
        if random.random() < _BIG_INT_PROBABILITY:
            return random.randint(2**64, 2**128)
        return random.randint(0, 2**63)

    return {"ids": [identifier() for _ in range(5000)]}


def _generate_string_heavy() -> dict[str, Any]:
    """Generates strings that mention the constants without being them."""
    words = ["NaN", "Infinity", "-Infinity", "12345678901234567890123", "\\"]
    return {
        f"key_{i}": " ".join(random.choices(words, k=20)) + _random_string(10)
        for i in range(500)
    }
