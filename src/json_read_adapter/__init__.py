"""
Length-preserving adapter that turns Python-flavoured JSON into valid JSON.

Python's json module happily emits NaN, Infinity and -Infinity, and other
producers emit integers no 64-bit decoder accepts. This package rewrites those
tokens in place into 0 padded with spaces, so the document keeps its exact
byte length and every offset stays where it was:

    {"nan":NaN,"inf":Infinity,"-inf":-Infinity}
    {"nan":0  ,"inf":0       ,"-inf":-0       }

The rewrite works on a whole mutable buffer (translate) or incrementally on a
byte stream (IncrementalTranslator, JsonCompatReader). loads and load chain the
rewrite with a standard JSON decoder.
"""

import io
import json
import os
import time
from collections.abc import Buffer
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO
from typing import Any

import orjson

from json_read_adapter._logger import get_logger
from json_read_adapter._scanner import INITIAL
from json_read_adapter._scanner import Literal
from json_read_adapter._scanner import ScanMode
from json_read_adapter._scanner import ScanState
from json_read_adapter._scanner import finish
from json_read_adapter._scanner import pending_start
from json_read_adapter._scanner import rebase
from json_read_adapter._scanner import translate_range

__version__ = "0.1.0"

logger = get_logger(__name__)

ParseFloatHook = Callable[[str], Any] | None
ParseIntHook = Callable[[str], Any] | None
ObjectHook = Callable[[dict[str, Any]], Any] | None
ObjectPairsHook = Callable[[list[tuple[str, Any]]], Any] | None

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JSON_READ_ADAPTER_PROFILE" in os.environ

BACKENDS = ("json", "orjson")
DEFAULT_BACKEND = os.environ.get("JSON_READ_ADAPTER_BACKEND", "json")


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during rewriting."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        """Records a function call with timing and byte count."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, nbytes: int = 0):
            self.func_name = func_name
            self.nbytes = nbytes
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.nbytes)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, nbytes: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


def translate(buf: Buffer) -> None:
    """
    Rewrites NaN, Infinity and oversized integers in a buffer, in place.

    Accepts any writable bytes-like object. The buffer keeps its length;
    string contents and every other byte are left untouched.
    """
    msg = f"a writable bytes-like object is required, not {type(buf).__name__}"
    if isinstance(buf, str):
        raise TypeError(msg)
    try:
        view = memoryview(buf)
    except TypeError as e:
        raise TypeError(msg) from e

    with view:
        if view.readonly:
            raise TypeError(f"{msg} (read-only)")
        if not view.c_contiguous:
            raise TypeError(f"{msg} (non-contiguous)")
        with view.cast("B") as data, ProfileContext("translate", len(data)):
            state = translate_range(data, INITIAL, 0, len(data))
            finish(data, state, len(data))


def translate_bytes(data: bytes | bytearray | memoryview) -> bytes:
    """Returns a rewritten copy of an immutable bytes-like object."""
    buf = bytearray(memoryview(data))
    translate(buf)
    return bytes(buf)


class IncrementalTranslator:
    """
    Rewrites a byte stream chunk by chunk.

    Bytes of a literal prefix or digit run that a later chunk could still
    complete are held back until their fate is known, so tokens split across
    chunk boundaries come out exactly as translate() would produce them.
    Literal holdback never exceeds seven bytes; a digit run is held whole.
    """

    def __init__(self) -> None:
        self.state: ScanState = INITIAL
        self._held = bytearray()
        self._finished = False

    @property
    def pending(self) -> int:
        """Number of bytes currently held back."""
        return len(self._held)

    def feed(self, chunk: bytes | bytearray | memoryview) -> bytes:
        """Translates a chunk and returns every byte whose final value is known."""
        if self._finished:
            raise RuntimeError("feed() called after flush()")

        with ProfileContext("feed", memoryview(chunk).nbytes):
            begin = len(self._held)
            self._held += chunk
            end = len(self._held)
            self.state = translate_range(self._held, self.state, begin, end)

            cut = pending_start(self.state, end)
            released = bytes(self._held[:cut])
            del self._held[:cut]
            self.state = rebase(self.state, cut)
            return released

    def flush(self) -> bytes:
        """Closes any open token at end of stream and returns the held bytes."""
        if self._finished:
            return b""
        self._finished = True

        finish(self._held, self.state, len(self._held))
        released = bytes(self._held)
        self._held.clear()
        self.state = INITIAL
        return released


def iter_translate(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Yields translated output for an iterable of byte chunks."""
    translator = IncrementalTranslator()
    for chunk in chunks:
        out = translator.feed(chunk)
        if out:
            yield out
    tail = translator.flush()
    if tail:
        yield tail


class JsonCompatReader(io.RawIOBase):
    """
    Binary reader that rewrites a wrapped byte source on the fly.

    Can be handed to anything that consumes a binary file object, including
    json.load and io.BufferedReader. The reader owns its source: reading the
    source elsewhere while wrapped scrambles the output.
    """

    def __init__(
        self,
        source: IO[bytes],
        chunk_size: int = io.DEFAULT_BUFFER_SIZE,
        close_source: bool = True,
    ) -> None:
        super().__init__()
        self._close_source = False
        if not hasattr(source, "read"):
            raise TypeError("source must have a read() method")
        if chunk_size <= 0:
            raise ValueError("chunk_size must be a positive integer")

        self._source = source
        self._chunk_size = chunk_size
        self._close_source = close_source
        self._translator = IncrementalTranslator()
        self._ready = bytearray()
        self._eof = False

    @classmethod
    def wrap(cls, source: IO[bytes]) -> "JsonCompatReader":
        """Wraps a byte source with the default settings."""
        return cls(source)

    def readable(self) -> bool:
        return True

    def readinto(self, b: Any) -> int | None:
        if self.closed:
            raise ValueError("I/O operation on closed file")

        with memoryview(b) as view, view.cast("B") as target:
            size = len(target)
            if size == 0:
                return 0

            while not self._ready and not self._eof:
                chunk = self._source.read(max(size, self._chunk_size))
                if chunk is None:
                    # Non-blocking source with nothing available yet
                    return None
                if chunk:
                    self._ready += self._translator.feed(chunk)
                else:
                    self._eof = True
                    held = self._translator.pending
                    self._ready += self._translator.flush()
                    logger.debug("Source exhausted, released %d held bytes", held)

            n = min(size, len(self._ready))
            target[:n] = self._ready[:n]
            del self._ready[:n]
            return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._close_source:
                self._source.close()
        finally:
            super().close()


@dataclass(frozen=True)
class DecodeConfig:
    """
    Configures the decoder that runs after the rewrite.

    Hooks are forwarded to the stdlib json decoder; orjson takes none.
    """

    backend: str = DEFAULT_BACKEND
    parse_float: ParseFloatHook = None
    parse_int: ParseIntHook = None
    object_hook: ObjectHook = None
    object_pairs_hook: ObjectPairsHook = None

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            choices = ", ".join(BACKENDS)
            msg = f"backend must be one of {choices}, not {self.backend!r}"
            raise ValueError(msg)
        if self.backend == "orjson" and self.hooks():
            raise ValueError("decode hooks require the json backend")

    def hooks(self) -> dict[str, Any]:
        """Returns the hooks that were set, as json.loads keyword arguments."""
        hooks = {
            "parse_float": self.parse_float,
            "parse_int": self.parse_int,
            "object_hook": self.object_hook,
            "object_pairs_hook": self.object_pairs_hook,
        }
        return {name: hook for name, hook in hooks.items() if hook is not None}


def _decode(data: bytes | bytearray, config: DecodeConfig) -> Any:
    if config.backend == "orjson":
        return orjson.loads(data)
    return json.loads(data, **config.hooks())


def loads(data: str | bytes | bytearray | memoryview, **kwargs: Any) -> Any:
    """
    Rewrites then decodes a JSON document.

    A bytearray is rewritten in place, like any other buffer handed to
    translate(); str, bytes and memoryview inputs are copied first. Decoder
    errors propagate as json.JSONDecodeError.
    """
    config = DecodeConfig(**kwargs)

    if isinstance(data, str):
        buf = bytearray(data.encode("utf-8"))
    elif isinstance(data, bytearray):
        buf = data
    elif isinstance(data, bytes | memoryview):
        buf = bytearray(data)
    else:
        msg = (
            "the JSON object must be str, bytes or bytearray, "
            f"not {type(data).__name__}"
        )
        raise TypeError(msg)

    translate(buf)
    return _decode(buf, config)


def load(fp: IO[bytes], **kwargs: Any) -> Any:
    """
    Decodes JSON from a binary file object, rewriting it as it streams in.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")
    if isinstance(fp, io.TextIOBase):
        raise TypeError("fp must be opened in binary mode")

    config = DecodeConfig(**kwargs)
    with JsonCompatReader(fp, close_source=False) as reader:
        if config.backend == "orjson":
            return orjson.loads(reader.readall())
        return json.load(reader, **config.hooks())


__all__ = [
    "DecodeConfig",
    "HotPathStats",
    "IncrementalTranslator",
    "JsonCompatReader",
    "Literal",
    "ProfileContext",
    "ScanMode",
    "ScanState",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "iter_translate",
    "load",
    "loads",
    "translate",
    "translate_bytes",
]
