"""
Benchmark suite for json_read_adapter rewrite performance.

Compares rewrite + decode pipelines against plain decoders:
- Python standard library json (accepts NaN/Infinity natively)
- orjson (C-optimized, needs the rewrite)
- ujson (ultra-fast JSON)

Measures rewrite speed and memory usage across different document shapes.
"""
