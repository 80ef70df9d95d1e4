# nbodymap

Building blocks for laying out large citation graphs ("maps" of papers) with
a force-directed n-body simulation. Pure Python, no third-party dependencies.

## What is inside

- `nbodymap.blob`: little-endian integer packing for binary reference blobs.
  `decode_le16(buf, offset=0)` and `decode_le32(buf, offset=0)` read unsigned
  integers and raise `ValueError` if the buffer is too short;
  `encode_le16(value)` and `encode_le32(value)` keep the low 16 or 32 bits.
- `nbodymap.strhash`: `strhash(data)`, the 32-bit FNV-1a hash of a `str`
  (hashed as UTF-8) or `bytes`; `None` hashes to 0.
- `nbodymap.hashmap`: `Hashmap`, which interns keys into unique
  `HashmapEntry` objects (`key`, `value`). `lookup_or_insert(key,
  allow_insert=True)` returns the entry, creating it with value 0 when
  allowed; empty keys give `None`. `clear_all_values(reset_value=0)` resets
  every value, and `len()` counts the entries.
- `nbodymap.jsmn`: a small non-strict JSON tokenizer. `tokenize(js,
  max_tokens=4000)` or `Parser(max_tokens).parse(js)` return a list of
  `Token` objects (`type`, `start`, `end`, `size`) with a `TokenType` of
  `PRIMITIVE`, `OBJECT`, `ARRAY` or `STRING`. Failures raise
  `TokenLimitError`, `InvalidJsonError` or `PartialJsonError`, all subclasses
  of `JsmnError` (a `ValueError` carrying the `position`).
- `nbodymap.jsonstream`: `JsonArrayReader` walks a seekable text stream that
  holds one JSON array of objects, one object at a time (`reset`,
  `next_object`, `count_entries`, iteration). Members of the current object
  are looked up by token index with `token_value`, `get_array_member`,
  `get_object_member`, `get_object_member_value`,
  `get_object_member_boolean` and `get_object_member_token`; values come back
  as `TokenValue` with a `ValueKind`. `open_json_file(filename)` opens a file
  as a reader, which is also a context manager. `skip_object(tokens, index)`
  steps over a whole value. Errors raise `JsonStreamError`.
- `nbodymap.quadtree`: `QuadTree(rng=None)`, a Barnes–Hut style quad tree.
  `build(nodes)` takes any objects with `x`, `y`, `mass` and `radius` and
  builds `QuadTreeNode` cells holding centre of mass and total mass inside a
  squared bounding box. Non-finite bounds raise `QuadTreeError`.
- `nbodymap.view`: `MapView`, the world-to-screen transform (`scale`, `x0`,
  `y0`; defaults 4, 280, 280) with `world_to_screen`, `screen_to_world`,
  `centre`, `zoom_to_fit`, `scroll` and `zoom`.
- `nbodymap.stepping`: `StepController`, the adaptive step-size rule of the
  force iteration: `boost`, `limit`, `update(energy)` and `converged`.
- `nbodymap.positions`: node positions and links as compact JSON.
  `PositionRecord(id, x, y, r)`; `format_positions`, `parse_positions`,
  `read_positions`, `write_positions`; `format_links` and `write_links`.
  Malformed position files raise `PositionsFormatError`.

## Examples

```python
from nbodymap.positions import PositionRecord, format_positions, parse_positions

text = format_positions([PositionRecord(101, 12, -40, 3)])
assert parse_positions(text)[0].id == 101
```

```python
import io
from nbodymap.jsonstream import JsonArrayReader, ValueKind

reader = JsonArrayReader(io.StringIO('[{"a": 1}, {"a": 2}]'))
values = [
    reader.get_object_member_value(0, "a", ValueKind.UINT).uint
    for _ in reader
]
assert values == [1, 2]
```

## What the package does not do

It provides the pieces of a layout, not a complete one: there is no force
computation or iteration loop that moves nodes, no building of the citation
graph or its coarser layouts, no loading of papers from a database, no
drawing, and no command-line program.

## Tests

```
pip install -e .[test]
pytest
```