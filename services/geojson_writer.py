"""
GeoJSON serialization of synthesized fields.

dumps() and iter_geojson_chunks() produce byte-identical text for the same
field; the chunked form takes any iterable of points, so a lazily generated
field can be written out without ever holding all of it in memory.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, TextIO

from models.field import FieldMetadata, FieldResult, SamplePoint

_SEPARATORS = (",", ":")


def _encode(obj: Any) -> str:
    return json.dumps(obj, separators=_SEPARATORS, ensure_ascii=False)


def to_geojson(result: FieldResult) -> dict[str, Any]:
    """FeatureCollection dict: type, metadata, features (in that order)."""
    return {
        "type": "FeatureCollection",
        "metadata": result.metadata.to_dict(),
        "features": [p.to_feature() for p in result.points],
    }


def dumps(result: FieldResult) -> str:
    return _encode(to_geojson(result))


def iter_geojson_chunks(
    metadata: FieldMetadata,
    points: Iterable[SamplePoint],
    batch_size: int = 500,
) -> Iterator[str]:
    """
    Yield the FeatureCollection as text chunks.

    The first chunk carries the header and metadata, each following chunk
    up to *batch_size* features, and the last one closes the document.
    """
    yield '{"type":"FeatureCollection","metadata":' + _encode(metadata.to_dict()) + ',"features":['

    batch: list[str] = []
    first = True
    for point in points:
        batch.append(_encode(point.to_feature()))
        if len(batch) >= batch_size:
            yield ("" if first else ",") + ",".join(batch)
            first = False
            batch = []
    if batch:
        yield ("" if first else ",") + ",".join(batch)

    yield "]}"


def write_geojson(fp: TextIO, metadata: FieldMetadata, points: Iterable[SamplePoint]) -> int:
    """Stream a field to a text file object; returns the number of characters written."""
    written = 0
    for chunk in iter_geojson_chunks(metadata, points):
        fp.write(chunk)
        written += len(chunk)
    return written
