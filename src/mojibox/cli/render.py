"""Result rendering for the CLI layer.

Formatting helpers are pure string transforms; only :func:`write_lines`
and :func:`write_bytes` touch stdout.  Callers compute the full result
before writing, so a failing command never leaves partial output.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable, Sequence
from typing import Any

from mojibox.core.models import ByteSpan, ClusterInfo

DUMP_FORMATS: tuple[str, ...] = ("text", "json", "jsonl")


# ---------------------------------------------------------------------------
# Dump
# ---------------------------------------------------------------------------

def _cluster_record(cluster: ClusterInfo) -> dict[str, Any]:
    return {
        "index": cluster.index,
        "grapheme": cluster.text,
        "bytes": [cluster.span.start, cluster.span.end],
        "chars": [
            {"char": info.char, "codepoint": info.label, "name": info.name}
            for info in cluster.chars
        ],
    }


def _render_dump_text(clusters: Sequence[ClusterInfo]) -> str:
    lines: list[str] = []
    for cluster in clusters:
        lines.append(
            f"#{cluster.index} {cluster.text!r} "
            f"bytes {cluster.span.start}..{cluster.span.end}"
        )
        for info in cluster.chars:
            lines.append(f"  {info.label:<8} {info.char!r:<6} {info.name}")
    return "".join(f"{line}\n" for line in lines)


def render_dump(clusters: Sequence[ClusterInfo], fmt: str = "text") -> str:
    """Render ``dump`` output as ``text``, ``json`` or ``jsonl``."""
    if fmt == "json":
        records = [_cluster_record(cluster) for cluster in clusters]
        return json.dumps(records, ensure_ascii=False, indent=2) + "\n"
    if fmt == "jsonl":
        return "".join(
            json.dumps(_cluster_record(cluster), ensure_ascii=False) + "\n"
            for cluster in clusters
        )
    return _render_dump_text(clusters)


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------

def format_spans(spans: Iterable[ByteSpan]) -> str:
    """``0..3, 4..5`` style listing of byte spans."""
    return ", ".join(f"{span.start}..{span.end}" for span in spans)


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------

def write_lines(lines: Iterable[str]) -> None:
    """Write each line followed by a newline to stdout."""
    sys.stdout.write("".join(f"{line}\n" for line in lines))


def write_text(text: str) -> None:
    sys.stdout.write(text)


def write_bytes(data: bytes) -> None:
    """Write raw bytes and a trailing newline to stdout."""
    sys.stdout.flush()
    sys.stdout.buffer.write(data + b"\n")
    sys.stdout.buffer.flush()
