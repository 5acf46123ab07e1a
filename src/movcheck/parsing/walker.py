"""Box walking and container descent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO

from movcheck.config import DEFAULT_REGISTRY, BoxRegistry
from movcheck.models import Box, Truncation, TruncationKind, WalkResult

from .reader import HEADER_SIZE, MalformedHeaderError, read_box_header

logger = logging.getLogger(__name__)


@dataclass
class _Range:
    """A run of sibling boxes still to be walked."""

    cursor: int
    end: int
    depth: int
    parent: Box | None = None


def _is_terminator(stream: BinaryIO, offset: int, count: int) -> bool:
    """Check for the zero-filled tail QuickTime writes after some child lists."""
    stream.seek(offset)
    tail = stream.read(count)
    return tail is not None and len(tail) == count and not any(tail)


def _truncation(kind: TruncationKind, offset: int, current: _Range, **kwargs) -> Truncation:
    parent = current.parent
    return Truncation(
        kind=kind,
        offset=offset,
        depth=current.depth,
        parent_tag=parent.tag if parent else None,
        parent_offset=parent.offset if parent else None,
        **kwargs,
    )


def walk_boxes(
    stream: BinaryIO,
    start: int,
    end: int,
    registry: BoxRegistry = DEFAULT_REGISTRY,
) -> WalkResult:
    """Walk the boxes in ``[start, end)`` and descend into container boxes.

    Boxes come out flattened in pre-order: each container is immediately
    followed by its own children. A range stops at its first malformed
    header or at the first box whose declared extent overruns the range;
    the overrunning box is still reported, marked incomplete and clamped
    to the bytes that are there. A stopped child range never affects its
    parent: the parent's declared size is trusted to reach its next sibling.

    Nesting is tracked with an explicit stack, so corrupted or hostile input
    cannot exhaust the interpreter's recursion limit.

    Args:
        stream: Seekable binary stream positioned anywhere
        start: Absolute offset of the first box
        end: Absolute end of the range
        registry: Container types and depth bound to apply

    Returns:
        WalkResult with every observed box and every early stop
    """
    result = WalkResult()
    stack = [_Range(cursor=start, end=end, depth=0)]

    while stack:
        current = stack[-1]
        remaining = current.end - current.cursor
        if remaining <= 0:
            stack.pop()
            continue

        if (
            current.parent is not None
            and remaining < HEADER_SIZE
            and _is_terminator(stream, current.cursor, remaining)
        ):
            logger.debug("Zero terminator at offset %d inside %s", current.cursor, current.parent.type)
            stack.pop()
            continue

        try:
            header = read_box_header(stream, current.cursor, current.end)
        except MalformedHeaderError as e:
            logger.debug("Stopping range at offset %d: %s", e.offset, e.reason)
            result.truncations.append(
                _truncation(TruncationKind.MALFORMED, e.offset, current, reason=e.reason, tag=e.tag)
            )
            stack.pop()
            continue

        offset = current.cursor
        box_end = offset + header.size
        complete = box_end <= current.end
        box = Box(
            tag=header.tag,
            offset=offset,
            size=header.size if complete else remaining,
            declared_size=header.size,
            header_size=header.header_size,
            depth=current.depth,
            complete=complete,
            container=registry.is_container(header.tag),
            known=registry.is_known(header.tag),
        )
        result.boxes.append(box)

        if not complete:
            logger.debug(
                "Box %s at offset %d overruns its range: declared %d, available %d",
                box.type,
                offset,
                header.size,
                remaining,
            )
            result.truncations.append(
                _truncation(
                    TruncationKind.TRUNCATED,
                    offset,
                    current,
                    reason="declared extent exceeds available bytes",
                    tag=header.tag,
                    declared_size=header.size,
                    available_size=remaining,
                )
            )
            stack.pop()
            continue

        current.cursor = box_end

        if not box.container or box.payload_offset >= box_end:
            continue

        child = _Range(cursor=box.payload_offset, end=box_end, depth=current.depth + 1, parent=box)
        if current.depth >= registry.max_depth:
            logger.debug("Not descending into %s at offset %d: depth limit", box.type, offset)
            result.truncations.append(
                _truncation(
                    TruncationKind.DEPTH_LIMIT,
                    child.cursor,
                    child,
                    reason=f"boxes nested deeper than {registry.max_depth} levels",
                )
            )
            continue

        stack.append(child)

    return result
