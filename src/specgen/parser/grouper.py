"""Partition the operations of a normalized document by tag.

Each tag becomes one generated file, so the grouping order decides file
contents. Groups appear in first-seen tag order while walking ``paths``, and
operations inside a group keep path/method traversal order. Operations with
no tags are left out of every group.
"""

from __future__ import annotations

from typing import Any

from specgen.models import GroupedOperations, HTTPMethod, ParsedPath
from specgen.parser.normalizer import iter_operations, operation_tags


def group_by_tag(source: dict[str, Any]) -> GroupedOperations:
    """Group every tagged operation of *source* under each of its tags.

    Args:
        source: A document returned by
            :func:`~specgen.parser.normalizer.normalize_source`.

    Returns:
        An insertion-ordered ``{tag: [ParsedPath, ...]}`` map. An operation
        with several tags appears once in each of their groups.
    """
    grouped: GroupedOperations = {}

    for url, method, operation in iter_operations(source.get("paths") or {}):
        tags = operation_tags(operation)
        if not tags:
            continue

        parsed = ParsedPath(
            url=url,
            method=HTTPMethod(method),
            tags=tags,
            summary=operation.get("summary"),
            description=operation.get("description"),
            operation_id=operation.get("operationId"),
            deprecated=operation.get("deprecated", False),
        )
        for tag in dict.fromkeys(tags):
            grouped.setdefault(tag, []).append(parsed)

    return grouped
