"""Brute-force references shared by the tests."""

import itertools


def lattice_ball(center, radius):
    """All integer points within Euclidean distance radius of center."""
    ranges = [range(c - radius, c + radius + 1) for c in center]
    return {
        p
        for p in itertools.product(*ranges)
        if sum((x - c) ** 2 for x, c in zip(p, center)) <= radius * radius
    }


def drain(cursor):
    """Advance a cursor to its end, collecting every element."""
    out = []
    while cursor.has_next():
        out.append(cursor.next())
    return out
