"""Utility functions for dictee application."""

import re


def parse_entries(body: str) -> list[str]:
    """Split a list body into entries: one per line, trimmed, blank lines dropped."""
    lines = re.split(r'\r?\n', body)
    cleaned = []
    for line in lines:
        line = line.strip()
        if line:
            cleaned.append(line)
    return cleaned
