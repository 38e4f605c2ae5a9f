"""JSON output formatter."""

import sys
from typing import Any

import msgspec


def print_json(data: Any):
    """Print data as indented JSON to stdout."""
    encoded = msgspec.json.format(msgspec.json.encode(data), indent=2)
    sys.stdout.write(encoded.decode("utf-8") + "\n")
