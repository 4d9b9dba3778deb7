#!/usr/bin/env python3
"""
COMB CLI — Generate and inspect timestamped random identifiers.

Usage:
    python -m tools.comb_cli new [-n COUNT] [--bytes N] [--resolution-ns R]
                                 [--no-rfc4122] [--seed HEX]
    python -m tools.comb_cli read <uuid> [--bytes N] [--resolution-ns R]
    python -m tools.comb_cli range [--bits B] [--resolution-ns R]

Commands:
    new     — Print freshly generated identifiers, one per line
    read    — Show the stored timestamp of an identifier
    range   — Show how long a timestamp field lasts before wrapping
"""

import argparse
import logging
import sys
import uuid

from comb_core.config import DEFAULT_RESOLUTION_NS, DEFAULT_TIMESTAMP_BYTES
from comb_core.entropy import ChaCha20Entropy
from comb_core.errors import CombError
from comb_core.generator import CombGenerator
from comb_core.layout import TimestampLayout
from comb_core.timerange import time_range
from comb_core.timestamp import read_custom_timestamp, stored_units_to_datetime

logger = logging.getLogger("comb_cli")


# ============================================================
# Commands
# ============================================================

def cmd_new(layout: TimestampLayout, count: int, seed: str | None = None) -> None:
    """Print `count` identifiers."""
    entropy = ChaCha20Entropy.from_seed(bytes.fromhex(seed)) if seed else None
    generator = CombGenerator(layout, entropy=entropy)
    for _ in range(count):
        print(generator())


def cmd_read(layout: TimestampLayout, text: str) -> None:
    """Print the stored units and decoded UTC time of an identifier."""
    id = uuid.UUID(text)
    units = read_custom_timestamp(id, layout.timestamp_bytes)
    when = stored_units_to_datetime(
        units, layout.resolution_ns, layout.timestamp_bytes
    )
    print(f"━━━ {id} ━━━")
    print(f"Timestamp bytes: {layout.timestamp_bytes} | Resolution: {layout.resolution_ns}ns")
    print(f"Stored units:    {units} (0x{units:0{layout.timestamp_bytes * 2}x})")
    print(f"Time (UTC):      {when.isoformat()}")


def cmd_range(bits: int, resolution_ns: int) -> None:
    """Print the wrap span of a `bits`-wide counter."""
    span = time_range(bits, resolution_ns)
    print(f"{bits} bits at {resolution_ns}ns: {span}")


# ============================================================
# Main
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="COMB CLI — Timestamped random identifiers",
        prog="python -m tools.comb_cli",
    )
    parser.add_argument(
        "command",
        choices=["new", "read", "range"],
        help="Command: new (generate), read (decode timestamp), range (wrap span)",
    )
    parser.add_argument(
        "uuid",
        nargs="?",
        help="Identifier to decode (read only)",
    )
    parser.add_argument(
        "--count", "-n",
        type=int,
        default=1,
        help="Number of identifiers to generate (new only)",
    )
    parser.add_argument(
        "--bytes", "-b",
        type=int,
        default=DEFAULT_TIMESTAMP_BYTES,
        help="Timestamp width in bytes, 1-8 (default 6)",
    )
    parser.add_argument(
        "--resolution-ns", "-r",
        type=int,
        default=DEFAULT_RESOLUTION_NS,
        help="Duration of one stored unit in nanoseconds (default 100000)",
    )
    parser.add_argument(
        "--no-rfc4122",
        action="store_true",
        help="Do not stamp version/variant marker bits",
    )
    parser.add_argument(
        "--seed",
        help="Hex seed for a reproducible ChaCha20 random region",
    )
    parser.add_argument(
        "--bits",
        type=int,
        help="Counter width in bits (range only; default 8 * --bytes)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        layout = TimestampLayout.build(
            timestamp_bytes=args.bytes,
            resolution=args.resolution_ns,
            rfc4122=not args.no_rfc4122,
        )
        if args.command == "new":
            cmd_new(layout, args.count, seed=args.seed)
        elif args.command == "read":
            if not args.uuid:
                parser.error("read requires a uuid argument")
            cmd_read(layout, args.uuid)
        elif args.command == "range":
            bits = args.bits if args.bits is not None else layout.timestamp_bits
            cmd_range(bits, layout.resolution_ns)
    except (CombError, ValueError) as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"  ERROR: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
