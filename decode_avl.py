#!/usr/bin/env python3
"""
Decode an AVL data frame and print the result
Usage: python decode_avl.py [HEX] [--file PATH] [--sample] [--json] [--strict]
"""
import sys
import uuid
import argparse
import logging

from avl.errors import DecodeError
from avl.formatting import format_frame, frame_to_json
from avl.protocols import decode_frame
from avl.samples import SAMPLE_FRAME
from logs.logconfig import configure_logging

logger = logging.getLogger(__name__)

_HEX_DIGITS = set(b'0123456789abcdefABCDEF')


def read_frame_file(path: str) -> bytes:
    """Read a frame from disk, hex text files are converted to bytes"""
    with open(path, 'rb') as f:
        raw = f.read()

    cleaned = b''.join(raw.split())
    if cleaned and all(b in _HEX_DIGITS for b in cleaned) and len(cleaned) % 2 == 0:
        logger.debug(f"Reading {path} as hex text")
        return bytes.fromhex(cleaned.decode('ascii'))
    return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Decode a Codec 8 AVL data frame')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('hex', nargs='?', help='Frame as a hex string')
    source.add_argument('--file', help='Read the frame from a binary or hex text file')
    source.add_argument('--sample', action='store_true', help='Decode the bundled reference frame')
    parser.add_argument('--json', action='store_true', help='Print the frame as JSON')
    parser.add_argument('--strict', action='store_true',
                        help='Fail when the declared IO total disagrees with the tier counts')
    return parser


def render(frame, as_json: bool) -> str:
    return frame_to_json(frame) if as_json else format_frame(frame)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(uuid.uuid4().hex[:8])

    if args.sample:
        data = SAMPLE_FRAME
    elif args.file:
        try:
            data = read_frame_file(args.file)
        except OSError as e:
            logger.error(f"Cannot read {args.file}: {e}")
            return 1
    else:
        data = args.hex

    try:
        frame = decode_frame(data, strict_io_count=True if args.strict else None)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid frame input: {e}")
        return 1
    except DecodeError as e:
        logger.error(f"Decode failed: {e}")
        if e.frame is not None:
            print(render(e.frame, args.json))
        return 1

    print(render(frame, args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
