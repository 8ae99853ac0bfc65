#!/usr/bin/env python3
"""
CLI for checking client payloads without running the server.

Usage:
    python cli.py join '{"eoa": "0x..."}'                  # create-room payload
    python cli.py join '{"eoa": "0x...", "roomId": "..."}'  # join-room payload
    python cli.py direction '{"roomId": "...", "direction": "UP"}'
    python cli.py join --file payload.json
    python cli.py join --verbose '{"eoa": "0x..."}'         # show diagnostics
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from app.core.validators import validate_direction_payload, validate_join_room_payload

VALIDATORS = {
    "join": validate_join_room_payload,
    "direction": validate_direction_payload,
}

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2


def load_payload(text: Optional[str], path: Optional[str]):
    if path:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    if text is None:
        return json.load(sys.stdin)
    return json.loads(text)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Viper Duel payload validator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
exit status:
  0  payload accepted
  1  payload rejected (error printed in the result)
  2  input is not readable JSON
""",
    )
    parser.add_argument("kind", choices=sorted(VALIDATORS), help="message the payload belongs to")
    parser.add_argument("payload", nargs="?", help="JSON payload (reads stdin when omitted)")
    parser.add_argument("--file", help="read the JSON payload from a file")
    parser.add_argument("--verbose", action="store_true", help="print diagnostic log lines")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        payload = load_payload(args.payload, args.file)
    except (OSError, ValueError) as e:
        print(f"error: could not read payload: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    result = VALIDATORS[args.kind](payload)
    print(json.dumps(result.to_dict()))
    return EXIT_OK if result.success else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
