#!/usr/bin/env python3
"""
Run messages through the MH-CHAT pipeline.

Single message:
  python scripts/chat.py --config configs/pipeline.yaml \
    --message "I've been feeling really anxious lately" --username Sam

Batch (JSONL, one {"message": ..., "username": ...} per line):
  python scripts/chat.py --config configs/pipeline.yaml \
    --input data/messages.jsonl --output data/replies.jsonl
"""

import argparse
import json
import logging
import sys
from pathlib import Path

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from mhchat.pipeline import ChatPipeline, InvalidInputError  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")


def run_single(pipeline, message, username=None):
    """Process a single message and print the JSON exchange."""
    exchange = pipeline.handle_utterance(message, username)
    print(exchange.to_json(indent=2))


def run_batch(pipeline, input_path, output_path, max_rows=0):
    """Process a JSONL file of messages through the pipeline."""
    n_ok = n_fail = 0

    with open(input_path, "r") as fin, open(output_path, "w") as fout:
        for line_no, line in enumerate(fin, 1):
            line = line.strip()
            if not line:
                continue
            if max_rows and (n_ok + n_fail) >= max_rows:
                break

            try:
                row = json.loads(line)
            except json.JSONDecodeError as e:
                print(f"[WARN] Bad JSON at line {line_no}: {e}", file=sys.stderr)
                n_fail += 1
                continue

            message = row.get("message")
            try:
                out = pipeline.handle_utterance(message, row.get("username")).to_dict()
                n_ok += 1
            except InvalidInputError as e:
                out = {"message": message, "error": str(e)}
                n_fail += 1
                print(f"[WARN] Line {line_no}: {e}", file=sys.stderr)

            fout.write(json.dumps(out, ensure_ascii=False) + "\n")

            if (n_ok + n_fail) % 25 == 0:
                print(
                    f"[PROGRESS] {n_ok + n_fail} rows (ok={n_ok}, fail={n_fail})",
                    file=sys.stderr,
                )

    print(f"\nWrote {n_ok + n_fail} replies to {output_path} (ok={n_ok}, fail={n_fail})")


def main():
    ap = argparse.ArgumentParser(description="Run messages through the MH-CHAT pipeline.")
    ap.add_argument(
        "-c", "--config", default=None,
        help="Path to pipeline.yaml config (built-in defaults if omitted).",
    )

    # Single message mode
    ap.add_argument("--message", default=None, help="Single message to process.")
    ap.add_argument("--username", default=None, help="Speaker name for fallback replies.")

    # Batch mode
    ap.add_argument("--input", default=None, help="Input JSONL file for batch mode.")
    ap.add_argument("--output", default=None, help="Output JSONL file for batch mode.")
    ap.add_argument("--max_rows", type=int, default=0, help="Max rows to process (0=all).")

    args = ap.parse_args()

    if not args.message and not args.input:
        ap.error("Provide either --message (single) or --input (batch).")

    if args.config:
        pipeline = ChatPipeline.from_config(args.config)
    else:
        pipeline = ChatPipeline.from_defaults()

    if args.message:
        run_single(pipeline, args.message, args.username)
    else:
        if not args.output:
            ap.error("--output required for batch mode.")
        run_batch(pipeline, args.input, args.output, args.max_rows)


if __name__ == "__main__":
    main()
