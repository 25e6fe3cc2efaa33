#!/usr/bin/env python3
"""Transcribe audio files into lane charts.

Run: uv run python scripts/transcribe.py song.mp3 [more.wav ...] [-o charts/]

Writes one <stem>.json per input holding the terminal result message, and
prints a one-line summary per file.
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path

from beatlanes.analysis.engine import AnalysisEngine
from beatlanes.analysis.models import EngineConfig
from beatlanes.config import settings
from beatlanes.worker import analyze_bytes, result_to_message


def main() -> int:
    parser = argparse.ArgumentParser(description="Transcribe audio into a 4-lane beat chart")
    parser.add_argument("files", nargs="+", type=Path, help="audio files to analyze")
    parser.add_argument("-o", "--out-dir", type=Path, default=None,
                        help="directory for chart JSON (default: next to each input)")
    parser.add_argument("--history", type=int, default=settings.history_size,
                        help="rolling history size in frames")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-run details")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    config = EngineConfig(
        frame_size=settings.frame_size,
        hop_seconds=settings.hop_seconds,
        history_size=args.history,
        bin_stride=settings.bin_stride,
        time_stride=settings.time_stride,
        progress_steps=settings.progress_steps,
    )
    engine = AnalysisEngine(config)

    failures = 0
    for path in args.files:
        try:
            data = path.read_bytes()
        except OSError as e:
            print(f"{path}: ERROR {e}", file=sys.stderr)
            failures += 1
            continue

        result = analyze_bytes(data, engine=engine, label=str(path))
        if not result.success:
            print(f"{path}: ERROR {result.error}", file=sys.stderr)
            failures += 1
            continue

        out_dir = args.out_dir or path.parent
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / f"{path.stem}.json"
        out_path.write_text(json.dumps(result_to_message(result), indent=2))

        lanes = Counter(b.lane for b in result.beats)
        lane_str = " ".join(f"{lane}:{lanes.get(lane, 0)}" for lane in range(len(engine.bands)))
        print(f"{path}: {len(result.beats)} beats ({result.difficulty}), "
              f"{result.duration:.1f}s, lanes {lane_str} -> {out_path}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
