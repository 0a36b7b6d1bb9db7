#!/usr/bin/env python3
"""Write a synthetic trace file for trying out the viewer.

Each lane gets a run of back-to-back spans with random gaps and lengths,
plus a few short spans nested inside longer ones so that overlapping and
sub-pixel spans show up at the default zoom.

Usage:
    make-trace <output.bin>                      # 8 lanes, 200 spans each
    make-trace <output.bin> --lanes 4 --spans 50
    make-trace <output.bin> --seed 7
"""

import argparse
import os
import sys

import numpy as np

# Add src/python directory to Python path
script_dir = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(os.path.dirname(os.path.dirname(script_dir)), 'src', 'python')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from trace_loader import write_trace


def generate_spans(lanes, spans_per_lane, seed=0, base=1_000_000):
    """Generate (tag, start, stop) triples for ``lanes`` lanes."""
    rng = np.random.default_rng(seed)
    spans = []
    for tag in range(lanes):
        cursor = base + int(rng.integers(0, 5_000))
        for _ in range(spans_per_lane):
            cursor += int(rng.integers(100, 20_000))
            length = int(rng.integers(1, 50_000))
            spans.append((tag, cursor, cursor + length))
            if rng.random() < 0.1:
                inner = cursor + int(rng.integers(0, max(1, length // 2)))
                spans.append((tag, inner, inner + int(rng.integers(1, 200))))
            cursor += length
    return spans


def main():
    parser = argparse.ArgumentParser(description='Write a synthetic span trace file')
    parser.add_argument('output', help='Path of the trace file to write')
    parser.add_argument('--lanes', '-l', type=int, default=8, help='Number of tags (default: 8)')
    parser.add_argument('--spans', '-n', type=int, default=200, help='Spans per lane (default: 200)')
    parser.add_argument('--seed', '-s', type=int, default=0, help='Random seed (default: 0)')
    args = parser.parse_args()

    spans = generate_spans(args.lanes, args.spans, seed=args.seed)
    count = write_trace(args.output, spans)
    print(f"Wrote {count} records to {args.output}")
    print(f"View with: tsc-trace-viewer {args.output} 0 {count} 0 {args.lanes - 1}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
