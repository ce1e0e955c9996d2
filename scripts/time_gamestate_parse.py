#!/usr/bin/env python3
"""Quick perf benchmark for gamestate parsing."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from jominisave.archive import extract_text, load_archive
from jominisave.tree import parse_document


def _collect_saves(root: Path) -> list[Path]:
    if root.is_file():
        return [root]
    return sorted(path for path in root.rglob("*.sav") if path.is_file())


def _load_texts(files: list[Path]) -> list[tuple[Path, str]]:
    texts: list[tuple[Path, str]] = []
    for path in files:
        loaded = load_archive(path.read_bytes(), path.name)
        if loaded.archive is None:
            print(f"skip {path}: {'; '.join(d.message for d in loaded.diagnostics)}")
            continue
        text = extract_text(loaded.archive)
        if text.text is None:
            print(f"skip {path}: {'; '.join(d.message for d in text.diagnostics)}")
            continue
        texts.append((path, text.text))
    return texts


def _run_once(
    texts: list[tuple[Path, str]],
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int, int]:
    start = time.perf_counter()
    total_nodes = 0
    total_chars = 0
    total_diagnostics = 0
    iterator = tqdm(texts, desc=label, unit="save") if show_progress else texts
    for _, text in iterator:
        document = parse_document(text)
        total_nodes += document.node_count
        total_chars += len(text)
        total_diagnostics += len(document.diagnostics)
    duration = time.perf_counter() - start
    return duration, total_nodes, total_chars, total_diagnostics


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark gamestate parsing throughput")
    parser.add_argument("saves", type=Path, help="A .sav file or a directory searched for .sav files")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument("--profile-top", type=int, default=30, help="Number of cProfile rows to print")
    parser.add_argument("--profile-sort", type=str, default="tottime", help="cProfile sort key")
    args = parser.parse_args()

    files = _collect_saves(args.saves)
    if not files:
        raise SystemExit(f"No .sav files found under {args.saves}")
    texts = _load_texts(files)
    if not texts:
        raise SystemExit("No readable gamestate entries")

    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(texts, label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}", show_progress=show_progress)

        timings: list[float] = []
        nodes = chars = diagnostics = 0
        for run_idx in range(max(args.runs, 1)):
            duration, nodes, chars, diagnostics = _run_once(
                texts,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, nodes, chars, diagnostics

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, nodes, chars, diagnostics = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, nodes, chars, diagnostics = _benchmark()

    mean = statistics.mean(timings)
    print(f"Saves: {len(texts)}")
    print(f"Characters: {chars}")
    print(f"Nodes: {nodes}")
    print(f"Diagnostics: {diagnostics}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"MB/s (mean): {chars / mean / 1_000_000:.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
