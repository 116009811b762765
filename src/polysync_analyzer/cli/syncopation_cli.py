"""Syncopation Analyzer CLI.

Scores the drum tracks of a MIDI file, or of every MIDI file in a folder,
window by window, and writes the results as JSON.

Usage:
    polysync-analyze --input /path/to/midi/folder \\
        --grid-length 32 --bars-per-grid 2 \\
        --output /tmp/result.json
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import AnalyzerConfig
from ..pipeline import SyncopationAnalyzer
from ..tables import weights_for_grid

MIDI_SUFFIXES = ('.mid', '.midi')


def find_midi_files(input_path: str) -> List[str]:
    """Return the MIDI file itself or all MIDI files below a folder, sorted."""
    path = Path(input_path)
    if path.is_file():
        return [str(path)]
    return sorted(
        str(p) for p in path.rglob('*')
        if p.is_file() and p.suffix.lower() in MIDI_SUFFIXES
    )


class SyncopationCLI:
    """CLI service for syncopation analysis of MIDI files."""

    def __init__(
        self,
        input_path: str,
        config: AnalyzerConfig,
        output_file: Optional[str] = None,
    ):
        """Initialize the CLI.

        Args:
            input_path: MIDI file or folder containing MIDI files
            config: Analyzer configuration
            output_file: Path to output results JSON file
        """
        self.input_path = input_path
        self.config = config
        self.output_file = output_file
        self.analyzer = SyncopationAnalyzer(config)

    def run(self) -> Dict[str, Any]:
        """Run the analysis.

        Returns:
            Dictionary with per-file results
        """
        print(f"Scanning input: {self.input_path}")
        midi_files = find_midi_files(self.input_path)
        print(f"Found {len(midi_files)} MIDI files")

        results = []
        for i, midi_file in enumerate(midi_files, start=1):
            print(f"[{i}/{len(midi_files)}] {os.path.basename(midi_file)}")
            analysis = self.analyzer.analyze(midi_file)
            entry = {"file": midi_file}
            entry.update(analysis.to_dict())
            results.append(entry)

        result = {
            "status": "completed",
            "timestamp": datetime.now().isoformat(),
            "input": self.input_path,
            "grid_length": self.analyzer.grid_length,
            "bars_per_grid": self.config.midi_grid.bars_per_grid,
            "total": len(midi_files),
            "failed": sum(1 for r in results if r["error_messages"]),
            "results": results,
        }

        if self.output_file:
            with open(self.output_file, 'w') as f:
                json.dump(result, f, indent=2, ensure_ascii=False, default=str)
            print(f"Results saved to: {self.output_file}")

        return result


def build_config(args: argparse.Namespace) -> AnalyzerConfig:
    """Analyzer configuration from parsed command-line arguments."""
    if args.tables:
        config = AnalyzerConfig.from_json(args.tables)
    else:
        config = AnalyzerConfig()
        config.syncopation.weights = weights_for_grid(args.grid_length)

    if args.bars_per_grid is not None:
        config.midi_grid.bars_per_grid = args.bars_per_grid
    elif not args.tables:
        # One bar per 16 steps
        config.midi_grid.bars_per_grid = max(1, args.grid_length // 16)
    config.midi_grid.include_non_drums = args.include_non_drums
    config.verbose = args.verbose
    config.syncopation.verbose = args.verbose
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Polyphonic syncopation analysis of MIDI drum tracks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One bar per 16-step grid
  polysync-analyze --input groove.mid

  # Two bars per 32-step grid, results to JSON
  polysync-analyze --input /path/to/midi/folder \\
      --grid-length 32 --bars-per-grid 2 --output /tmp/result.json

  # Custom tables
  polysync-analyze --input groove.mid --tables my_tables.json
        """
    )
    parser.add_argument(
        '--input',
        required=True,
        help='Input folder path or single MIDI file path (required)'
    )
    parser.add_argument(
        '--grid-length',
        type=int,
        default=16,
        help='Steps per grid window, a multiple of 16 (default: 16)'
    )
    parser.add_argument(
        '--bars-per-grid',
        type=int,
        default=None,
        help='Bars per grid window (default: grid length / 16, or the tables file value)'
    )
    parser.add_argument(
        '--tables',
        default=None,
        help='JSON file with weights, instrument_map and interactions'
    )
    parser.add_argument(
        '--include-non-drums',
        action='store_true',
        help='Also read notes from non-drum instruments'
    )
    parser.add_argument(
        '--output',
        default=None,
        help='Output results JSON path'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log per-slot syncopation contributions'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        cli = SyncopationCLI(
            input_path=args.input,
            config=build_config(args),
            output_file=args.output,
        )
        result = cli.run()

        print(f"Syncopation analysis completed successfully")
        for entry in result["results"]:
            print(f"  {os.path.basename(entry['file'])}: mean={entry['mean_score']} max={entry['max_score']}")
        return 0

    except Exception as e:
        print(f"Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
