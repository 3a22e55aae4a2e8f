"""Main entry point for Tuner Lab.

Prints the harmonic series of a fundamental, or compares target pitches
against a fundamental, across Just Intonation, 12-TET, Pythagorean and
Werckmeister III tunings. Tables can be saved as CSV and auditioned on an
OSC synthesizer.
"""

import argparse
import sys
from typing import Optional

from . import config
from .comparator import compare_intervals, split_targets
from .engine import TuningEngine
from .export import comparison_table, format_text_table, harmonic_table, write_csv
from .harmonic_series import generate_harmonic_series
from .intervals import deviation_grade
from .osc_sender import MockOscSender, OscSender
from .pitch import parse_pitch
from .systems import TuningSystem

SYSTEM_CHOICES = [s.value for s in TuningSystem]


class TunerLab:
    """Command line session around one TuningEngine."""

    def __init__(
        self,
        a4: float = config.DEFAULT_A4,
        mock_osc: bool = False,
        verbose: bool = True,
    ):
        """Initialize a session.

        Args:
            a4: Reference frequency of A4 in Hz
            mock_osc: If True, use MockOscSender instead of real OSC
            verbose: If True, print status messages
        """
        self.a4 = a4
        self.mock_osc = mock_osc
        self.verbose = verbose
        self.engine = TuningEngine()

    def _sender(self) -> OscSender:
        if self.mock_osc:
            return MockOscSender(verbose=self.verbose)
        return OscSender()

    def _emit(self, table: list[list[str]], csv_path: Optional[str]) -> None:
        for line in format_text_table(table):
            print(line)
        if csv_path:
            write_csv(csv_path, table)
            if self.verbose:
                print(f"\n✓ CSV: wrote {len(table) - 1} rows to {csv_path}")

    def harmonics(
        self,
        pitch: str,
        count: int = config.DEFAULT_PARTIAL_COUNT,
        real_octave: bool = config.DEFAULT_REAL_OCTAVE,
        csv_path: Optional[str] = None,
        play: Optional[str] = None,
    ) -> None:
        """Print (and optionally export or play) the harmonic series."""
        parsed = parse_pitch(pitch, self.a4)
        if parsed.frequency is None:
            fundamental = config.DEFAULT_FUNDAMENTAL_HZ
            if self.verbose:
                print(f"⚠ Could not parse {pitch!r}, using {fundamental} Hz")
        else:
            fundamental = parsed.frequency
            if self.verbose:
                print(f"✓ Fundamental: {parsed.label} ({fundamental:.3f} Hz, A4={self.a4} Hz)")

        rows = generate_harmonic_series(
            fundamental,
            count,
            engine=self.engine,
            base_pitch_class=parsed.pitch_class or 0,
        )
        self._emit(harmonic_table(rows, real_octave), csv_path)

        if play:
            system = TuningSystem.parse(play)
            with self._sender() as sender:
                if self.verbose:
                    print(f"\n🎵 Playing {len(rows)} partials ({system.value}) "
                          f"via {sender.host}:{sender.port}")
                for row in rows:
                    sender.play_one(row.playable_frequency(system, real_octave))

    def compare(
        self,
        fundamental: str,
        targets: list[str],
        system: str = config.DEFAULT_SYSTEM,
        match_octave: bool = config.DEFAULT_MATCH_OCTAVE,
        distance_mode: str = config.DEFAULT_DISTANCE_MODE,
        csv_path: Optional[str] = None,
        play: bool = False,
    ) -> None:
        """Print (and optionally export or play) the comparator table."""
        rows = compare_intervals(
            fundamental,
            targets,
            system=system,
            match_octave=match_octave,
            distance_mode=distance_mode,
            a4=self.a4,
            engine=self.engine,
        )
        if self.verbose:
            skipped = len(targets) - len(rows)
            print(f"✓ Comparing {len(rows)} targets against {fundamental} ({system})"
                  + (f", {skipped} skipped" if skipped else ""))
        self._emit(comparison_table(rows), csv_path)

        if self.verbose and rows:
            grades = [deviation_grade(row.deviation) for row in rows]
            summary = ", ".join(
                f"{grades.count(g)} {g}" for g in ("pure", "moderate", "wide") if g in grades
            )
            print(f"\n✓ Deviation EI−S: {summary}")

        if play and rows:
            with self._sender() as sender:
                for row in rows:
                    sender.play_ab(row.frequency, row.system_frequency)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the tuner-lab CLI."""
    parser = argparse.ArgumentParser(
        description="Tuner Lab - Harmonics & Temperaments"
    )
    parser.add_argument(
        "--a4",
        type=float,
        default=config.DEFAULT_A4,
        help=f"Reference frequency of A4 in Hz (default: {config.DEFAULT_A4})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce output verbosity",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock OSC sender (print messages instead of sending them)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    harm = sub.add_parser("harmonics", help="Harmonic series of a fundamental")
    harm.add_argument(
        "pitch",
        nargs="?",
        default="C4",
        help="Fundamental as note name or Hz (default: C4)",
    )
    harm.add_argument(
        "--count",
        type=int,
        default=config.DEFAULT_PARTIAL_COUNT,
        help=f"Number of partials (default: {config.DEFAULT_PARTIAL_COUNT})",
    )
    harm.add_argument(
        "--base-octave",
        action="store_true",
        help="Express frequencies in the base octave instead of each partial's octave",
    )
    harm.add_argument("--csv", metavar="PATH", help="Also write the table to a CSV file")
    harm.add_argument(
        "--play",
        choices=SYSTEM_CHOICES,
        help="Play every partial in the given system over OSC",
    )

    cmp = sub.add_parser("compare", help="Compare target pitches against a fundamental")
    cmp.add_argument("fundamental", help="Fundamental (1/1) as note name or Hz")
    cmp.add_argument(
        "targets",
        nargs="+",
        help="Target pitches (separated by spaces or commas)",
    )
    cmp.add_argument(
        "--system",
        choices=SYSTEM_CHOICES,
        default=config.DEFAULT_SYSTEM,
        help=f"Projection system (default: {config.DEFAULT_SYSTEM})",
    )
    cmp.add_argument(
        "--real-octave",
        action="store_true",
        help="Move system frequencies into each target's octave",
    )
    cmp.add_argument(
        "--distance",
        choices=["previous", "first"],
        default=config.DEFAULT_DISTANCE_MODE,
        help="Measure distance from the previous target or the first one",
    )
    cmp.add_argument("--csv", metavar="PATH", help="Also write the table to a CSV file")
    cmp.add_argument(
        "--play",
        action="store_true",
        help="Play each target A/B against its system projection over OSC",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the Tuner Lab CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.a4 > 0:
        parser.error(f"--a4 must be positive, got {args.a4}")

    lab = TunerLab(a4=args.a4, mock_osc=args.mock, verbose=not args.quiet)
    if lab.verbose and not config.A4_MIN <= args.a4 <= config.A4_MAX:
        print(f"⚠ A4={args.a4} Hz is outside the usual {config.A4_MIN:g}-{config.A4_MAX:g} Hz range")

    try:
        if args.command == "harmonics":
            if args.count < 1:
                parser.error(f"--count must be at least 1, got {args.count}")
            lab.harmonics(
                args.pitch,
                count=args.count,
                real_octave=not args.base_octave,
                csv_path=args.csv,
                play=args.play,
            )
        else:
            targets = split_targets(" ".join(args.targets))
            lab.compare(
                args.fundamental,
                targets,
                system=args.system,
                match_octave=args.real_octave,
                distance_mode=args.distance,
                csv_path=args.csv,
                play=args.play,
            )
    except KeyboardInterrupt:
        pass
    except OSError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
