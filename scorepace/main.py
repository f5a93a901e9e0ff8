"""Main CLI interface for the live score predictor."""

import argparse
import logging
import sys

from .config import DEFAULT_VELOCITY_WINDOW, EngineConfig
from .data.loader import GameDataLoader
from .data.normalize import ParseError
from .data.team_name_resolver import detect_team_name
from .models.betting import BetSlip, BettingQuote
from .pipeline.series import GameInputs, compute_series


def build_inputs(args) -> GameInputs:
    """
    Assemble a GameInputs snapshot from CLI arguments.

    Args:
        args: Parsed ``predict`` arguments

    Returns:
        GameInputs with every referenced file already read
    """
    read = GameDataLoader.read_text
    quarter_blocks = tuple(read(path) for path in (args.q1, args.q2, args.q3, args.q4))
    csv_text = GameDataLoader.sample_csv_text() if args.sample else read(args.csv)

    quotes = tuple(BettingQuote(line=line, confidence_pct=conf) for line, conf in (args.quote or []))
    bet_slip = BetSlip(target_score=args.bet[0], cost=args.bet[1]) if args.bet else None

    return GameInputs(
        quarter_blocks=quarter_blocks,
        combined_text=read(args.combined),
        csv_text=csv_text,
        home_history=read(args.home_history),
        away_history=read(args.away_history),
        quotes=quotes,
        bet_slip=bet_slip,
        selected_index=args.at,
    )


def predict_game(args):
    """Run the prediction engine over one game."""
    try:
        config = EngineConfig(velocity_window=args.window)
        inputs = build_inputs(args)
        series = compute_series(inputs, config)
    except ParseError as e:
        print(f"Error: {e} ({e.input_kind} input)")
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    home_name = detect_team_name(inputs.home_history) or "Home"
    away_name = detect_team_name(inputs.away_history) or "Away"
    analysis = series.analysis
    point = series.points[analysis.index]

    print(f"\n{'='*60}")
    print(f"{away_name} @ {home_name}")
    print(f"{'='*60}\n")
    print(f"Events parsed: {len(series.points)}")
    print(f"At {point.event.clock} (Q{point.quarter}): {home_name} {point.home} - {away_name} {point.away}")
    print(f"Velocity: {point.velocity_per_minute:.2f} pts/min")
    print(f"🎯 PREDICTED FINAL: {point.predicted_home}-{point.predicted_away} (total {point.predicted_total})")
    print(f"Confidence: {analysis.base_confidence:.0f}%")
    print(f"Average accuracy: {series.error_profile.average_accuracy}%")

    if series.historical_total:
        hist = series.historical_total
        print(f"\n📊 Historical total: {hist.avg} ± {hist.std_dev} (range {hist.min}-{hist.max})")
        for label, stats in ((home_name, series.home_stats), (away_name, series.away_stats)):
            print(f"   - {label}: avg {stats.avg}, last 5 {stats.recent_avg} (trend {stats.trend:+})")

    print("\nConfidence the total reaches:")
    for rung in analysis.ladder:
        print(f"   {rung.target_score} (-{rung.points_down}): {rung.confidence}%")

    if analysis.betting:
        bet = analysis.betting
        print(f"\n💰 Bet {bet.target_score}+ at {bet.cost}: confidence {bet.confidence}% "
              f"vs implied {bet.implied_probability}% -> EV {bet.expected_value:+.2f} ({bet.recommendation})")

    if args.output:
        GameDataLoader.export_csv(series.points, args.output)
        print(f"\nSaved predictions to {args.output}")

    if args.report:
        GameDataLoader.save_report_json(series.to_dict(), args.report)
        print(f"Saved report to {args.report}")

    print("✓ Done!")
    return 0


def create_sample(args):
    """Create sample data file."""
    print(f"Creating sample data at {args.output}...")
    GameDataLoader.create_sample_data(args.output)
    print("✓ Sample data created!")
    print(f"\nYou can now run predictions with:")
    print(f"  python -m scorepace.main predict --csv {args.output}")
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Live final-score prediction from basketball play-by-play"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    predict_parser = subparsers.add_parser("predict", help="Predict the final score of a game")
    predict_parser.add_argument("--q1", help="First-quarter play-by-play text file")
    predict_parser.add_argument("--q2", help="Second-quarter play-by-play text file")
    predict_parser.add_argument("--q3", help="Third-quarter play-by-play text file")
    predict_parser.add_argument("--q4", help="Fourth-quarter play-by-play text file")
    predict_parser.add_argument("--combined", help="Whole-game play-by-play text file")
    predict_parser.add_argument("--csv", help="time,home,away file (elapsed game clock)")
    predict_parser.add_argument("--sample", action="store_true", help="Use the built-in sample game")
    predict_parser.add_argument("--home-history", help="Home team schedule/results text file")
    predict_parser.add_argument("--away-history", help="Away team schedule/results text file")
    predict_parser.add_argument(
        "--window",
        type=int,
        default=DEFAULT_VELOCITY_WINDOW,
        help="Velocity window in seconds (30-720, step 30)",
    )
    predict_parser.add_argument(
        "--quote",
        nargs=2,
        type=float,
        action="append",
        metavar=("LINE", "CONFIDENCE"),
        help="Over/under line and confidence percent (repeat for a second line)",
    )
    predict_parser.add_argument(
        "--bet",
        nargs=2,
        type=float,
        metavar=("TARGET", "COST"),
        help="Bet that the total reaches TARGET, paying COST to win 1",
    )
    predict_parser.add_argument("--at", type=int, default=None, help="Event index to analyze (default: last)")
    predict_parser.add_argument("--output", "-o", default=None, help="CSV export path")
    predict_parser.add_argument("--report", default=None, help="JSON report path")

    sample_parser = subparsers.add_parser("sample", help="Create sample data file")
    sample_parser.add_argument("--output", "-o", default="sample_game.csv", help="Output CSV file")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "predict":
        return predict_game(args)
    elif args.command == "sample":
        return create_sample(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
