import argparse
import json
from pathlib import Path

from . import __version__
from .config import get_settings, load_env, validate_matches_per_attendee
from .database import get_session, init_database
from .logger import get_logger
from .regenerate import MatchGenerationError, regenerate_event_matches
from .schema import profile_from_dict, validate_profiles
from .storage import count_by_status, list_event_matches, load_profiles


def _read_batch(input_path: Path) -> dict:
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    try:
        return load_profiles(input_path)
    except (json.JSONDecodeError, ValueError) as e:
        raise SystemExit(f"Could not read attendees: {e}")


def cmd_validate(args: argparse.Namespace) -> None:
    batch = _read_batch(Path(args.input))
    errors = validate_profiles(batch["attendees"])
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print(f"Valid ({len(batch['attendees'])} attendees)")


def cmd_generate(args: argparse.Namespace) -> None:
    settings = args.settings
    batch = _read_batch(Path(args.input))

    errors = validate_profiles(batch["attendees"])
    if errors:
        print("Invalid attendees, nothing generated:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    event_id = args.event or batch["event_id"]
    if not event_id:
        raise SystemExit("No event id. Pass --event or set eventId in the input file.")

    raw_limit = args.matches_per_attendee
    if raw_limit is None:
        raw_limit = batch["matches_per_attendee"]
    if raw_limit is None:
        raw_limit = settings["matches_per_attendee"]
    try:
        limit = validate_matches_per_attendee(raw_limit)
    except ValueError as e:
        raise SystemExit(str(e))

    profiles = [profile_from_dict(record) for record in batch["attendees"]]
    db_path = Path(args.db) if args.db else settings["db_path"]
    try:
        summary = regenerate_event_matches(event_id, profiles, limit, db_path)
    except MatchGenerationError as e:
        raise SystemExit(f"Generation aborted, previous matches kept: {e}")

    print(f"Event: {summary['event_id']}")
    print(f"Attendees: {summary['attendees']}")
    print(f"Matches per attendee: {summary['matches_per_attendee']}")
    print(f"Generated: {summary['generated']}")


def cmd_list(args: argparse.Namespace) -> None:
    db_path = Path(args.db) if args.db else args.settings["db_path"]
    if not db_path.exists():
        print(f"Database not found: {db_path}")
        return
    init_database(db_path)
    session = get_session(db_path)
    try:
        rows = list_event_matches(session, args.event, attendee_id=args.attendee)
        stats = count_by_status(session, args.event)
    finally:
        session.close()

    if not rows:
        print(f"No matches for event {args.event}.")
        return

    print(f"Found {len(rows)} matches for event {args.event} {json.dumps(stats)}:\n")
    current = None
    for row in rows:
        if row.attendee_id != current:
            current = row.attendee_id
            print(f"Attendee: {current}")
        print(f"  #{row.position} {row.matched_with_id}  score={row.score}  status={row.status}")
        for reason in row.why_match:
            print(f"      - {reason}")


def main():
    # Load .env if present (EVENTMATCH_DB_PATH, EVENTMATCH_LOG_LEVEL, ...)
    load_env()
    try:
        settings = get_settings()
    except ValueError as e:
        raise SystemExit(f"Bad configuration: {e}")

    parser = argparse.ArgumentParser(prog="eventmatch", description="Event attendee matching")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.set_defaults(settings=settings)

    subparsers = parser.add_subparsers(dest="command")
    val = subparsers.add_parser("validate", help="Validate an attendee profile JSON batch")
    val.add_argument("--input", required=True, help="Path to attendees JSON")
    val.set_defaults(func=cmd_validate)

    gen = subparsers.add_parser("generate", help="Generate and store matches for an event, replacing pending ones")
    gen.add_argument("--input", required=True, help="Path to attendees JSON")
    gen.add_argument("--event", help="Event id (overrides eventId in the input file)")
    gen.add_argument("--matches-per-attendee", type=int, help="Matches per attendee, 1-20 (default: 5)")
    gen.add_argument("--db", help=f"Path to SQLite database (default: {settings['db_path']})")
    gen.set_defaults(func=cmd_generate)

    lst = subparsers.add_parser("list", help="List stored matches for an event")
    lst.add_argument("--event", required=True, help="Event id")
    lst.add_argument("--attendee", help="Only show matches for this attendee")
    lst.add_argument("--db", help=f"Path to SQLite database (default: {settings['db_path']})")
    lst.set_defaults(func=cmd_list)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    get_logger(level=settings["log_level"], log_dir=settings["log_dir"])

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
