"""CLI entry point for the placement match engine."""

import argparse
import asyncio
import logging
import sys

from src.core.config import Settings
from src.core.db import init_db
from src.core.seed import SeedData, load_seed
from src.matching.finder import MatchFinder, export_results_json
from src.notifications.sqlite import SQLiteNotificationDispatcher
from src.repository.sqlite import SQLiteRepository

DEFAULT_CONFIG = "config/settings.yaml"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    parser = argparse.ArgumentParser(
        description="Placement match engine - score and rank farm jobs against applicants",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- load ---
    load_parser = subparsers.add_parser(
        "load", parents=[common], help="Load jobs and profiles from a YAML seed file",
    )
    load_parser.add_argument("--data", required=True, help="Path to seed YAML file")

    # --- score ---
    score_parser = subparsers.add_parser(
        "score", parents=[common], help="Score one job against one applicant",
    )
    score_parser.add_argument("--job", required=True, help="Job id")
    score_parser.add_argument("--applicant", required=True, help="Applicant id")

    # --- job-matches ---
    job_parser = subparsers.add_parser(
        "job-matches", parents=[common], help="Rank applicants for a job",
    )
    job_parser.add_argument("--job", required=True, help="Job id")
    job_parser.add_argument("--export", choices=["json"], help="Export results to format (json)")

    # --- applicant-matches ---
    applicant_parser = subparsers.add_parser(
        "applicant-matches", parents=[common], help="Rank active jobs for an applicant",
    )
    applicant_parser.add_argument("--applicant", required=True, help="Applicant id")
    applicant_parser.add_argument(
        "--all-regions",
        action="store_true",
        help="Include jobs outside the applicant's preferred region",
    )
    applicant_parser.add_argument(
        "--export", choices=["json"], help="Export results to format (json)",
    )

    # --- notify ---
    notify_parser = subparsers.add_parser(
        "notify", parents=[common], help="Notify the top matching applicants about a job",
    )
    notify_parser.add_argument("--job", required=True, help="Job id")

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the default path is absent."""
    if path == DEFAULT_CONFIG:
        try:
            return Settings.from_yaml(path)
        except FileNotFoundError:
            return Settings()
    return Settings.from_yaml(path)


def cmd_load(args: argparse.Namespace, settings: Settings) -> None:
    """Handle load subcommand."""
    seed = SeedData.from_yaml(args.data)
    conn = init_db(settings.database.path)
    try:
        jobs, profiles = load_seed(conn, seed)
    finally:
        conn.close()
    print(f"Loaded {jobs} jobs and {profiles} profiles into {settings.database.path}")


async def run(args: argparse.Namespace, settings: Settings) -> None:
    """Run a matching command against the configured database."""
    conn = init_db(settings.database.path)
    try:
        finder = MatchFinder(
            SQLiteRepository(conn),
            SQLiteNotificationDispatcher(conn),
            settings,
        )

        if args.command == "score":
            score = await finder.score_job_applicant(args.job, args.applicant)
            print(f"Job {args.job} / applicant {args.applicant}: {score}")
            return

        if args.command == "notify":
            sent = await finder.notify_matching_applicants(args.job)
            print(f"Sent {sent} match notifications for job {args.job}")
            return

        if args.command == "job-matches":
            results = await finder.find_matches_for_job(args.job)
            print(f"{len(results)} applicants match job {args.job}")
        else:
            results = await finder.find_jobs_for_applicant(
                args.applicant, all_regions=args.all_regions,
            )
            print(f"{len(results)} jobs match applicant {args.applicant}")

        for r in results:
            print(f"  {r.match_score:>3}  job={r.job_id}  applicant={r.applicant_id}")

        if args.export == "json":
            print(f"\n{export_results_json(results)}")
    finally:
        conn.close()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "load":
        try:
            cmd_load(args, settings)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        asyncio.run(run(args, settings))


if __name__ == "__main__":
    main()
