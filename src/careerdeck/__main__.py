"""Entry point: ``python -m careerdeck``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter

from careerdeck.exceptions import CareerDeckError, CompareFullError
from careerdeck.models import DIFFICULTIES, SORT_OPTIONS, FilterCriteria
from careerdeck.reporting.console import (
    print_comparison,
    print_job_detail,
    print_jobs,
    print_message,
    print_sectors,
)
from careerdeck.session import BrowsingSession
from careerdeck.settings import AppSettings


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="careerdeck", description="Browse career paths.")
    parser.add_argument("--settings", default=None, help="Path to settings.yaml")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("sectors", help="List sectors")
    p.add_argument("--sort", choices=SORT_OPTIONS, default=None)

    p = sub.add_parser("jobs", help="List, filter and search careers")
    p.add_argument("--sector", default=None)
    p.add_argument("--sort", choices=SORT_OPTIONS, default=None)
    p.add_argument("--difficulty", action="append", choices=DIFFICULTIES, default=[])
    p.add_argument("--skill", action="append", default=[])
    p.add_argument("--all-skills", action="store_true", help="Require every --skill")
    p.add_argument("--salary", nargs=2, type=float, metavar=("MIN", "MAX"), default=None)
    p.add_argument("--query", default="")

    p = sub.add_parser("view", help="Show a career and record the view")
    p.add_argument("job_id")

    p = sub.add_parser("favorite", help="Toggle a favorite, or list favorites")
    p.add_argument("job_id", nargs="?")

    p = sub.add_parser("compare", help="Toggle a career in the compare list")
    p.add_argument("job_id", nargs="?")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--clear", action="store_true")
    group.add_argument("--show", action="store_true", help="Only show the comparison")

    sub.add_parser("recent", help="Show recently viewed careers")
    return parser


def _run(session: BrowsingSession, args: argparse.Namespace) -> int:
    state = session.state
    catalog = session.catalog

    if args.command == "sectors":
        counts = Counter(job.sector_id for job in catalog.jobs)
        print_sectors(session.browse_sectors(args.sort), dict(counts))

    elif args.command == "jobs":
        criteria = FilterCriteria(
            skills=tuple(args.skill),
            salary_range=tuple(args.salary) if args.salary else None,
            difficulty=tuple(args.difficulty),
            skills_mode="all" if args.all_skills else session.settings.skills_match,
        )
        jobs = session.filter_jobs(criteria, args.sort, sector_id=args.sector)
        if args.query:
            wanted = {job.id for job in session.search(args.query)}
            jobs = [job for job in jobs if job.id in wanted]
        print_jobs(jobs, favorites=state.favorites(), compare=state.compare_list())

    elif args.command == "view":
        job = session.view_job(args.job_id)
        print_job_detail(job, catalog.sector_for(job), state.is_favorite(job.id), state.view_count(job.id))

    elif args.command == "favorite":
        if args.job_id:
            job = catalog.get_job(args.job_id)
            added = state.toggle_favorite(job.id)
            print_message(f"{job.name} {'added to' if added else 'removed from'} favorites.")
        print_jobs(session.favorite_jobs(), title="Favorites", favorites=state.favorites())

    elif args.command == "compare":
        if args.clear:
            state.clear_compare_list()
        elif args.job_id and not args.show:
            job = catalog.get_job(args.job_id)
            try:
                added = state.toggle_compare(job.id)
            except CompareFullError as exc:
                print_message(f"You can compare up to {exc.limit} careers. Remove one first.", "bold yellow")
                return 1
            print_message(f"{job.name} {'added to' if added else 'removed from'} compare.")
        print_comparison(session.comparison())

    elif args.command == "recent":
        print_jobs(session.recently_viewed_jobs(), title="Recently Viewed", favorites=state.favorites())

    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        settings = AppSettings.from_yaml(args.settings)
        with BrowsingSession.open(settings) as session:
            return _run(session, args)
    except LookupError as exc:
        print_message(f"Not found: {exc}", "bold red")
        return 2
    except CareerDeckError as exc:
        print_message(str(exc), "bold red")
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
