"""Command line: get connection recommendations for a job posting."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from brewai.config import get_env, load_pipeline_settings, load_store_settings
from brewai.errors import BrewError, PipelineError, RunTimedOut
from brewai.log import get_logger
from brewai.pipeline import get_pipeline_client
from brewai.recommendations import RecommendationService
from brewai.runner import JobRunner
from brewai.store import OutreachStore

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="brewai",
        description="Suggest people to contact about a job posting.",
    )
    p.add_argument("posting_url", help="Job posting URL to analyze")
    who = p.add_mutually_exclusive_group()
    who.add_argument("--user-id", help="Supabase user id; LinkedIn URL is read from their profile")
    who.add_argument("--linkedin", help="Your own LinkedIn profile URL")
    p.add_argument(
        "--send", type=int, metavar="INDEX",
        help="Record outreach to the candidate at INDEX using its suggested message",
    )
    return p


def _build_service(need_store: bool) -> RecommendationService:
    settings = load_pipeline_settings()
    runner = JobRunner(get_pipeline_client(settings), settings)
    store = None
    if need_store or get_env("SUPABASE_URL"):
        store = OutreachStore(load_store_settings())
    return RecommendationService(runner, store)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.send is not None and not args.user_id:
        print("--send requires --user-id", file=sys.stderr)
        return 2

    try:
        service = _build_service(need_store=bool(args.user_id))
        candidates = asyncio.run(service.recommend(
            args.posting_url, user_id=args.user_id, linkedin_url=args.linkedin,
        ))
        print(json.dumps([c.to_dict() for c in candidates], indent=2))

        if args.send is not None:
            if not 0 <= args.send < len(candidates):
                print(f"No candidate at index {args.send}", file=sys.stderr)
                return 2
            chosen = candidates[args.send]
            chat_id = service.send_outreach(args.user_id, chosen, chosen.custom_message)
            log.info("Outreach recorded as chat %s", chat_id)
    except RunTimedOut as exc:
        print(f"Still processing, try again later: {exc}", file=sys.stderr)
        return 1
    except PipelineError as exc:
        print(f"Failed to get recommendations: {exc}", file=sys.stderr)
        return 1
    except (BrewError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
