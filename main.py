import logging
import signal
import sys
import json
import argparse
import uuid

import yaml
from sqlalchemy import create_engine
from pydantic import ValidationError

from core.config_loader import load_config
from core.scoring import ScoringService, ScoringCriteria, build_system_default, validate_scoring_config
from core.scoring.exceptions import ConfigurationInvalid, ScoringError
from database.database import make_session_factory, init_db
from database.uow import portal_uow

logger = logging.getLogger(__name__)

# Global flag for graceful shutdown
running = True

def signal_handler(sig, frame):
    global running
    logger.info("Shutdown signal received")
    running = False


def configure_logging(config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format
    )


def build_service(repo, config) -> ScoringService:
    return ScoringService(
        repo,
        system_default=build_system_default(config.scoring.system_default, config.scoring.weight_tolerance),
        tolerance=config.scoring.weight_tolerance
    )


def cmd_init_db(args, config) -> int:
    init_db(bind=create_engine(config.database.url))
    return 0


def cmd_serve(args, config) -> int:
    from web.backend.app import main as serve
    serve()
    return 0


def cmd_rescore(args, config) -> int:
    """Rescore every application of one job."""
    with portal_uow(make_session_factory(config.database.url)) as repo:
        summary = build_service(repo, config).rescore_job(args.job_id)

    logger.info(f"Rescored job {args.job_id}: {summary.scored} scored, {summary.failed} failed")
    for error in summary.errors:
        logger.warning(f"  {error}")
    return 0 if summary.failed == 0 else 1


def cmd_rescore_stale(args, config) -> int:
    """Rescore unscored and stale applications in batches until none are left."""
    limit = args.limit or config.scoring.rescore_batch_size
    session_factory = make_session_factory(config.database.url)

    total_scored = 0
    total_failed = 0
    batch = 0
    while running:
        batch += 1
        with portal_uow(session_factory) as repo:
            summary = build_service(repo, config).rescore_stale(limit)

        total_scored += summary.scored
        total_failed += summary.failed
        logger.info(f"Batch #{batch}: {summary.scored} scored, {summary.failed} failed")

        # Failed applications leave the queue, so an empty batch means nothing is left
        if summary.scored + summary.failed == 0 or not args.all:
            break

    logger.info(f"Rescoring finished: {total_scored} scored, {total_failed} failed")
    return 0 if total_failed == 0 else 1


def cmd_validate_config(args, config) -> int:
    """Validate a full scoring configuration file (YAML or JSON)."""
    try:
        with open(args.path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(f"Scoring config file not found: {args.path}")
        return 2
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in scoring config file: {e}")
        return 2

    try:
        scoring = ScoringCriteria.model_validate(data)
    except ValidationError as e:
        logger.error(f"Scoring config does not match the schema:\n{e}")
        return 1

    result = validate_scoring_config(scoring, config.scoring.weight_tolerance)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.valid else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="PDS Scoring - job portal applicant scoring")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    init_parser = subparsers.add_parser('init-db', help='Create database tables')
    init_parser.set_defaults(func=cmd_init_db)

    serve_parser = subparsers.add_parser('serve', help='Run the scoring API server')
    serve_parser.set_defaults(func=cmd_serve)

    rescore_parser = subparsers.add_parser('rescore', help="Rescore all of a job's applications")
    rescore_parser.add_argument('--job-id', type=uuid.UUID, required=True, help="Job posting UUID")
    rescore_parser.set_defaults(func=cmd_rescore)

    stale_parser = subparsers.add_parser('rescore-stale', help='Rescore unscored and stale applications')
    stale_parser.add_argument('--limit', type=int, default=None,
                              help='Batch size (default: scoring.rescore_batch_size)')
    stale_parser.add_argument('--all', action='store_true',
                              help='Keep processing batches until nothing is left')
    stale_parser.set_defaults(func=cmd_rescore_stale)

    validate_parser = subparsers.add_parser('validate-config', help='Validate a scoring configuration file')
    validate_parser.add_argument('path', type=str, help='YAML or JSON file with all eight criteria')
    validate_parser.set_defaults(func=cmd_validate_config)

    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        return args.func(args, config)
    except ConfigurationInvalid as e:
        logger.error(f"Invalid scoring configuration: {e}")
        return 1
    except ScoringError as e:
        logger.error(f"{e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
