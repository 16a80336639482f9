import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from sqlalchemy.exc import OperationalError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from core.app_context import AppContext
from core.config_loader import load_config
from core.scorer.models import JobDetails, UserProfile, parse_date
from core.scorer.service import compute_base_score
from database.database import build_engine, init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(5),
    wait=wait_fixed(2),
    reraise=True
)
def init_db_with_retry(engine) -> None:
    """The database container may still be starting; retry connection failures."""
    init_db(engine)


def run_init_db(config) -> int:
    engine = build_engine(config.database.url, echo=config.database.echo)
    try:
        init_db_with_retry(engine)
    finally:
        engine.dispose()
    return 0


def run_analyze(config, application_id: str, user_id: str) -> int:
    """Analyze one application and print the result as JSON."""
    try:
        context = AppContext.build(config)
    except ValueError as e:
        logger.error(str(e))
        return 2

    result = asyncio.run(context.orchestrator.analyze_job_match(application_id, user_id))

    if result.ok:
        output = {"success": True, "state": result.state.value, "analysis": result.analysis.to_dict()}
        exit_code = 0
    else:
        output = {"success": False, "state": result.state.value, **result.error.to_dict()}
        exit_code = 1

    print(json.dumps(output, indent=2))
    context.engine.dispose()
    return exit_code


def run_score(input_path: str, as_of: Optional[str] = None) -> int:
    """Print the deterministic base score for a {"job": ..., "profile": ...} JSON file.

    No quota is consumed and the reasoning service is not called.
    """
    try:
        with open(input_path, "r") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise ValueError("input must be a JSON object with 'job' and 'profile'")
        job = JobDetails.from_dict(document.get("job") or {})
        profile = UserProfile.from_dict(document.get("profile") or {})
        as_of_date = parse_date(as_of)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Cannot score {input_path}: {e}")
        return 2

    breakdown = compute_base_score(job, profile, as_of=as_of_date)
    print(json.dumps(breakdown.to_dict(), indent=2))
    return 0


def run_serve(config) -> int:
    import uvicorn
    from web.backend.app import app
    from web.backend.dependencies import get_app_context

    try:
        context = AppContext.build(config)
    except ValueError as e:
        logger.error(str(e))
        return 2
    app.dependency_overrides[get_app_context] = lambda: context

    logger.info(f"Starting ApplyTrack scoring API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        app,
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="ApplyTrack match scoring")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    analyze = subparsers.add_parser('analyze', help='Analyze one application')
    analyze.add_argument('--application-id', required=True)
    analyze.add_argument('--user-id', required=True)

    score = subparsers.add_parser('score', help='Compute the base score for a job/profile JSON file')
    score.add_argument('--input', required=True, help='JSON file with "job" and "profile" objects')
    score.add_argument('--as-of', default=None, help='Date used for open-ended experience (default: today)')

    subparsers.add_parser('init-db', help='Create database tables')
    subparsers.add_parser('serve', help='Run the HTTP API')

    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == 'analyze':
        return run_analyze(config, args.application_id, args.user_id)
    if args.command == 'score':
        return run_score(args.input, args.as_of)
    if args.command == 'init-db':
        return run_init_db(config)
    return run_serve(config)


if __name__ == "__main__":
    sys.exit(main())
