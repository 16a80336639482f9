from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.adjustment.client import AdjustmentClient
from core.config_loader import AppConfig, ReasoningConfig
from core.llm.openai_service import OpenAIReasoningService
from core.orchestrator import MatchDataStore, ScoringOrchestrator
from core.quota.tracker import QuotaTracker
from core.usage.recorder import InMemoryUsageRecorder, UsageRecorder
from database.database import build_engine, build_session_factory
from database.store import SqlMatchDataStore
from database.usage_recorder import SqlUsageRecorder


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    One context is built per process. The QuotaTracker it holds is the only
    shared mutable state and must not be rebuilt per request.
    """
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker
    quota_tracker: QuotaTracker
    usage_recorder: UsageRecorder
    store: MatchDataStore
    reasoning_service: OpenAIReasoningService
    orchestrator: ScoringOrchestrator

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance

        Raises:
            ValueError: no reasoning API key is configured
        """
        engine = build_engine(config.database.url, echo=config.database.echo)
        session_factory = build_session_factory(engine)

        quota_tracker = QuotaTracker(
            limits=config.quota.limits,
            window_seconds=config.quota.window_seconds
        )

        if config.usage.enabled:
            usage_recorder = SqlUsageRecorder(session_factory)
        else:
            usage_recorder = InMemoryUsageRecorder()

        reasoning_service = cls._build_reasoning_service(config.reasoning)
        adjustment_client = AdjustmentClient(
            reasoning_service,
            usage_recorder=usage_recorder,
            description_char_limit=config.scoring.description_char_limit,
            clock=quota_tracker.now,
            window_seconds=quota_tracker.window_seconds
        )

        store = SqlMatchDataStore(session_factory)
        orchestrator = ScoringOrchestrator(
            store=store,
            quota_tracker=quota_tracker,
            adjustment_client=adjustment_client,
            scoring_config=config.scoring
        )

        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            quota_tracker=quota_tracker,
            usage_recorder=usage_recorder,
            store=store,
            reasoning_service=reasoning_service,
            orchestrator=orchestrator
        )

    @staticmethod
    def _build_reasoning_service(reasoning_config: ReasoningConfig) -> OpenAIReasoningService:
        """Build the reasoning service from configuration."""
        if not reasoning_config.api_key:
            raise ValueError(
                "No reasoning API key configured. Set reasoning.api_key in config.yaml "
                "or the REASONING_API_KEY / OPENAI_API_KEY environment variable."
            )

        model_config = {
            'model': reasoning_config.model,
            'temperature': reasoning_config.temperature,
            'max_tokens': reasoning_config.max_tokens,
        }

        return OpenAIReasoningService(
            api_key=reasoning_config.api_key,
            base_url=reasoning_config.base_url,
            model_config=model_config,
            request_timeout_seconds=reasoning_config.request_timeout_seconds,
            max_transient_retries=reasoning_config.max_transient_retries
        )
