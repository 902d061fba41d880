# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-01-31
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

from config.Config import Config
from index.IndexSynchronizer import IndexSynchronizer
from prompt.DisclosurePolicy import DisclosurePolicy
from prompt.PromptAssembler import PromptAssembler
from record.JsonRecordStore import JsonRecordStore
from retrieval.RegistryRetriever import RegistryRetriever
from services.AnswerStreamer import AnswerStreamer
from services.ProviderFactory import build_completion_provider, build_embedder, build_vector_store
from services.RegistryAdminService import RegistryAdminService
from services.RegistryChatService import RegistryChatService
from services.RegistryHealthService import RegistryHealthService
from utility.errors import ConfigurationMissing
from utility.logging_utils import get_class_logger


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Constructed once per process and handed out via FastAPI dependencies.

    A missing completion credential does not stop start-up: the chat service
    answers with an explanatory message instead.
    """

    def __init__(self, cfg: Optional[Config] = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Configuration: %s", self.cfg.summary())

        # Core infrastructure
        self.embedder = build_embedder(self.cfg)
        self.store = build_vector_store(self.cfg)
        self.record_store = JsonRecordStore(self.cfg.records_path, seed_path=self.cfg.seed_path)

        self.synchronizer = IndexSynchronizer(
            record_store=self.record_store,
            embedder=self.embedder,
            store=self.store,
        )
        self.retriever = RegistryRetriever(
            embedder=self.embedder,
            store=self.store,
            synchronizer=self.synchronizer,
        )

        # Completion provider (optional at start-up)
        self.completion_unavailable: Optional[ConfigurationMissing] = None
        try:
            self.completion_provider = build_completion_provider(self.cfg)
        except ConfigurationMissing as e:
            self.logger.warning("Completion provider unavailable: %s", e)
            self.completion_provider = None
            self.completion_unavailable = e

        self.streamer = AnswerStreamer(self.completion_provider, unavailable=self.completion_unavailable)

        self.chat_service = RegistryChatService(
            retriever=self.retriever,
            assembler=PromptAssembler(),
            streamer=self.streamer,
            policy=DisclosurePolicy(),
        )

        self.admin_service = RegistryAdminService(
            record_store=self.record_store,
            synchronizer=self.synchronizer,
        )

        self.health_service = RegistryHealthService(
            store=self.store,
            embedder=self.embedder,
            completion=self.completion_provider,
            missing_config=self.completion_unavailable.missing if self.completion_unavailable else [],
        )
