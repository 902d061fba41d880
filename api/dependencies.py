# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-01-31
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from api.AppContainer import AppContainer
from services.RegistryAdminService import RegistryAdminService
from services.RegistryChatService import RegistryChatService
from services.RegistryHealthService import RegistryHealthService


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request, then reused for the life of the process
    return AppContainer()


def get_chat_service() -> RegistryChatService:
    return get_app_container().chat_service


def get_admin_service() -> RegistryAdminService:
    return get_app_container().admin_service


def get_health_service() -> RegistryHealthService:
    return get_app_container().health_service
