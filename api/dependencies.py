# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from api.AppContainer import AppContainer
from services.KBActivityService import KBActivityService
from services.KBAnswerService import KBAnswerService
from services.KBReviewService import KBReviewService
from services.KBSourceService import KBSourceService


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request so importing the app needs no credentials
    return AppContainer()


def get_answer_service() -> KBAnswerService:
    return get_app_container().answer_service


def get_review_service() -> KBReviewService:
    return get_app_container().review_service


def get_source_service() -> KBSourceService:
    return get_app_container().source_service


def get_activity_service() -> KBActivityService:
    return get_app_container().activity_service
