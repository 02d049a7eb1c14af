from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from device_usage.clients.posts import PostsClient
from device_usage.core.config import Settings
from device_usage.repositories.base import UsageRepository
from device_usage.repositories.sql import SqlUsageRepository
from device_usage.services.report import ReportService
from device_usage.services.usage import UsageRecordService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_usage_repository(request: Request) -> UsageRepository:
    return SqlUsageRepository(engine=request.app.state.engine)


def get_usage_service(
    repo: Annotated[UsageRepository, Depends(get_usage_repository)],
) -> UsageRecordService:
    return UsageRecordService(repo)


def get_report_service(
    repo: Annotated[UsageRepository, Depends(get_usage_repository)],
) -> ReportService:
    return ReportService(repo)


def get_posts_client(request: Request) -> PostsClient:
    return request.app.state.posts_client


UsageService = Annotated[UsageRecordService, Depends(get_usage_service)]
Reports = Annotated[ReportService, Depends(get_report_service)]
