from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from device_usage.api.deps import get_posts_client, get_settings
from device_usage.api.errors import as_http_exception
from device_usage.clients.posts import PostsClient
from device_usage.core.config import Settings
from device_usage.core.errors import UpstreamFaultError
from device_usage.schemas.external import ExternalPostsResponse, PostSummary

router = APIRouter(prefix="/external-posts")


@router.get("", response_model=ExternalPostsResponse)
async def external_posts(
    client: Annotated[PostsClient, Depends(get_posts_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ExternalPostsResponse:
    try:
        result = await client.fetch_sample(limit=settings.posts_sample_size)
    except UpstreamFaultError as e:
        raise as_http_exception(e) from e
    return ExternalPostsResponse(
        count=result.count,
        sample=[PostSummary(id=p.id, title=p.title) for p in result.sample],
    )
