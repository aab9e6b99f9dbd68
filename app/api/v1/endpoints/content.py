"""
Content endpoints: sections, techniques and the standard session.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_content_provider
from app.content.provider import ContentError, ContentProvider
from app.schemas.content import ContentStats, Section, SessionPlan, Technique

logger = logging.getLogger(__name__)

router = APIRouter()


def _content_unavailable(e: ContentError) -> HTTPException:
    logger.error("Failed to load content: %s", e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load content")


@router.get("/sections", summary="List the six meditation sections in order.", response_model=list[Section], )
def list_sections(content: ContentProvider = Depends(get_content_provider)):
    try:
        return content.get_sections()
    except ContentError as e:
        raise _content_unavailable(e)


@router.get("/techniques", summary="List the techniques of a section.", response_model=list[Technique], )
def list_techniques(section_id: str = Query(..., description="Section identifier, e.g. 'section-mind'"),
                    content: ContentProvider = Depends(get_content_provider), ):
    try:
        return content.get_techniques_by_section(section_id)
    except ContentError as e:
        raise _content_unavailable(e)


@router.get("/sessions/standard", summary="Get the standard daily session plan.", response_model=SessionPlan, )
def get_standard_session(content: ContentProvider = Depends(get_content_provider)):
    try:
        return content.build_plan("Standard Meditation")
    except ContentError as e:
        raise _content_unavailable(e)


@router.get("/stats", summary="Summary of the content catalogue.", response_model=ContentStats, )
def get_content_stats(content: ContentProvider = Depends(get_content_provider)):
    try:
        return content.get_data_stats()
    except ContentError as e:
        raise _content_unavailable(e)
