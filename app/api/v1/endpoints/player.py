"""
Player endpoints.

Endpoints are ``async`` so that server-side tick schedulers are started
on the application's event loop.  Endpoints that can finish a session
wait for the completion to be written before responding.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_player_service
from app.content.provider import ContentError
from app.schemas.player import PlayerCreate, PlayerResponse
from app.services.player_service import PlayerService

router = APIRouter()


@router.post("", summary="Create a player for a standard or custom session.", response_model=PlayerResponse,
             status_code=status.HTTP_201_CREATED, )
async def create_player(data: PlayerCreate, service: PlayerService = Depends(get_player_service)):
    try:
        return service.create(data)
    except ContentError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load content")


@router.get("/{player_id}", summary="Get the playback state.", response_model=PlayerResponse, )
async def get_player(player_id: str, service: PlayerService = Depends(get_player_service)):
    return service.get(player_id)


@router.post("/{player_id}/start", summary="Start or resume playback.", response_model=PlayerResponse, )
async def start_player(player_id: str, service: PlayerService = Depends(get_player_service)):
    response = service.start(player_id)
    await service.drain()
    return response


@router.post("/{player_id}/pause", summary="Pause playback.", response_model=PlayerResponse, )
async def pause_player(player_id: str, service: PlayerService = Depends(get_player_service)):
    return service.pause(player_id)


@router.post("/{player_id}/tick", summary="Advance a client-driven player.", response_model=PlayerResponse,
             responses={status.HTTP_409_CONFLICT: {"description": "Player is driven by server ticks"}}, )
async def tick_player(player_id: str, seconds: int = Query(1, ge=1, le=3600, description="Seconds to advance"),
                      service: PlayerService = Depends(get_player_service), ):
    response = service.tick(player_id, seconds)
    await service.drain()
    return response


@router.post("/{player_id}/reset", summary="Reset playback to the beginning.", response_model=PlayerResponse, )
async def reset_player(player_id: str, service: PlayerService = Depends(get_player_service)):
    return service.reset(player_id)


@router.delete("/{player_id}", summary="Discard a player.", status_code=status.HTTP_204_NO_CONTENT, )
async def delete_player(player_id: str, service: PlayerService = Depends(get_player_service)):
    service.discard(player_id)
