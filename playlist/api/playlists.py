"""Playlist API endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from playlist.core import playlists
from playlist.core.models import Item, PlaylistPage

router = APIRouter(prefix="/api/channels/{channel_id}/playlist", tags=["playlist"])


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InsertItem(_Body):
    title: str
    index: int
    client_fingerprint: str = Field(alias="clientFingerprint")


class DeleteItem(_Body):
    client_fingerprint: str = Field(alias="clientFingerprint")


class MoveItem(_Body):
    new_index: int = Field(alias="newIndex")
    client_fingerprint: str = Field(alias="clientFingerprint")


class SyncCheck(_Body):
    client_fingerprint: str = Field(alias="clientFingerprint")


def item_payload(item: Item) -> dict:
    return {"itemId": item.item_id, "index": item.position, "title": item.title}


def page_payload(page: PlaylistPage) -> dict:
    return {
        "items": [item_payload(item) for item in page.items],
        "page": {
            "limit": page.limit,
            "offset": page.offset,
            "nextOffset": page.next_offset,
            "hasMore": page.has_more,
        },
        "totalCount": page.total_count,
        "serverFingerprint": page.fingerprint,
    }


@router.get("/items")
def get_items(channel_id: str, offset: int = 0, limit: int | None = None):
    return page_payload(playlists.get_page(channel_id, offset=offset, limit=limit))


@router.post("/items", status_code=201)
def insert_item(channel_id: str, body: InsertItem):
    result = playlists.insert_item(channel_id, body.title, body.index, body.client_fingerprint)
    return {"item": item_payload(result.item), "serverFingerprint": result.fingerprint}


@router.delete("/items/{item_id}")
def delete_item(channel_id: str, item_id: str, body: DeleteItem):
    result = playlists.delete_item(channel_id, item_id, body.client_fingerprint)
    return {"serverFingerprint": result.fingerprint}


@router.post("/items/{item_id}/move")
def move_item(channel_id: str, item_id: str, body: MoveItem):
    result = playlists.move_item(channel_id, item_id, body.new_index, body.client_fingerprint)
    return {"item": item_payload(result.item), "serverFingerprint": result.fingerprint}


@router.post("/sync-check")
def sync_check(channel_id: str, body: SyncCheck):
    result = playlists.sync_check(channel_id, body.client_fingerprint)
    return {"serverFingerprint": result.fingerprint}
