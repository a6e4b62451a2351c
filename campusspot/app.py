from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query

from .assistant.chat import ChatSession
from .assistant.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    DescribeResponse,
)
from .assistant.recommender import describe_tags, generate_description
from .catalog.config import DEFAULT_STORE_CONFIG
from .catalog.models import (
    FilterState,
    NewPlace,
    NoiseLevel,
    Place,
    ProfileResponse,
    ReviewRequest,
    Tab,
    ToggleResponse,
)
from .catalog.stats import compute_profile
from .catalog.storage import JsonFileStorage
from .catalog.store import CatalogStore
from .llm.groq_client import aclose_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await aclose_client()


app = FastAPI(title="CampusSpot API", version="1.0.0", lifespan=lifespan)

_store: CatalogStore | None = None
_chat: ChatSession | None = None


async def get_store() -> CatalogStore:
    """Return the process-wide catalog store, restoring it on first call."""
    global _store
    if _store is None:
        _store = CatalogStore(JsonFileStorage(DEFAULT_STORE_CONFIG.data_dir))
        _store.initialize()
    return _store


async def get_chat_session() -> ChatSession:
    global _chat
    if _chat is None:
        _chat = ChatSession()
    return _chat


def _require_place(store: CatalogStore, place_id: str) -> Place:
    place = store.get_place(place_id)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/places", response_model=list[Place])
async def list_places(
    tab: Tab = Tab.discover,
    q: str = "",
    outlets: bool = False,
    open_late: bool = False,
    noise: list[NoiseLevel] | None = Query(default=None),
    store: CatalogStore = Depends(get_store),
) -> list[Place]:
    filters = FilterState(query=q, outlets=outlets, open_late=open_late, noise=frozenset(noise or ()))
    return store.visible_places(tab, filters)


@app.get("/places/{place_id}", response_model=Place)
async def get_place(place_id: str, store: CatalogStore = Depends(get_store)) -> Place:
    return _require_place(store, place_id)


@app.post("/places", response_model=Place, status_code=201)
async def add_place(body: NewPlace, store: CatalogStore = Depends(get_store)) -> Place:
    return store.add_place(body)


@app.post("/places/{place_id}/favorite", response_model=ToggleResponse)
async def toggle_favorite(place_id: str, store: CatalogStore = Depends(get_store)) -> ToggleResponse:
    _require_place(store, place_id)
    return ToggleResponse(id=place_id, active=store.toggle_favorite(place_id))


@app.post("/places/{place_id}/visited", response_model=ToggleResponse)
async def toggle_visited(place_id: str, store: CatalogStore = Depends(get_store)) -> ToggleResponse:
    _require_place(store, place_id)
    return ToggleResponse(id=place_id, active=store.toggle_visited(place_id))


@app.post("/places/{place_id}/reviews", response_model=Place, status_code=201)
async def add_review(
    place_id: str,
    body: ReviewRequest,
    store: CatalogStore = Depends(get_store),
) -> Place:
    place = store.add_review(place_id, body.rating, body.text)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


@app.get("/profile", response_model=ProfileResponse)
async def profile(store: CatalogStore = Depends(get_store)) -> ProfileResponse:
    return ProfileResponse(**compute_profile(store.state))


# ── Assistant endpoints ──────────────────────────────────────────────────


@app.post("/describe", response_model=DescribeResponse)
async def describe(body: NewPlace) -> DescribeResponse:
    """Suggest a description for the add-place form before it is submitted."""
    description = await generate_description(body.name, describe_tags(body))
    return DescribeResponse(description=description)


@app.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    store: CatalogStore = Depends(get_store),
    session: ChatSession = Depends(get_chat_session),
) -> ChatResponse:
    reply = await session.send(body.message, store.state.places)
    if reply is None:
        raise HTTPException(status_code=422, detail="Message must not be blank")
    return ChatResponse(message=reply, history=session.messages)


@app.get("/chat", response_model=list[ChatMessage])
async def chat_history(session: ChatSession = Depends(get_chat_session)) -> list[ChatMessage]:
    return session.messages
