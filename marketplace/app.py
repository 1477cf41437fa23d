from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import (
    get_current_user,
    require_admin,
    require_professional,
    require_user,
)
from .auth.models import LoginRequest
from .auth.users import authenticate, viewer_id
from .config import DEFAULT_APP_CONFIG
from .discovery.criteria import InvalidCoordinate, RawDiscoveryQuery, normalize_query
from .discovery.engine import NotFound
from .discovery.models import (
    CategoryOut,
    EstablishmentDetail,
    EstablishmentSummary,
    ProfessionalDetail,
    ProfessionalSummary,
    ReviewOut,
    ReviewRequest,
    SubjectKind,
)
from .discovery.repository import InvalidRating, get_repository
from .discovery.service import DiscoveryService
from .favorites.store import add_favorite, get_favorites, remove_favorite
from .feed.entitlements import get_subscriptions, subscribe, unsubscribe
from .feed.models import CreatePostRequest, FeedItemOut
from .feed.service import build_feed
from .feed.store import create_post
from .logging_utils import setup_logging
from .media import InvalidMedia, media_from_url, post_media

setup_logging()

app = FastAPI(title="Marketplace Discovery API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_APP_CONFIG.session_secret)

discovery = DiscoveryService()


def discovery_query(
    category_id: str | None = Query(default=None, alias="categoryId"),
    gender: str | None = None,
    tier: str | None = None,
    range_km: str | None = Query(default=None, alias="rangeKm"),
    lat: str | None = None,
    lng: str | None = None,
    min_rating: str | None = Query(default=None, alias="minRating"),
    sort: str | None = None,
) -> RawDiscoveryQuery:
    # Numbers stay strings here; normalize_query decides what is absent.
    return RawDiscoveryQuery(
        category_id=category_id,
        gender=gender,
        tier=tier,
        range_km=range_km,
        lat=lat,
        lng=lng,
        min_rating=min_rating,
        sort=sort,
    )


def _normalize(raw: RawDiscoveryQuery):
    try:
        return normalize_query(raw)
    except InvalidCoordinate:
        raise HTTPException(status_code=400, detail="INVALID_COORDINATE")


def _detail(kind: SubjectKind, subject_id: str, raw: RawDiscoveryQuery) -> BaseModel:
    origin, _ = _normalize(raw)
    try:
        return discovery.detail(kind, subject_id, origin)
    except NotFound:
        raise HTTPException(status_code=404, detail="NOT_FOUND")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/categories", response_model=list[CategoryOut])
def categories() -> list[CategoryOut]:
    return [
        CategoryOut(id=c.id, name=c.name, kind=c.kind)
        for c in get_repository().list_categories()
    ]


@app.get("/professionals", response_model=list[ProfessionalSummary])
def professionals(raw: RawDiscoveryQuery = Depends(discovery_query)):
    origin, criteria = _normalize(raw)
    return discovery.search(SubjectKind.PROFESSIONAL, origin, criteria)


@app.get("/professionals/{professional_id}", response_model=ProfessionalDetail)
def professional_detail(
    professional_id: str, raw: RawDiscoveryQuery = Depends(discovery_query),
):
    return _detail(SubjectKind.PROFESSIONAL, professional_id, raw)


@app.get("/establishments", response_model=list[EstablishmentSummary])
def establishments(raw: RawDiscoveryQuery = Depends(discovery_query)):
    origin, criteria = _normalize(raw)
    return discovery.search(SubjectKind.ESTABLISHMENT, origin, criteria)


@app.get("/establishments/{establishment_id}", response_model=EstablishmentDetail)
def establishment_detail(
    establishment_id: str, raw: RawDiscoveryQuery = Depends(discovery_query),
):
    return _detail(SubjectKind.ESTABLISHMENT, establishment_id, raw)


@app.get("/feed", response_model=list[FeedItemOut])
def feed(user: dict | None = Depends(get_current_user)) -> list[FeedItemOut]:
    return build_feed(viewer_id(user))


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.post("/establishments/{establishment_id}/reviews", response_model=ReviewOut)
def review_establishment(
    establishment_id: str,
    body: ReviewRequest,
    user: dict = Depends(require_user),
) -> ReviewOut:
    repo = get_repository()
    if repo.get_subject(SubjectKind.ESTABLISHMENT, establishment_id) is None:
        raise HTTPException(status_code=404, detail="NOT_FOUND")
    try:
        review = repo.add_establishment_review(establishment_id, body.stars, body.comment)
    except InvalidRating:
        raise HTTPException(status_code=400, detail="INVALID_RATING")
    return ReviewOut(
        establishment_id=review.subject_id,
        stars=review.stars,
        comment=review.comment,
        created_at=review.created_at,
    )


@app.post("/favorites/{professional_id}")
def favorite_add(professional_id: str, user: dict = Depends(require_user)) -> dict:
    if get_repository().get_subject(SubjectKind.PROFESSIONAL, professional_id) is None:
        raise HTTPException(status_code=404, detail="NOT_FOUND")
    return {"favorite": add_favorite(user["username"], professional_id)}


@app.delete("/favorites/{professional_id}")
def favorite_remove(professional_id: str, user: dict = Depends(require_user)) -> dict:
    remove_favorite(user["username"], professional_id)
    return {"ok": True}


@app.get("/favorites")
def favorites(user: dict = Depends(require_user)) -> dict:
    items = []
    for fav in get_favorites(user["username"]):
        try:
            result = discovery.lookup(SubjectKind.PROFESSIONAL, fav["professional_id"])
        except NotFound:
            continue
        p = result.subject
        items.append({
            "id": fav["id"],
            "professional": {
                "id": p.id,
                "name": p.name,
                "avatar_url": p.avatar_url,
                "rating": result.rating.average if result.rating else None,
                "category": p.category.name if p.category else None,
                "is_active": p.is_active,
            },
        })
    return {"favorites": items}


@app.post("/subscriptions/{author_id}")
def subscription_add(author_id: str, user: dict = Depends(require_user)) -> dict:
    if get_repository().get_subject(SubjectKind.PROFESSIONAL, author_id) is None:
        raise HTTPException(status_code=404, detail="NOT_FOUND")
    viewer = viewer_id(user)
    subscribe(viewer, author_id)
    return {"subscriptions": get_subscriptions(viewer)}


@app.delete("/subscriptions/{author_id}")
def subscription_remove(author_id: str, user: dict = Depends(require_user)) -> dict:
    viewer = viewer_id(user)
    unsubscribe(viewer, author_id)
    return {"subscriptions": get_subscriptions(viewer)}


@app.post("/posts/mine")
def post_create(body: CreatePostRequest, user: dict = Depends(require_professional)) -> dict:
    try:
        media = post_media((m.url, m.type) for m in body.media)
    except InvalidMedia:
        raise HTTPException(status_code=400, detail="INVALID_MEDIA")
    post = create_post(
        author_id=user["subject_id"],
        media=media,
        title=body.title,
        body=body.body,
        is_public=body.is_public,
        preview=media_from_url(body.preview_url) if body.preview_url else None,
    )
    return {"id": post["id"], "title": post["title"], "is_paywalled": not post["is_public"]}


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
