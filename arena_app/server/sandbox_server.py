"""FastAPI sandbox that mirrors the remote tournament API for local development."""

from __future__ import annotations

from datetime import datetime
import logging
from threading import Thread
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Response
import uvicorn

from arena_app.client.schemas import (
    AttemptSchema,
    LikeCountResponse,
    ParticipatePayload,
    ParticipateResponse,
    QuestionSchema,
    RegisterPayload,
    ScoreSchema,
    SignInPayload,
    SignInResponse,
    TournamentSchema,
    UserRefSchema,
    WireModel,
)
from arena_app.constants.network_constants import SANDBOX_HOST, SANDBOX_PORT
from arena_app.core.models import Difficulty, Tournament, UserAccount, UserRole
from arena_app.core.tournament_status import parse_timestamp
from arena_app.server.sandbox_store import SandboxStore

logger = logging.getLogger(__name__)


class TournamentCreatePayload(WireModel):
    """Payload schema for creating a tournament."""

    name: str
    category: str
    difficulty: Difficulty = Difficulty.MEDIUM
    start_date: datetime
    end_date: datetime
    minimum_passing_score: Optional[int] = None


class TournamentUpdatePayload(WireModel):
    """Payload schema for editing a tournament's name and window."""

    name: str
    start_date: datetime
    end_date: datetime


def _tournament_to_wire(tournament: Tournament) -> dict[str, object]:
    schema = TournamentSchema(
        id=tournament.id,
        name=tournament.name,
        category=tournament.category,
        difficulty=tournament.difficulty,
        start_date=tournament.start_date,
        end_date=tournament.end_date,
        minimum_passing_score=tournament.minimum_passing_score,
        attempts=[
            AttemptSchema(
                tournament_id=attempt.tournament_id,
                user=UserRefSchema(id=attempt.user_id, username=attempt.username),
                answers=attempt.answers,
                score=attempt.score,
                completed_at=attempt.completed_at,
            )
            for attempt in tournament.attempts
        ],
        like_count=tournament.like_count,
        created_by=tournament.created_by,
    )
    return schema.model_dump(by_alias=True, mode="json")


def _get_store_dependency(store: SandboxStore):
    def dependency() -> SandboxStore:
        return store

    return dependency


def create_sandbox_app(store: SandboxStore | None = None) -> FastAPI:
    """Create a FastAPI application serving the tournament endpoints under /api."""
    store = store or SandboxStore()
    app = FastAPI(title="QuizArena Sandbox API", version="0.1.0")
    store_dep = _get_store_dependency(store)
    router = APIRouter(prefix="/api")

    def current_user(
        authorization: Optional[str] = Header(default=None),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> UserAccount:
        if not authorization or not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Authentication required.")
        user = sandbox.user_for_token(authorization.removeprefix("Bearer ").strip())
        if user is None:
            raise HTTPException(status_code=401, detail="Your session has expired.")
        return user

    def current_admin(user: UserAccount = Depends(current_user)) -> UserAccount:
        if user.role is not UserRole.ADMIN:
            raise HTTPException(status_code=403, detail="Administrator access required.")
        return user

    # --- Auth ---

    @router.post("/auth/signin")
    def sign_in(payload: SignInPayload, sandbox: SandboxStore = Depends(store_dep)) -> dict[str, object]:
        authenticated = sandbox.authenticate(payload.username_or_email, payload.password)
        if authenticated is None:
            raise HTTPException(status_code=401, detail="Invalid username or password.")
        token, user = authenticated
        response = SignInResponse(
            access_token=token,
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
        )
        return response.model_dump(by_alias=True, mode="json")

    @router.post("/auth/signup/{role}", status_code=201)
    def sign_up(
        role: UserRole,
        payload: RegisterPayload,
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            user = sandbox.register(payload.username, payload.email, payload.password, role)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"message": f"User {user.username} registered successfully."}

    @router.post("/auth/forgot-password")
    def forgot_password() -> dict[str, object]:
        return {"message": "If the address is registered, a reset link has been sent."}

    @router.post("/auth/reset-password")
    def reset_password() -> dict[str, object]:
        return {"message": "Password has been reset."}

    # --- Tournaments ---

    @router.get("/tournaments")
    def list_tournaments(
        _: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> list[dict[str, object]]:
        return [_tournament_to_wire(t) for t in sandbox.list_tournaments()]

    @router.get("/tournaments/participated")
    def list_participated(
        user: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> list[dict[str, object]]:
        return [_tournament_to_wire(t) for t in sandbox.participated(user)]

    @router.get("/tournaments/categories")
    def list_categories(sandbox: SandboxStore = Depends(store_dep)) -> list[str]:
        return sandbox.categories()

    @router.post("/tournaments", status_code=201)
    def create_tournament(
        payload: TournamentCreatePayload,
        admin: UserAccount = Depends(current_admin),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            tournament = sandbox.create_tournament(
                name=payload.name,
                category=payload.category,
                difficulty=payload.difficulty,
                start_date=parse_timestamp(payload.start_date),
                end_date=parse_timestamp(payload.end_date),
                minimum_passing_score=payload.minimum_passing_score,
                created_by=admin.username,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _tournament_to_wire(tournament)

    @router.get("/tournaments/{tournament_id}")
    def get_tournament(
        tournament_id: str,
        _: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            return _tournament_to_wire(sandbox.get_tournament(tournament_id))
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @router.put("/tournaments/{tournament_id}")
    def update_tournament(
        tournament_id: str,
        payload: TournamentUpdatePayload,
        _: UserAccount = Depends(current_admin),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            tournament = sandbox.update_tournament(
                tournament_id,
                name=payload.name,
                start_date=parse_timestamp(payload.start_date),
                end_date=parse_timestamp(payload.end_date),
            )
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _tournament_to_wire(tournament)

    @router.delete("/tournaments/{tournament_id}", status_code=204)
    def delete_tournament(
        tournament_id: str,
        _: UserAccount = Depends(current_admin),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> Response:
        try:
            sandbox.delete_tournament(tournament_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return Response(status_code=204)

    @router.get("/tournaments/{tournament_id}/questions")
    def get_questions(
        tournament_id: str,
        _: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> list[dict[str, object]]:
        try:
            questions = sandbox.get_questions(tournament_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        # Correct answers never leave the server.
        return [
            QuestionSchema(id=q.id, question=q.question_text, options=q.options).model_dump(
                by_alias=True, exclude_none=True
            )
            for q in questions
        ]

    @router.post("/tournaments/{tournament_id}/participate")
    def participate(
        tournament_id: str,
        payload: ParticipatePayload,
        user: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            result = sandbox.participate(tournament_id, user, payload.answers)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        logger.info("%s scored %d/%d in tournament %s", user.username, result.score, result.total_questions, tournament_id)
        response = ParticipateResponse(
            score=result.score,
            total_questions=result.total_questions,
            passed=result.passed,
            message=result.message,
        )
        return response.model_dump(by_alias=True, mode="json")

    @router.get("/tournaments/{tournament_id}/scores")
    def get_scores(
        tournament_id: str,
        _: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> list[dict[str, object]]:
        try:
            rows = sandbox.scores(tournament_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return [
            ScoreSchema(
                username=row.username,
                score=row.score,
                total_questions=row.total_questions,
                completed_at=row.completed_at,
            ).model_dump(by_alias=True, mode="json", exclude_none=True)
            for row in rows
        ]

    # --- Likes ---

    @router.post("/tournaments/{tournament_id}/like")
    def like(
        tournament_id: str,
        user: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            count = sandbox.like(tournament_id, user)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return LikeCountResponse(count=count).model_dump()

    @router.delete("/tournaments/{tournament_id}/like")
    def unlike(
        tournament_id: str,
        user: UserAccount = Depends(current_user),
        sandbox: SandboxStore = Depends(store_dep),
    ) -> dict[str, object]:
        try:
            count = sandbox.unlike(tournament_id, user)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return LikeCountResponse(count=count).model_dump()

    @router.get("/tournaments/{tournament_id}/likes")
    def like_count(tournament_id: str, sandbox: SandboxStore = Depends(store_dep)) -> dict[str, object]:
        try:
            return LikeCountResponse(count=sandbox.like_count(tournament_id)).model_dump()
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    app.include_router(router)
    return app


def start_sandbox_server(
    store: SandboxStore | None = None,
    host: str = SANDBOX_HOST,
    port: int = SANDBOX_PORT,
) -> Thread:
    """Start the sandbox API in a background daemon thread."""
    app = create_sandbox_app(store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="warning")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="SandboxApiServer", daemon=True)
    thread.start()
    logger.info("Sandbox API listening on http://%s:%d/api", host, port)
    return thread
