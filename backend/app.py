from __future__ import annotations

from typing import Any, Dict, List
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.models import (
    NewGameReq,
    SessionReq,
    ActivateReq,
    AutoPlayReq,
    GetStateResp,
    StateEnvelope,
    MoveResp,
    HintResp,
    AutoPlayResp,
)

from engine.core import (
    GameConfig,
    GameState,
    MoveResult,
    new_game,
    activate,
    draw_from_stock,
    obj_to_pos,
    to_json,
)
from engine.ai import find_hint, auto_play


# In-memory session store
SESSIONS: Dict[str, GameState] = {}


def _new_session_id() -> str:
    return uuid.uuid4().hex


def get_state(session_id: str) -> GameState:
    state = SESSIONS.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def save_state(session_id: str, state: GameState) -> None:
    SESSIONS[session_id] = state


def _pos_out(pos: Any) -> Any:
    return list(pos) if isinstance(pos, tuple) else pos


def _move_resp(res: MoveResult, state: GameState) -> MoveResp:
    return MoveResp(
        result=res.kind,
        positions=[_pos_out(p) for p in res.positions],
        outcome=res.outcome,
        state=to_json(state),
    )


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/new-game", response_model=StateEnvelope)
def new_game_endpoint(req: NewGameReq) -> StateEnvelope:
    try:
        cfg = GameConfig(
            kind=req.kind,
            grid_size=int(req.gridSize),
            suitor_rule=bool(req.suitorRule),
            score_per_move=int(req.scorePerMove),
            linear_gaps=tuple(int(g) for g in req.linearGaps),
            max_recycles=req.maxRecycles,
            seed=req.seed,
        )
        state = new_game(cfg)
        sid = _new_session_id()
        save_state(sid, state)
        return StateEnvelope(sessionId=sid, state=to_json(state))
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"new-game failed: {e}")


@app.get("/state/{sessionId}", response_model=GetStateResp)
def get_state_endpoint(sessionId: str) -> GetStateResp:
    state = get_state(sessionId)
    return GetStateResp(state=to_json(state))


@app.post("/activate", response_model=MoveResp)
def activate_endpoint(req: ActivateReq) -> MoveResp:
    try:
        state = get_state(req.sessionId)
        pos = obj_to_pos(req.position)
        res = activate(state, pos)
        save_state(req.sessionId, state)
        return _move_resp(res, state)
    except HTTPException:
        raise
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"activate failed: {e}")


@app.post("/draw", response_model=MoveResp)
def draw_endpoint(req: SessionReq) -> MoveResp:
    try:
        state = get_state(req.sessionId)
        res = draw_from_stock(state)
        save_state(req.sessionId, state)
        return _move_resp(res, state)
    except HTTPException:
        raise
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"draw failed: {e}")


@app.get("/hint/{sessionId}", response_model=HintResp)
def hint_endpoint(sessionId: str) -> HintResp:
    state = get_state(sessionId)
    hint = find_hint(state)
    if hint is None:
        return HintResp()
    positions: List[Any] = [_pos_out(p) for p in hint.positions]
    return HintResp(kind=hint.kind, positions=positions)


@app.post("/auto-play", response_model=AutoPlayResp)
def auto_play_endpoint(req: AutoPlayReq) -> AutoPlayResp:
    try:
        state = get_state(req.sessionId)
        steps = auto_play(state, max_steps=req.maxSteps)
        save_state(req.sessionId, state)
        return AutoPlayResp(steps=steps, state=to_json(state))
    except HTTPException:
        raise
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"auto-play failed: {e}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app:app", host="0.0.0.0", port=8000, reload=True)
