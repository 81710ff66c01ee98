from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


# int (linear index), [row, col] (grid / pyramid) or "waste"
PositionIn = Union[int, List[int], str]


class NewGameReq(BaseModel):
    kind: Literal["linear", "grid", "pyramid"] = "linear"
    gridSize: Literal[5, 6] = 5
    suitorRule: bool = False
    scorePerMove: int = Field(10, ge=0)
    linearGaps: List[int] = [0, 1, 2]
    maxRecycles: Optional[int] = Field(None, ge=0)
    seed: Optional[int] = None


class SessionReq(BaseModel):
    sessionId: str


class ActivateReq(BaseModel):
    sessionId: str
    position: PositionIn


class AutoPlayReq(BaseModel):
    sessionId: str
    maxSteps: int = Field(500, ge=1, le=5000)


class GetStateResp(BaseModel):
    state: Dict[str, Any]


class StateEnvelope(BaseModel):
    sessionId: str
    state: Dict[str, Any]


class MoveResp(BaseModel):
    result: str
    positions: List[Any]
    outcome: str
    state: Dict[str, Any]


class HintResp(BaseModel):
    kind: Optional[str] = None
    positions: List[Any] = []


class AutoPlayResp(BaseModel):
    steps: int
    state: Dict[str, Any]
