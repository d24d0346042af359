"""Agent catalog endpoints (RPC-style)."""

from __future__ import annotations

from fastapi import APIRouter, status

from writeflow.backend.deps import DbSession
from writeflow.backend.managers import agents as manager
from writeflow.backend.models.agent import AgentInstall, AgentModel
from writeflow.backend.models.api import AgentEnabledUpdate, AgentVersionUpdate

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("/list", response_model=list[AgentModel])
async def list_agents(db: DbSession) -> list[AgentModel]:
    return await manager.list_agents(db)


@router.post("/install", response_model=AgentModel, status_code=status.HTTP_201_CREATED)
async def install_agent(body: AgentInstall, db: DbSession) -> AgentModel:
    return await manager.install_agent(db, body)


@router.post("/{agent_id}/enabled", status_code=status.HTTP_204_NO_CONTENT)
async def set_agent_enabled(agent_id: str, body: AgentEnabledUpdate, db: DbSession) -> None:
    await manager.set_agent_enabled(db, agent_id, body.enabled)


@router.post("/{agent_id}/version", status_code=status.HTTP_204_NO_CONTENT)
async def update_agent_version(agent_id: str, body: AgentVersionUpdate, db: DbSession) -> None:
    await manager.update_agent_version(db, agent_id, body.version)


@router.post("/{agent_id}/uninstall", status_code=status.HTTP_204_NO_CONTENT)
async def uninstall_agent(agent_id: str, db: DbSession) -> None:
    await manager.uninstall_agent(db, agent_id)
