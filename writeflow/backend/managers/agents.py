"""Agent catalog operations: install, enable/disable, upgrade, uninstall."""

from __future__ import annotations

import uuid

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.db.tables import Agent as AgentRow
from writeflow.backend.models.agent import AgentInstall, AgentModel


async def list_agents(db: AsyncSession) -> list[AgentModel]:
    """List installed agents alphabetically."""
    result = await db.execute(select(AgentRow).order_by(AgentRow.name.asc()))
    return [AgentModel.model_validate(row) for row in result.scalars().all()]


async def install_agent(db: AsyncSession, body: AgentInstall) -> AgentModel:
    """Install an agent.  New agents start enabled."""
    agent = AgentModel(id=f"agent-{uuid.uuid4()}", enabled=True, **body.model_dump())
    db.add(AgentRow(**agent.model_dump()))
    await db.commit()
    logger.info("Installed agent {} ({} {})", agent.id, agent.name, agent.version)
    return agent


async def set_agent_enabled(db: AsyncSession, agent_id: str, enabled: bool) -> None:
    await db.execute(update(AgentRow).where(AgentRow.id == agent_id).values(enabled=enabled))
    await db.commit()


async def update_agent_version(db: AsyncSession, agent_id: str, version: str) -> None:
    await db.execute(update(AgentRow).where(AgentRow.id == agent_id).values(version=version))
    await db.commit()


async def uninstall_agent(db: AsyncSession, agent_id: str) -> None:
    await db.execute(delete(AgentRow).where(AgentRow.id == agent_id))
    await db.commit()
    logger.info("Uninstalled agent {}", agent_id)
