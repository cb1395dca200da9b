"""
Client state and its local JSON persistence.
"""

from pathlib import Path
from typing import List, Optional, Union
import logging
import uuid

import aiofiles
from pydantic import Field

from app.config import settings
from app.schemas.common import CamelModel
from app.schemas.property import PropertyResponse

logger = logging.getLogger(__name__)


def generate_user_identifier() -> str:
    """Opaque per-browser token."""
    return f"user_{uuid.uuid4().hex}"


class ClientState(CamelModel):
    """
    Everything one browser remembers: who it is, what is in its cart and
    which listings it favorited.
    """

    user_identifier: str = Field(default_factory=generate_user_identifier)
    cart: List[PropertyResponse] = Field(default_factory=list)
    favorites: List[int] = Field(default_factory=list)


class LocalStateStore:
    """
    Persists ClientState as a JSON file so the user identifier survives
    restarts. A missing file yields a fresh state with a new identifier,
    which is written back immediately.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.client_state_path).expanduser()

    async def load(self) -> ClientState:
        if not self.path.exists():
            state = ClientState()
            await self.save(state)
            logger.info(f"Created client state {self.path} for {state.user_identifier}")
            return state

        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            content = await f.read()
        return ClientState.model_validate_json(content)

    async def save(self, state: ClientState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(state.model_dump_json(by_alias=True, indent=2))
