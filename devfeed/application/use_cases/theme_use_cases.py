# devfeed/application/use_cases/theme_use_cases.py (async version)

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from devfeed.adapters.outbound.persistence.repositories.theme_repository import theme_repository
from devfeed.application.dtos.theme_dto import ThemeCreate, ThemeResponse
from devfeed.domain.exceptions import ThemeAlreadyExistsException, ThemeInUseException

logger = logging.getLogger(__name__)


class AsyncThemeService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def list_themes(self) -> List[ThemeResponse]:
        themes = await theme_repository.list_all(self.db)
        return [ThemeResponse.model_validate(theme) for theme in themes]

    async def get_theme(self, theme_id: int) -> ThemeResponse:
        theme = await theme_repository.get_or_raise(self.db, theme_id)
        return ThemeResponse.model_validate(theme)

    async def _ensure_name_free(self, name: str, theme_id: Optional[int] = None) -> None:
        existing = await theme_repository.get_by_name(self.db, name)
        if existing is not None and existing.id != theme_id:
            raise ThemeAlreadyExistsException(f"Theme '{name}' already exists")

    async def create_theme(self, request: ThemeCreate) -> ThemeResponse:
        """
        Raises:
            ThemeAlreadyExistsException: If a theme with the same name exists
        """
        await self._ensure_name_free(request.name)

        theme = await theme_repository.create(
            self.db,
            obj_in={"name": request.name, "description": request.description},
        )
        logger.info(f"Theme {theme.id} created")
        return ThemeResponse.model_validate(theme)

    async def update_theme(self, theme_id: int, request: ThemeCreate) -> ThemeResponse:
        """
        Replace name and description of a theme. Keeping the current name is allowed.

        Raises:
            ThemeNotFoundException: If the theme does not exist
            ThemeAlreadyExistsException: If another theme already has the new name
        """
        theme = await theme_repository.get_or_raise(self.db, theme_id)
        await self._ensure_name_free(request.name, theme_id)

        theme = await theme_repository.update(
            self.db,
            db_obj=theme,
            obj_in={"name": request.name, "description": request.description},
        )
        logger.info(f"Theme {theme_id} updated")
        return ThemeResponse.model_validate(theme)

    async def delete_theme(self, theme_id: int) -> None:
        """
        Delete a theme along with its subscriptions.

        Raises:
            ThemeNotFoundException: If the theme does not exist
            ThemeInUseException: If articles are still classified under it
        """
        theme = await theme_repository.get_or_raise(self.db, theme_id)
        if await theme_repository.has_articles(self.db, theme_id):
            raise ThemeInUseException(f"Theme '{theme.name}' still has articles")

        await theme_repository.remove(self.db, db_obj=theme)
        logger.info(f"Theme {theme_id} deleted")
