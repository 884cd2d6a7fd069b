from src.platform.database.asyncpg_setting import store_connection
from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.gifting.domain.entity.user_entity import UserEntity
from src.service.gifting.driven_adapter.repo.user_row_mapper import USER_COLUMNS, row_to_user


class UserQueryRepoImpl(IUserQueryRepo):
    @Logger.io
    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(f'SELECT {USER_COLUMNS} FROM app_user WHERE id = $1', user_id)
            return row_to_user(row) if row else None

    @Logger.io
    async def get_by_email(self, *, email: str) -> UserEntity | None:
        async with store_connection() as conn:
            row = await conn.fetchrow(
                f'SELECT {USER_COLUMNS} FROM app_user WHERE email = $1', email
            )
            return row_to_user(row) if row else None
