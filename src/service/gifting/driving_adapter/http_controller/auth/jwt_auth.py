"""
Session token handling.

The token only identifies the user; authorisation decisions are always made
on a freshly loaded account.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.gifting.domain.entity.user_entity import UserEntity


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = settings.ACCESS_TOKEN_EXPIRE_DAYS

    @property
    def max_age_seconds(self) -> int:
        return self.token_expire_days * 24 * 60 * 60

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
            'user_id': user_entity.id,
            'user_type': user_entity.user_type.value,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_user_id_from_jwt(self, token: Optional[str]) -> int:
        if not token:
            raise AuthenticationError('Not authenticated')

        user_id = self.decode_jwt_token(token).get('user_id')
        if not isinstance(user_id, int):
            raise AuthenticationError('Invalid token')
        return user_id
