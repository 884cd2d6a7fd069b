import bcrypt
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.gifting.app.interface.i_password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    @Logger.io
    def hash_password(self, *, plain_password: SecretStr) -> str:
        password_bytes = plain_password.get_secret_value().encode('utf-8')
        return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode('utf-8')

    @Logger.io
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.get_secret_value().encode('utf-8'), hashed_password.encode('utf-8')
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
