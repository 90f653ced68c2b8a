from beartype import beartype
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from linkregistry.models import UserModel
from linkregistry.dao.base import UserBaseDAO
from linkregistry.dao.sql.schema import users
from linkregistry.dao.sql.helpers import handle_sql_error, to_user
from linkregistry.dao.exceptions import UserAlreadyExistsError


class UserSQLDAO(UserBaseDAO):
    """SQL-based Data Access Object (DAO) for user accounts

    Uniqueness is enforced by the unique index on `users.email_key`
    (the lower-cased email).
    """

    @handle_sql_error
    @beartype
    def insert(self, user: UserModel) -> UserModel:
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    users.insert().values(
                        id=user.id,
                        email=user.email,
                        email_key=user.email.lower(),
                        password_hash=user.password_hash,
                        created_at=user.created_at,
                        updated_at=user.updated_at,
                    )
                )
        except IntegrityError:
            if self.get_by_email(user.email) is not None:
                raise UserAlreadyExistsError(f"User with email '{user.email}' already exists.")
            raise
        return user

    @handle_sql_error
    @beartype
    def get_by_email(self, email: str) -> UserModel | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(users).where(users.c.email_key == email.lower())).mappings().first()
        return None if row is None else to_user(row)

    @handle_sql_error
    @beartype
    def get(self, user_id: str) -> UserModel | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(users).where(users.c.id == user_id)).mappings().first()
        return None if row is None else to_user(row)
