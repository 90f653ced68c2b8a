"""Relational Data Access Object (DAO) logic for short URLs

Dialect-neutral implementation of ShortURLBaseDAO on SQLAlchemy Core. Concrete
DAOs combine it with a client mixin which provides the engine and the
dialect-specific insert-or-ignore statement:

    class ShortURLPostgresDAO(PostgresClientMixin, ShortURLSQLDAO): ...

NOTE:
    - insert() relies on the unique index on `urls.short_code`: a duplicate
      surfaces as ShortURLAlreadyExistsError, the same condition the memory
      backend reports from its pre-check.
    - hit() is one `UPDATE ... SET access_count = access_count + 1` statement,
      so concurrent increments are never lost and the target URL column is
      never written.
    - Category associations are dropped by the `ON DELETE CASCADE` foreign keys
      of `url_categories`.
"""

from beartype import beartype
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from linkregistry.models import ShortURLModel, CategoryModel
from linkregistry.dao.base import ShortURLBaseDAO
from linkregistry.dao.sql.schema import urls, categories, url_categories
from linkregistry.dao.sql.helpers import handle_sql_error, to_short_url, to_category
from linkregistry.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, CategoryNotFoundError
from linkregistry.utils.helpers import utcnow


class ShortURLSQLDAO(ShortURLBaseDAO):
    """SQL-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see SQLClientMixin):
        engine (sqlalchemy.engine.Engine):
            Engine used to talk to the database.
    """

    @handle_sql_error
    @beartype
    def insert(self, short_url: ShortURLModel) -> ShortURLModel:
        """Insert a short URL row

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                On any other database failure (e.g., unknown owner id).
        """
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    urls.insert().values(
                        id=short_url.id,
                        url=short_url.target,
                        short_code=short_url.shortcode,
                        user_id=short_url.user_id,
                        created_at=short_url.created_at,
                        updated_at=short_url.updated_at,
                        access_count=short_url.access_count,
                    )
                )
        except IntegrityError:
            if self.exists(short_url.shortcode):
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            raise
        return short_url

    @handle_sql_error
    @beartype
    def get(self, shortcode: str) -> ShortURLModel | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(urls).where(urls.c.short_code == shortcode)).mappings().first()
        return None if row is None else to_short_url(row)

    @handle_sql_error
    @beartype
    def get_by_id(self, url_id: str) -> ShortURLModel | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(urls).where(urls.c.id == url_id)).mappings().first()
        return None if row is None else to_short_url(row)

    @handle_sql_error
    @beartype
    def update(self, shortcode: str, short_url: ShortURLModel) -> ShortURLModel:
        with self.engine.begin() as conn:
            # fmt: off
            result = conn.execute(update(urls)
                                  .where(urls.c.short_code == shortcode)
                                  .values(url=short_url.target, updated_at=short_url.updated_at))
            # fmt: on
            if result.rowcount == 0:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            row = conn.execute(select(urls).where(urls.c.short_code == shortcode)).mappings().one()
        return to_short_url(row)

    @handle_sql_error
    @beartype
    def delete(self, shortcode: str) -> None:
        with self.engine.begin() as conn:
            result = conn.execute(delete(urls).where(urls.c.short_code == shortcode))
            if result.rowcount == 0:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

    @handle_sql_error
    @beartype
    def hit(self, shortcode: str) -> None:
        with self.engine.begin() as conn:
            # fmt: off
            result = conn.execute(update(urls)
                                  .where(urls.c.short_code == shortcode)
                                  .values(access_count=urls.c.access_count + 1, updated_at=utcnow()))
            # fmt: on
            if result.rowcount == 0:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

    @handle_sql_error
    @beartype
    def exists(self, shortcode: str) -> bool:
        with self.engine.connect() as conn:
            found = conn.execute(select(urls.c.id).where(urls.c.short_code == shortcode).limit(1)).first()
        return found is not None

    @handle_sql_error
    @beartype
    def list_by_user(self, user_id: str) -> list[ShortURLModel]:
        statement = select(urls).where(urls.c.user_id == user_id).order_by(urls.c.created_at.desc())
        with self.engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [to_short_url(row) for row in rows]

    @handle_sql_error
    @beartype
    def list_by_category(self, category_id: str, user_id: str) -> list[ShortURLModel]:
        # fmt: off
        statement = (select(urls)
                     .join(url_categories, url_categories.c.url_id == urls.c.id)
                     .where(url_categories.c.category_id == category_id, urls.c.user_id == user_id)
                     .order_by(urls.c.created_at.desc()))
        # fmt: on
        with self.engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [to_short_url(row) for row in rows]

    @handle_sql_error
    @beartype
    def add_categories(self, url_id: str, category_ids: list[str]) -> None:
        """Associate categories with a short URL in one bulk insert-or-ignore

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist.
            CategoryNotFoundError:
                If any of the categories does not exist.
        """
        unique_ids = list(dict.fromkeys(category_ids))
        if not unique_ids:
            return

        with self.engine.begin() as conn:
            if conn.execute(select(urls.c.id).where(urls.c.id == url_id)).first() is None:
                raise ShortURLNotFoundError(f"Short URL with id '{url_id}' not found.")

            found = set(conn.execute(select(categories.c.id).where(categories.c.id.in_(unique_ids))).scalars())
            missing = [category_id for category_id in unique_ids if category_id not in found]
            if missing:
                raise CategoryNotFoundError(f"Category with id '{missing[0]}' not found.")

            now = utcnow()
            # fmt: off
            conn.execute(self._insert_ignore(url_categories),
                         [{'url_id': url_id, 'category_id': category_id, 'created_at': now} for category_id in unique_ids])
            # fmt: on

    @handle_sql_error
    @beartype
    def remove_categories(self, url_id: str, category_ids: list[str]) -> None:
        if not category_ids:
            return

        with self.engine.begin() as conn:
            # fmt: off
            conn.execute(delete(url_categories)
                         .where(url_categories.c.url_id == url_id,
                                url_categories.c.category_id.in_(category_ids)))
            # fmt: on

    @handle_sql_error
    @beartype
    def categories(self, url_id: str) -> list[CategoryModel]:
        # fmt: off
        statement = (select(categories)
                     .join(url_categories, url_categories.c.category_id == categories.c.id)
                     .where(url_categories.c.url_id == url_id)
                     .order_by(categories.c.name_key))
        # fmt: on
        with self.engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [to_category(row) for row in rows]
