"""Relational Data Access Object (DAO) logic for categories

NOTE:
    list_by_user_with_counts() resolves every count in a single grouped
    query (no per-category round trips). Only URLs owned by the listing
    user are counted, matching the memory backend.
"""

from beartype import beartype
from sqlalchemy import select, update, delete, func, and_
from sqlalchemy.exc import IntegrityError

from linkregistry.models import CategoryModel, CategoryWithCountModel
from linkregistry.dao.base import CategoryBaseDAO
from linkregistry.dao.sql.schema import categories, urls, url_categories
from linkregistry.dao.sql.helpers import handle_sql_error, to_category, to_category_with_count
from linkregistry.dao.exceptions import CategoryAlreadyExistsError, CategoryNotFoundError


class CategorySQLDAO(CategoryBaseDAO):
    """SQL-based Data Access Object (DAO) for categories"""

    @handle_sql_error
    @beartype
    def insert(self, category: CategoryModel) -> CategoryModel:
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    categories.insert().values(
                        id=category.id,
                        name=category.name,
                        name_key=category.name.lower(),
                        description=category.description,
                        icon=category.icon,
                        color=category.color,
                        user_id=category.user_id,
                        created_at=category.created_at,
                        updated_at=category.updated_at,
                    )
                )
        except IntegrityError:
            if self.get_by_name(category.user_id, category.name) is not None:
                raise CategoryAlreadyExistsError(f"Category with name '{category.name}' already exists.")
            raise
        return category

    @handle_sql_error
    @beartype
    def get(self, category_id: str) -> CategoryModel | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(categories).where(categories.c.id == category_id)).mappings().first()
        return None if row is None else to_category(row)

    @handle_sql_error
    @beartype
    def get_by_name(self, user_id: str, name: str) -> CategoryModel | None:
        # fmt: off
        statement = (select(categories)
                     .where(categories.c.user_id == user_id, categories.c.name_key == name.lower())
                     .limit(1))
        # fmt: on
        with self.engine.connect() as conn:
            row = conn.execute(statement).mappings().first()
        return None if row is None else to_category(row)

    @handle_sql_error
    @beartype
    def update(self, category_id: str, category: CategoryModel) -> CategoryModel:
        name_key = category.name.lower()
        try:
            with self.engine.begin() as conn:
                existing = conn.execute(select(categories).where(categories.c.id == category_id)).mappings().first()
                if existing is None:
                    raise CategoryNotFoundError(f"Category with id '{category_id}' not found.")

                # fmt: off
                duplicate = conn.execute(select(categories.c.id)
                                         .where(categories.c.user_id == existing['user_id'],
                                                categories.c.name_key == name_key,
                                                categories.c.id != category_id)).first()
                # fmt: on
                if duplicate is not None:
                    raise CategoryAlreadyExistsError(f"Category with name '{category.name}' already exists.")

                conn.execute(
                    update(categories)
                    .where(categories.c.id == category_id)
                    .values(
                        name=category.name,
                        name_key=name_key,
                        description=category.description,
                        icon=category.icon,
                        color=category.color,
                        updated_at=category.updated_at,
                    )
                )
                row = conn.execute(select(categories).where(categories.c.id == category_id)).mappings().one()
        except IntegrityError as e:
            # A concurrent rename took the name between the check and the update
            raise CategoryAlreadyExistsError(f"Category with name '{category.name}' already exists.") from e
        return to_category(row)

    @handle_sql_error
    @beartype
    def delete(self, category_id: str) -> None:
        with self.engine.begin() as conn:
            result = conn.execute(delete(categories).where(categories.c.id == category_id))
            if result.rowcount == 0:
                raise CategoryNotFoundError(f"Category with id '{category_id}' not found.")

    @handle_sql_error
    @beartype
    def list_by_user(self, user_id: str) -> list[CategoryModel]:
        statement = select(categories).where(categories.c.user_id == user_id).order_by(categories.c.name_key)
        with self.engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [to_category(row) for row in rows]

    @handle_sql_error
    @beartype
    def list_by_user_with_counts(self, user_id: str) -> list[CategoryWithCountModel]:
        owned_url = and_(urls.c.id == url_categories.c.url_id, urls.c.user_id == user_id)
        # fmt: off
        statement = (select(categories, func.count(urls.c.id).label('url_count'))
                     .select_from(categories)
                     .outerjoin(url_categories, url_categories.c.category_id == categories.c.id)
                     .outerjoin(urls, owned_url)
                     .where(categories.c.user_id == user_id)
                     .group_by(*categories.c)
                     .order_by(categories.c.name_key))
        # fmt: on
        with self.engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [to_category_with_count(row) for row in rows]
