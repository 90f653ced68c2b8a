"""Abstract base class for category data access objects (DAOs).

Categories are owner-scoped tags. The (owner, lower-cased name) pair is
unique, and deleting a category drops all of its URL associations.
"""

from abc import ABC, abstractmethod

from linkregistry.models import CategoryModel, CategoryWithCountModel


class CategoryBaseDAO(ABC):
    """Interface for category data access objects (DAOs).

    Methods:
        insert(category: CategoryModel) -> CategoryModel:
            Raises CategoryAlreadyExistsError on a (owner, name) clash.

        get(category_id: str) -> CategoryModel | None:
        get_by_name(user_id: str, name: str) -> CategoryModel | None:
            Lookups. `get_by_name()` compares names case-insensitively.

        update(category_id: str, category: CategoryModel) -> CategoryModel:
            Persist name, description, icon, color and updated_at.
            Raises CategoryNotFoundError or CategoryAlreadyExistsError.

        delete(category_id: str) -> None:
            Raises CategoryNotFoundError.

        list_by_user(user_id: str) -> list[CategoryModel]:
        list_by_user_with_counts(user_id: str) -> list[CategoryWithCountModel]:
            Owner-scoped listings ordered by name.

    All methods raise DataStoreError on unexpected data store failures.
    """

    @abstractmethod
    def insert(self, category: CategoryModel) -> CategoryModel:
        """Store a new category.

        Raises:
            CategoryAlreadyExistsError:
                If the owner already has a category with the same name (case-insensitive).

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, category_id: str) -> CategoryModel | None:
        pass

    @abstractmethod
    def get_by_name(self, user_id: str, name: str) -> CategoryModel | None:
        pass

    @abstractmethod
    def update(self, category_id: str, category: CategoryModel) -> CategoryModel:
        """Rename / restyle an existing category.

        Args:
            category_id (str):
                Identifier of the category to update.

            category (CategoryModel):
                Model carrying the new name, description, icon, color and updated_at.
                Identifier, owner and creation timestamp are not changed.

        Returns:
            CategoryModel: the category as stored after the update.

        Raises:
            CategoryNotFoundError:
                If the category does not exist.

            CategoryAlreadyExistsError:
                If the new name clashes with another category of the same owner.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, category_id: str) -> None:
        """Delete a category together with all of its URL associations.

        Raises:
            CategoryNotFoundError:
                If the category does not exist.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[CategoryModel]:
        pass

    @abstractmethod
    def list_by_user_with_counts(self, user_id: str) -> list[CategoryWithCountModel]:
        """List the user's categories with the number of the user's URLs tagged with each.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
