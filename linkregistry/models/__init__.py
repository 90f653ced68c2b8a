from linkregistry.models.short_url_model import ShortURLModel
from linkregistry.models.user_model import UserModel
from linkregistry.models.category_model import CategoryModel, CategoryWithCountModel
from linkregistry.models.identity import Identity


__all__ = [
    'ShortURLModel',
    'UserModel',
    'CategoryModel',
    'CategoryWithCountModel',
    'Identity',
]
