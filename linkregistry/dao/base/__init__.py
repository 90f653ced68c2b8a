from linkregistry.dao.base.short_url_base_dao import ShortURLBaseDAO
from linkregistry.dao.base.user_base_dao import UserBaseDAO
from linkregistry.dao.base.category_base_dao import CategoryBaseDAO


__all__ = [
    'ShortURLBaseDAO',
    'UserBaseDAO',
    'CategoryBaseDAO',
]
