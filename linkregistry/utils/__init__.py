from linkregistry.utils.config import app_env, load_config
from linkregistry.utils.helpers import utcnow, new_id, require_environment
from linkregistry.utils.shortener import generate_shortcode, generate_unique_shortcode
from linkregistry.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'generate_unique_shortcode',
    'app_env',
    'load_config',
    'utcnow',
    'new_id',
    'require_environment',
    'initialize_logging',
]
