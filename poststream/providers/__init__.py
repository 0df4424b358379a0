from .errors import ApiError, build_api_error
from .posts_provider import PostsStreamProvider

__all__ = ["ApiError", "build_api_error", "PostsStreamProvider"]
