from .generation import GenerationPost, PostEvent, PostVersion, ResultEvent, TitleEvent

__all__ = ["GenerationPost", "PostEvent", "PostVersion", "ResultEvent", "TitleEvent"]
