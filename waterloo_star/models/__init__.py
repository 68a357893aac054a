from .enums import PostStatus, PostCategory, SortOrder, Amenity, Utility

__all__ = ["PostStatus", "PostCategory", "SortOrder", "Amenity", "Utility"]
