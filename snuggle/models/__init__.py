# Importar todos los modelos para que SQLAlchemy los registre antes de create_all()
from .profile import Profile
from .blog import Blog
from .category import Category
from .post import Post, PostCategory
from .forum import Forum, ForumComment
from .subscription import Subscription
from .skin import BlogSkin, BlogSkinApplication

__all__ = [
    "Profile",
    "Blog",
    "Category",
    "Post",
    "PostCategory",
    "Forum",
    "ForumComment",
    "Subscription",
    "BlogSkin",
    "BlogSkinApplication",
]
