# Import all models here so create_all and migration tooling can detect them
from app.db.session import Base

# Import all models below
from app.modules.user_management.models.user import User
from app.modules.posts.models.post import Post
from app.modules.likes.models.like import Like
from app.modules.reactions.models.reaction import Reaction
from app.modules.shares.models.share import Share
from app.modules.comments.models.comment import Comment
from app.modules.notifications.models.notification import Notification
