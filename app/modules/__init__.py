"""
Modules package initialization.
Each feature of the engagement ledger lives in its own subpackage.
"""

from app.modules import user_management
from app.modules import posts
from app.modules import likes
from app.modules import reactions
from app.modules import shares
from app.modules import comments
from app.modules import notifications
from app.modules import cache
