"""
Models package
Importing every model here registers all tables on Base.metadata,
so init_db() only needs to import qahq.models.
"""

from qahq.models.idea import Idea  # noqa: F401
from qahq.models.question import Question  # noqa: F401
from qahq.models.subscriber import Subscriber  # noqa: F401
