# Import every model so Base.metadata knows all tables (used by init_db, alembic, tests)
from app.db.base_class import Base  # noqa: F401
from app.models.assignment import Assignment  # noqa: F401
from app.models.calculated_penalty import CalculatedPenalty  # noqa: F401
from app.models.late_policy import LatePolicy  # noqa: F401
from app.models.participant import Participant  # noqa: F401
from app.models.user import User  # noqa: F401
