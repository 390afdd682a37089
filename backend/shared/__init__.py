"""
Shared module for infrastructure used by the costing API.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Limits, precision and pagination constants

- shared.infrastructure: Database, Redis and caching
  - db.py: SQLAlchemy engine, sessions, FastAPI get_db dependency
  - correlation.py: Request correlation IDs for logs
  - redis/: Redis connection pool and key/TTL constants
  - cache/: Price cache contract and its Redis / in-memory backends

- shared.utils: Utilities
  - exceptions.py: Domain exceptions with auto-logging
  - validators.py: Input validation helpers
  - clock.py: Timezone-aware time helpers

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, SessionLocal
    from shared.config.settings import settings
    from shared.config.constants import Limits
    from shared.utils.exceptions import NotFoundError, VersionConflictError
    from shared.utils.validators import require_text
"""
