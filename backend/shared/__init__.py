"""
Shared module for common utilities used by the REST API and the CLI.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Statuses, lifecycle state, limits

- shared.infrastructure: Database and files
  - db.py: SQLAlchemy sessions, safe_commit(), unit_of_work()
  - correlation.py: Request correlation IDs
  - storage.py: Uploaded photo storage

- shared.security: Request protection
  - rate_limit.py: slowapi limiter for public endpoints

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input sanitization
  - formatting.py: Vietnamese price formatting
  - schemas.py: Envelopes and public guest menu schemas
  - admin_schemas.py: Admin request/response schemas

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, unit_of_work
    from shared.config.settings import settings
    from shared.config.constants import ItemStatus, SelectionType
    from shared.utils.exceptions import NotFoundError, DuplicateEntityError
    from shared.utils.formatting import format_price
"""
