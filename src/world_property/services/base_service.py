"""
Base service layer shared by the CRUD services
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from world_property.repositories import Repositories
from world_property.utils.errors import ApiError

logger = logging.getLogger(__name__)

# error_type -> HTTP status used by routes
ERROR_TYPE_STATUS = {
    "INVALID_REQUEST": 400,
    "VALIDATION_ERROR": 400,
    "UNAUTHORIZED": 401,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "EXECUTION_ERROR": 500,
}


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Any = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    issues: List[Dict[str, str]] = field(default_factory=list)

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        count = len(data) if isinstance(data, list) else int(data is not None)
        return cls(success=True, data=data, count=count)

    @classmethod
    def fail(cls, error: str, error_type: str, issues: Optional[List[Dict[str, str]]] = None) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type, issues=issues or [])

    @property
    def status_code(self) -> int:
        return ERROR_TYPE_STATUS.get(self.error_type or "", 500)


class BaseService:
    """Base service holding the repository bundle"""

    def __init__(self, repositories: Repositories):
        self.repositories = repositories

    async def _guard(self, operation: str, coro) -> ServiceResult:
        """Await a repository call, turning domain and unexpected errors into results"""
        try:
            return ServiceResult.ok(await coro)
        except ApiError as e:
            error_type = next(
                (name for name, status in ERROR_TYPE_STATUS.items() if status == e.status_code),
                "EXECUTION_ERROR",
            )
            return ServiceResult.fail(e.message, error_type)
        except Exception as e:
            logger.error(f"{operation} failed: {e}", exc_info=True)
            return ServiceResult.fail(str(e), "EXECUTION_ERROR")
