"""Index existence check.

Wraps a single existence query and classifies the result so the gating
logic never has to look at exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from shared.es_client import ElasticsearchError
from shared.log import get_logger

logger = get_logger("checks")


class CheckStatus(str, Enum):
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckOutcome:
    status: CheckStatus
    error: str = ""

    @classmethod
    def exists(cls) -> CheckOutcome:
        return cls(CheckStatus.EXISTS)

    @classmethod
    def not_exists(cls) -> CheckOutcome:
        return cls(CheckStatus.NOT_EXISTS)

    @classmethod
    def failed(cls, error: str) -> CheckOutcome:
        return cls(CheckStatus.FAILED, error)

    @property
    def ok(self) -> bool:
        return self.status is not CheckStatus.FAILED


class ExistenceClient(Protocol):
    async def index_exists(self, index_name: str) -> bool: ...


async def check_index_exists(client: ExistenceClient, index_name: str) -> CheckOutcome:
    """Issue one existence query for ``index_name``.

    A missing index is a normal outcome. Transport errors, timeouts and
    unexpected statuses all come back as FAILED.
    """
    try:
        exists = await client.index_exists(index_name)
    except ElasticsearchError as e:
        logger.warning("index_check_failed", index=index_name, error=str(e))
        return CheckOutcome.failed(str(e))

    outcome = CheckOutcome.exists() if exists else CheckOutcome.not_exists()
    logger.debug("index_checked", index=index_name, status=outcome.status.value)
    return outcome
