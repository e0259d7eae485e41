"""BaseService — shared foundation for howser services.

Services receive the frozen :class:`HowserSettings` at construction time
and turn fatal :class:`HowserError` exceptions into failed results, so the
CLI never sees a traceback for an environment problem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from howser.domain.errors import HowserError, error_chain
from howser.domain.matcher import MatchPolicy
from howser.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from howser.config.settings import HowserSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CheckService(BaseService):
            def check(self, path: str) -> ServiceResult:
                try:
                    ...
                except HowserError as exc:
                    return self._failure("check", exc)
    """

    def __init__(self, settings: HowserSettings | None = None) -> None:
        if settings is None:
            from howser.config.settings import HowserSettings

            settings = HowserSettings.from_cli()
        self._settings = settings

    @property
    def settings(self) -> HowserSettings:
        return self._settings

    @property
    def policy(self) -> MatchPolicy:
        match = self._settings.match
        return MatchPolicy(
            prefer_present=match.prefer_present,
            greedy_repeat=match.greedy_repeat,
        )

    def _failure(self, op: str, exc: HowserError) -> ServiceResult:
        """Failed result carrying *exc* and every cause behind it."""
        chain = error_chain(exc)
        logger.info("%s failed (%s): %s", op, exc.code, chain[0])
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=exc.code,
                message=chain[0],
                detail={"causes": chain[1:]} if len(chain) > 1 else {},
            ),
        )
