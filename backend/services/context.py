"""
Service context shared by every workflow.

Built once at startup and handed to each workflow call; request handlers
receive a per-request copy whose logger stamps the request id on every
record.
"""

import asyncio
import contextvars
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any, Callable, TypeVar

from adapters.email.resend_adapter import ResendEmailService
from core.interfaces.services import EmailService
from core.security.password import PasswordHasher
from infrastructure.config.settings import Settings

T = TypeVar("T")


class RequestLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its fields with per-call ``extra``."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


@dataclass
class ServiceContext:
    settings: Settings
    email_client: EmailService
    password_hasher: PasswordHasher
    # Reserved for CPU-heavy work such as password hash verification
    blocking_executor: ThreadPoolExecutor
    logger: logging.Logger | logging.LoggerAdapter

    @classmethod
    def create(cls, settings: Settings) -> "ServiceContext":
        return cls(
            settings=settings,
            email_client=ResendEmailService.from_settings(settings),
            password_hasher=PasswordHasher(),
            blocking_executor=ThreadPoolExecutor(
                max_workers=settings.hash_worker_threads,
                thread_name_prefix="blocking",
            ),
            logger=logging.getLogger("newsletter"),
        )

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def for_request(self, request_id: str) -> "ServiceContext":
        """Return a copy whose logger tags every record with ``request_id``."""
        base_logger = self.logger
        if isinstance(base_logger, logging.LoggerAdapter):
            base_logger = base_logger.logger
        return replace(
            self,
            logger=RequestLoggerAdapter(base_logger, {"request_id": request_id}),
        )

    async def run_blocking(self, func: Callable[..., T], *args: Any) -> T:
        """
        Run a blocking callable on the dedicated executor and await its result.

        The caller's context variables travel with the call so log records
        emitted inside the worker keep their request correlation.
        """
        loop = asyncio.get_running_loop()
        ctx = contextvars.copy_context()
        return await loop.run_in_executor(
            self.blocking_executor,
            functools.partial(ctx.run, func, *args),
        )

    def close(self) -> None:
        self.blocking_executor.shutdown(wait=True)
