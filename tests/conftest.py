"""Shared test fixtures for Sightly tests."""

import logging
from collections.abc import Callable

import pytest
import structlog
from structlog.testing import CapturingLogger

from sightly.render import RenderContext

RenderContextFactory = Callable[..., RenderContext]


@pytest.fixture
def capturing_logger() -> CapturingLogger:
    """Return a structlog logger that records every call."""
    return CapturingLogger()


@pytest.fixture
def make_render_context(capturing_logger: CapturingLogger) -> RenderContextFactory:
    """Return a factory for RenderContexts that log into ``capturing_logger``."""
    logger = structlog.wrap_logger(
        capturing_logger,
        processors=[],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )

    def _make(**overrides: object) -> RenderContext:
        overrides.setdefault("logger", logger)
        return RenderContext(**overrides)  # pyright: ignore[reportArgumentType]

    return _make
