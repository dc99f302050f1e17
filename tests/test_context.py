from __future__ import annotations

from pathlib import Path

import click
import pytest

from semresolver.config import SemResolverConfig
from semresolver.context import SemResolverContext, pass_context


@pytest.mark.unit
class TestSemResolverContext:
    """Tests for SemResolverContext class."""

    def test_default_initialization(self) -> None:
        """Test SemResolverContext initializes with correct default values."""
        ctx = SemResolverContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert ctx.config == SemResolverConfig()

    def test_instances_are_independent(self) -> None:
        """Test multiple SemResolverContext instances are independent."""
        ctx1 = SemResolverContext()
        ctx2 = SemResolverContext()

        ctx1.verbose = 2
        ctx1.config.output_format = "json"

        assert ctx2.verbose == 0
        assert ctx2.config.output_format == "table"

    def test_all_attributes_can_be_set(self) -> None:
        """Test all context attributes can be set and retrieved."""
        ctx = SemResolverContext()
        config = SemResolverConfig(max_iterations=3)

        ctx.config_path = Path("/path/to/semresolver.toml")
        ctx.verbose = 2
        ctx.color = False
        ctx.config = config

        assert ctx.config_path == Path("/path/to/semresolver.toml")
        assert ctx.verbose == 2
        assert ctx.color is False
        assert ctx.config is config

    def test_slots_prevents_arbitrary_attributes(self) -> None:
        """Test __slots__ prevents setting undefined attributes."""
        ctx = SemResolverContext()

        with pytest.raises(AttributeError):
            ctx.arbitrary_attribute = "value"  # type: ignore


@pytest.mark.unit
class TestPassContextDecorator:
    """Tests for pass_context decorator."""

    def test_pass_context_injects_existing_context(self) -> None:
        """Test pass_context injects the SemResolverContext on the Click context."""

        @click.command()
        @pass_context
        def test_command(ctx: SemResolverContext) -> SemResolverContext:
            return ctx

        click_ctx = click.Context(click.Command("test"))
        semresolver_ctx = SemResolverContext()
        click_ctx.obj = semresolver_ctx

        with click_ctx:
            result = click_ctx.invoke(test_command)

        assert result is semresolver_ctx

    def test_pass_context_creates_context_when_missing(self) -> None:
        """Test pass_context creates a default SemResolverContext when none exists."""

        @click.command()
        @pass_context
        def test_command(ctx: SemResolverContext) -> SemResolverContext:
            return ctx

        click_ctx = click.Context(click.Command("test"))

        with click_ctx:
            result = click_ctx.invoke(test_command)

        assert isinstance(result, SemResolverContext)
        assert result.config.output_format == "table"
