"""
Testes unitários para o orquestrador de retry.
"""

import pytest

from app.services.browser import BrowserSession, SessionConfig, run_scrape, run_with_retry
from tests.fakes import DriverFactory


class TestRunWithRetry:

    @pytest.mark.asyncio
    async def test_success_first_attempt(self):
        calls = []

        async def task():
            calls.append(1)
            return {"ok": True}

        outcome = await run_with_retry(task)

        assert outcome.success is True
        assert outcome.value == {"ok": True}
        assert outcome.attempts == 1
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_always_failing_runs_one_plus_max_retries(self):
        """Tarefa que sempre falha: exatamente 1 + max_retries execuções (3 no default)."""
        calls = []

        async def task():
            calls.append(1)
            raise RuntimeError(f"falha {len(calls)}")

        outcome = await run_with_retry(task)

        assert outcome.success is False
        assert len(calls) == 3
        assert outcome.attempts == 3
        assert str(outcome.error) == "falha 3"
        assert outcome.error_message == "falha 3"
        assert len(outcome.errors) == 3

    @pytest.mark.asyncio
    async def test_custom_max_retries(self):
        calls = []

        async def task():
            calls.append(1)
            raise ValueError("x")

        outcome = await run_with_retry(task, max_retries=0)
        assert len(calls) == 1
        assert outcome.success is False

        calls.clear()
        await run_with_retry(task, max_retries=4)
        assert len(calls) == 5

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failure(self):
        calls = []

        async def task():
            calls.append(1)
            if len(calls) < 2:
                raise ConnectionError("instável")
            return "feito"

        outcome = await run_with_retry(task)

        assert outcome.success is True
        assert outcome.value == "feito"
        assert outcome.attempts == 2

    @pytest.mark.asyncio
    async def test_error_without_message_uses_class_name(self):
        async def task():
            raise TimeoutError()

        outcome = await run_with_retry(task, max_retries=0)
        assert outcome.error_message == "TimeoutError"


class TestRunScrape:

    @pytest.mark.asyncio
    async def test_fresh_session_per_attempt_and_all_released(self):
        """Cada tentativa abre uma sessão nova e todas são encerradas antes do retorno."""
        factory = DriverFactory()

        async def task(page):
            raise RuntimeError("markup inesperado")

        outcome = await run_scrape(
            task,
            config=SessionConfig(),
            max_retries=2,
            session_factory=lambda config: BrowserSession(config, playwright_factory=factory),
        )

        assert outcome.success is False
        assert outcome.attempts == 3
        assert len(factory.drivers) == 3
        for driver in factory.drivers:
            assert driver.context.closed == 1
            assert driver.browser.closed == 1
            assert driver.stopped == 1

    @pytest.mark.asyncio
    async def test_launch_failure_is_retried(self):
        factory = DriverFactory(fail_launch=True)

        async def task(page):
            return "nunca"

        outcome = await run_scrape(
            task,
            config=SessionConfig(),
            max_retries=1,
            session_factory=lambda config: BrowserSession(config, playwright_factory=factory),
        )

        assert outcome.success is False
        assert outcome.attempts == 2
        assert "Executable" in outcome.error_message

    @pytest.mark.asyncio
    async def test_success_returns_task_value(self):
        factory = DriverFactory()

        async def task(page):
            return page is not None

        outcome = await run_scrape(
            task,
            config=SessionConfig(),
            session_factory=lambda config: BrowserSession(config, playwright_factory=factory),
        )

        assert outcome.success is True
        assert outcome.value is True
        assert len(factory.drivers) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
