"""Tests for off-loop run orchestration."""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from watchman.domain.catalog import ACTION_CATALOG, get_action
from watchman.services.runner import RunOutcome
from watchman.tui.runs import RunCompleted, RunInProgressError, RunOrchestrator
from watchman.tui.session import Mode, SessionMachine


async def _next(queue):
    return await asyncio.wait_for(queue.get(), timeout=5)


async def _wait_until(predicate):
    for _ in range(500):
        if predicate():
            return
        await asyncio.sleep(0.01)
    raise AssertionError("condition never became true")


@pytest.mark.asyncio
async def test_start_delivers_exactly_one_completion(fake_runner):
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(fake_runner, delivered.put_nowait)

    handle = orchestrator.start(get_action(1), "10.0.0.0/24", "", 7)
    completed = await _next(delivered)
    await asyncio.sleep(0.05)

    assert completed == RunCompleted(7, fake_runner.outcome)
    assert delivered.empty()
    assert handle.done is True
    assert orchestrator.active is None
    assert fake_runner.calls == [(1, "10.0.0.0/24", "")]
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_start_returns_before_runner_finishes(gated_runner):
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(gated_runner, delivered.put_nowait)

    handle = orchestrator.start(get_action(3), "scanme.nmap.org", "", 1)

    assert handle.done is False
    assert orchestrator.active is handle
    gated_runner.gate.set()
    completed = await _next(delivered)
    assert completed.generation == 1
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_second_start_while_outstanding_is_rejected(gated_runner):
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(gated_runner, delivered.put_nowait)
    orchestrator.start(get_action(3), "10.0.0.1", "", 1)

    with pytest.raises(RunInProgressError):
        orchestrator.start(get_action(5), "10.0.0.1", "", 2)

    gated_runner.gate.set()
    await _next(delivered)
    orchestrator.start(get_action(5), "10.0.0.1", "", 2)
    assert (await _next(delivered)).generation == 2
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_runner_exception_becomes_failed_outcome(make_runner):
    runner = make_runner(error=RuntimeError("Connection refused by ipapi.co"))
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(runner, delivered.put_nowait)

    orchestrator.start(get_action(12), "", "", 3)
    completed = await _next(delivered)

    assert completed.generation == 3
    assert completed.outcome.succeeded is False
    assert completed.outcome.text.startswith("[Error] Could not reach the remote service.")
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_cancel_running_terminates_process_and_still_delivers(gated_runner):
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(gated_runner, delivered.put_nowait)
    handle = orchestrator.start(get_action(2), "10.0.0.1", "", 4)
    await _wait_until(lambda: gated_runner.calls)

    handle.cancel()

    assert handle.cancelled is True
    assert gated_runner.terminated == 1
    completed = await _next(delivered)
    assert completed.generation == 4
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_cancel_before_start_skips_runner(fake_runner):
    executor = ThreadPoolExecutor(max_workers=1)
    blocker = threading.Event()
    executor.submit(blocker.wait, 5)
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(fake_runner, delivered.put_nowait, executor=executor)

    handle = orchestrator.start(get_action(1), "10.0.0.0/24", "", 5)
    handle.cancel()
    completed = await _next(delivered)
    blocker.set()

    assert completed == RunCompleted(5, RunOutcome("[Cancelled before start]\n", False))
    assert fake_runner.calls == []
    assert fake_runner.terminated == 0
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_cancelled_run_does_not_block_next_start(gated_runner):
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(gated_runner, delivered.put_nowait)
    first = orchestrator.start(get_action(2), "10.0.0.1", "", 1)
    await _wait_until(lambda: gated_runner.calls)
    first.cancel()

    second = orchestrator.start(get_action(3), "10.0.0.2", "", 2)

    generations = {(await _next(delivered)).generation, (await _next(delivered)).generation}
    assert generations == {1, 2}
    assert second.done is True
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_machine_and_orchestrator_complete_a_session(make_runner):
    runner = make_runner(RunOutcome("--- Your Public IP Info ---\n{}\n", True))
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(runner, delivered.put_nowait)
    machine = SessionMachine(ACTION_CATALOG, orchestrator.start)

    machine.select(get_action(12))
    assert machine.state.mode is Mode.RUNNING
    assert machine.complete(await _next(delivered)) is True

    assert machine.state.mode is Mode.SHOWING_RESULT
    assert machine.state.last_result.text.startswith("--- Your Public IP Info ---")
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_machine_discards_completion_of_cancelled_run(gated_runner):
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(gated_runner, delivered.put_nowait)
    machine = SessionMachine(ACTION_CATALOG, orchestrator.start)

    machine.select(get_action(13))
    await _wait_until(lambda: gated_runner.calls)
    machine.cancel()

    assert machine.complete(await _next(delivered)) is False
    assert machine.state.mode is Mode.MENU
    assert machine.state.last_result is None
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_run_behind_unkillable_cancelled_run_is_marked_waiting(make_runner):
    gate = threading.Event()
    runner = make_runner(gate=gate)
    runner.terminate_active = lambda: False
    delivered = asyncio.Queue()
    orchestrator = RunOrchestrator(runner, delivered.put_nowait)
    first = orchestrator.start(get_action(12), "", "", 1)
    await _wait_until(lambda: runner.calls)
    first.cancel()

    second = orchestrator.start(get_action(13), "", "", 2)

    assert first.waiting is False
    assert second.waiting is True
    assert len(runner.calls) == 1
    gate.set()
    assert (await _next(delivered)).generation == 1
    assert (await _next(delivered)).generation == 2
    orchestrator.shutdown()
