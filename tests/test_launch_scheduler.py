import pytest

from conftest import FakeSpawner
from core.domain.launch_strategy import LaunchStrategy
from core.services.launch_scheduler import LaunchHooks, LaunchScheduler


def _scheduler(spawner, *, events=None, delay_seconds=3.0, hooks=None):
    events = events if events is not None else spawner.events

    async def _ack(message):
        events.append(("ack", message))

    async def _sleep(seconds):
        events.append(("sleep", seconds))

    return LaunchScheduler(
        spawner,
        acknowledge=_ack,
        delay_seconds=delay_seconds,
        hooks=hooks,
        sleep=_sleep,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("strategy", list(LaunchStrategy))
async def test_one_outcome_per_device_in_selection_order(strategy):
    spawner = FakeSpawner()
    selection = ["Pixel_5", "Pixel_7", "Tablet"]

    outcomes = await _scheduler(spawner).execute(selection, strategy)

    assert [o.device for o in outcomes] == selection
    assert all(o.success for o in outcomes)
    assert sorted(spawner.calls) == sorted(selection)


@pytest.mark.asyncio
async def test_duplicate_device_names_are_launched_twice():
    spawner = FakeSpawner()

    outcomes = await _scheduler(spawner).execute(["Pixel_5", "Pixel_5"], LaunchStrategy.DELAYED)

    assert len(outcomes) == 2
    assert spawner.calls == ["Pixel_5", "Pixel_5"]


@pytest.mark.asyncio
async def test_parallel_spawns_overlap():
    spawner = FakeSpawner(delay=0.05)

    await _scheduler(spawner).execute(["a", "b", "c", "d"], LaunchStrategy.PARALLEL)

    assert spawner.max_in_flight == 4


@pytest.mark.asyncio
async def test_delayed_waits_between_devices_only():
    spawner = FakeSpawner()

    await _scheduler(spawner, delay_seconds=3.0).execute(["a", "b", "c"], LaunchStrategy.DELAYED)

    assert spawner.events == [
        ("spawn", "a"),
        ("sleep", 3.0),
        ("spawn", "b"),
        ("sleep", 3.0),
        ("spawn", "c"),
    ]
    assert spawner.max_in_flight == 1


@pytest.mark.asyncio
async def test_delayed_single_device_never_sleeps():
    spawner = FakeSpawner()

    await _scheduler(spawner).execute(["a"], LaunchStrategy.DELAYED)

    assert ("sleep", 3.0) not in spawner.events


@pytest.mark.asyncio
async def test_sequential_acknowledges_before_each_spawn():
    spawner = FakeSpawner()

    await _scheduler(spawner).execute(["a", "b"], LaunchStrategy.SEQUENTIAL)

    assert spawner.events == [
        ("ack", "Press Enter to launch: a"),
        ("spawn", "a"),
        ("ack", "Press Enter to launch: b"),
        ("spawn", "b"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("strategy", list(LaunchStrategy))
async def test_failure_does_not_stop_later_devices(strategy):
    spawner = FakeSpawner(fail={"b"}, errors={"c": RuntimeError("no display")})

    outcomes = await _scheduler(spawner).execute(["a", "b", "c", "d"], strategy)

    assert sorted(spawner.calls) == ["a", "b", "c", "d"]
    by_device = {o.device: o for o in outcomes}
    assert by_device["a"].success and by_device["d"].success
    assert not by_device["b"].success
    assert by_device["b"].reason == "b exploded"
    assert by_device["c"].reason == "no display"


@pytest.mark.asyncio
async def test_hooks_report_progress():
    seen: list[tuple] = []
    hooks = LaunchHooks(
        strategy_started=lambda strategy, count: seen.append(("start", strategy, count)),
        launch_started=lambda device: seen.append(("launching", device)),
        launch_finished=lambda outcome: seen.append(("done", outcome.device, outcome.success)),
        waiting=lambda seconds: seen.append(("wait", seconds)),
    )
    spawner = FakeSpawner(fail={"b"})

    await _scheduler(spawner, hooks=hooks, delay_seconds=1.5).execute(["a", "b"], LaunchStrategy.DELAYED)

    assert seen == [
        ("start", LaunchStrategy.DELAYED, 2),
        ("launching", "a"),
        ("done", "a", True),
        ("wait", 1.5),
        ("launching", "b"),
        ("done", "b", False),
    ]
