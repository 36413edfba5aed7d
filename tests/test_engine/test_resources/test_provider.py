import pytest
from concurrent.futures import ThreadPoolExecutor
from gemrun.core.errors import AssetLoadError, AssetNotLoadedError
from gemrun.core.events import LoopEvent
from gemrun.resources.manifest import AssetManifest
from gemrun.resources.provider import ResourceProvider


@pytest.fixture
def provider(fake_loader, executor):
    return ResourceProvider(fake_loader, executor=executor)


def test_ready_fires_once_after_reverse_order_loading(provider, executor):
    ready = []
    provider.load(["img1.png", "img2.png"])
    provider.on_ready(lambda: ready.append(True))

    executor.run(order=[1])
    assert ready == []
    assert not provider.is_ready

    executor.run(order=[0])
    assert ready == [True]
    assert provider.get("img1.png") is not None
    assert provider.get("img2.png") is not None


@pytest.mark.parametrize("count", [0, 1, 5])
def test_ready_fires_exactly_once_for_any_manifest_size(fake_loader, executor, count):
    provider = ResourceProvider(fake_loader, executor=executor)
    ready = []
    provider.load([f"img{i}.png" for i in range(count)])
    provider.on_ready(lambda: ready.append(True))

    executor.run(order=list(reversed(range(count))))

    assert ready == [True]


def test_callback_registered_after_ready_fires_once(provider, executor):
    provider.load(["img1.png"])
    executor.run()
    ready = []

    provider.on_ready(lambda: ready.append("late"))

    assert ready == ["late"]


def test_duplicate_identifiers_load_once(provider, executor):
    provider.load(["a.png", "a.png", "b.png"])
    assert len(executor.jobs) == 2


def test_cached_assets_are_not_reloaded(provider, executor):
    provider.load(["a.png"])
    executor.run()
    provider.load(AssetManifest(["a.png", "b.png"]))

    assert len(executor.jobs) == 1
    assert not provider.is_ready


def test_get_unknown_identifier_fails_fast(provider):
    with pytest.raises(AssetNotLoadedError) as excinfo:
        provider.get("images/ghost.png")
    assert excinfo.value.identifier == "images/ghost.png"
    assert "images/ghost.png" in str(excinfo.value)


def test_failed_load_reports_error_not_ready(provider, executor):
    ready, errors = [], []
    provider.load(["ok.png", "missing.png"])
    provider.on_ready(lambda: ready.append(True))
    provider.on_error(errors.append)

    executor.run()

    assert ready == []
    assert len(errors) == 1
    assert isinstance(errors[0], AssetLoadError)
    assert errors[0].identifiers == ["missing.png"]
    assert "ok.png" in provider
    assert "missing.png" not in provider


def test_error_callback_registered_after_failure(provider, executor):
    provider.load(["missing.png"])
    executor.run()
    errors = []

    provider.on_error(errors.append)

    assert errors == [provider.error]


def test_callbacks_go_through_dispatch(fake_loader, executor, scheduler):
    provider = ResourceProvider(fake_loader, executor=executor, dispatch=scheduler.call_soon)
    ready = []
    provider.load(["img1.png"])
    provider.on_ready(lambda: ready.append(True))
    executor.run()

    assert ready == []
    scheduler.run_pending()
    assert ready == [True]


def test_stale_batch_does_not_signal(provider, executor):
    ready = []
    provider.load(["old.png"])
    provider.load(["new.png"])
    provider.on_ready(lambda: ready.append(True))

    executor.run(order=[0])
    assert ready == []
    assert "old.png" in provider

    executor.run()
    assert ready == [True]


def test_events_published(fake_loader, executor, event_bus):
    seen = []
    for event_type in (LoopEvent.ASSETS_REQUESTED, LoopEvent.ASSETS_READY):
        event_bus.subscribe(event_type, lambda e: seen.append(e.type))
    provider = ResourceProvider(fake_loader, executor=executor, event_bus=event_bus)

    provider.load(["a.png"])
    executor.run()

    assert seen == [LoopEvent.ASSETS_REQUESTED, LoopEvent.ASSETS_READY]


def test_real_thread_pool(fake_loader):
    executor = ThreadPoolExecutor(max_workers=4)
    provider = ResourceProvider(fake_loader, executor=executor)
    names = [f"img{i}.png" for i in range(20)]
    done = []

    provider.load(names)
    provider.on_ready(lambda: done.append(True))
    executor.shutdown(wait=True)

    assert done == [True]
    assert all(name in provider for name in names)


def test_owned_executor_shutdown(fake_loader):
    provider = ResourceProvider(fake_loader)
    provider.load(["a.png"])
    provider.shutdown()
    provider.shutdown()


def test_queued_ready_of_superseded_batch_is_dropped(fake_loader, executor, scheduler):
    provider = ResourceProvider(fake_loader, executor=executor, dispatch=scheduler.call_soon)
    seen = []
    provider.load(["a.png"])
    executor.run()
    provider.load(["b.png"])
    provider.on_ready(lambda: seen.append("b.png" in provider))

    scheduler.run_pending()
    assert seen == []

    executor.run()
    scheduler.run_pending()
    assert seen == [True]


def test_queued_error_of_superseded_batch_is_dropped(fake_loader, executor, scheduler):
    provider = ResourceProvider(fake_loader, executor=executor, dispatch=scheduler.call_soon)
    errors = []
    provider.load(["missing.png"])
    executor.run()
    provider.load(["ok.png"])
    provider.on_error(errors.append)

    scheduler.run_pending()
    executor.run()
    scheduler.run_pending()

    assert errors == []
    assert provider.is_ready


def test_ready_callbacks_of_failed_batch_do_not_carry_over(provider, executor):
    ready = []
    provider.load(["missing.png"])
    provider.on_ready(lambda: ready.append("first"))
    executor.run()
    provider.on_ready(lambda: ready.append("after failure"))

    provider.load(["ok.png"])
    provider.on_ready(lambda: ready.append("second"))
    executor.run()

    assert ready == ["second"]


def test_scheduler_held_while_batch_in_flight(fake_loader, executor, scheduler):
    provider = ResourceProvider(fake_loader, executor=executor, dispatch=scheduler.call_soon)

    provider.load(["a.png"])
    provider.load(["b.png"])
    assert scheduler.busy

    executor.run(order=[0])
    scheduler.run_pending()
    assert scheduler.busy

    executor.run()
    scheduler.run_pending()
    assert not scheduler.busy


def test_failed_batch_releases_scheduler(fake_loader, executor, scheduler):
    provider = ResourceProvider(fake_loader, executor=executor, dispatch=scheduler.call_soon)
    provider.load(["missing.png"])
    executor.run()
    scheduler.run_pending()
    assert not scheduler.busy
