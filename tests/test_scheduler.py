import pytest

from situation.scheduler import (
    Module,
    ModuleError,
    ModuleRegistry,
    Scheduler,
    SchedulingError,
)


class FakeModule(Module):
    def __init__(self, name, dependencies=(), error=None, journal=None):
        self.name = name
        self.dependencies = tuple(dependencies)
        self.error = error
        self.journal = journal if journal is not None else []

    def run(self):
        self.journal.append(self.name)
        if self.error is not None:
            raise self.error


def make_registry(journal=None):
    journal = journal if journal is not None else []
    registry = ModuleRegistry()
    for name, deps in [
        ("tcp-scan", ["arp"]),
        ("arp", ["ping"]),
        ("ping", ["host-network"]),
        ("host-network", ["host-basic"]),
        ("host-basic", []),
    ]:
        registry.register(FakeModule(name, deps, journal=journal))
    return registry


def test_new_scheduler_finds_every_module():
    registry = make_registry()
    scheduler = Scheduler(registry.enabled())
    for module in registry:
        assert scheduler.get_module_by_name(module.name) is module
    assert scheduler.get_module_by_name("missing") is None


def test_missing_dependencies_all_enabled():
    scheduler = Scheduler(make_registry().enabled())
    scheduler.check_missing_dependencies()
    assert len(scheduler.build_tasks_list()) == 5


def test_missing_dependencies_when_disabled():
    scheduler = Scheduler(make_registry().enabled({"host-network"}))
    with pytest.raises(SchedulingError):
        scheduler.check_missing_dependencies()


def test_single_run():
    registry = make_registry()
    status = Scheduler([registry["host-basic"]]).run()
    assert status == {"host-basic": None}


def test_get_module_names():
    registry = make_registry()
    names = registry.names()
    assert len(names) == len(registry)
    assert names == sorted(names)


def test_get_enabled_modules():
    registry = make_registry()
    assert len(registry.enabled()) == len(registry)
    assert "tcp-scan" not in [m.name for m in registry.enabled({"tcp-scan"})]


def test_tasks_follow_dependencies():
    journal = []
    registry = make_registry(journal)
    registry.run()
    assert journal == ["host-basic", "host-network", "ping", "arp", "tcp-scan"]


def test_cycle_is_detected():
    scheduler = Scheduler([FakeModule("a", ["b"]), FakeModule("b", ["a"])])
    scheduler.check_missing_dependencies()
    with pytest.raises(SchedulingError, match="cycle"):
        scheduler.build_tasks_list()


def test_module_failure_is_recorded_not_raised():
    registry = make_registry()
    registry.register(FakeModule("ping", ["host-network"], error=RuntimeError("boom")))
    status = registry.run()
    assert isinstance(status["ping"], RuntimeError)
    assert status["arp"] is None
    assert registry.module_errors() == [ModuleError(module="ping", message="boom")]


def test_status_reset_covers_disabled_modules():
    registry = make_registry()
    status = registry.run({"tcp-scan"})
    assert set(status) == set(registry.names())
    assert status["tcp-scan"] is None
    assert registry.module_errors() == []


def test_registry_run_raises_on_missing_dependency():
    registry = make_registry()
    with pytest.raises(SchedulingError, match="host-basic"):
        registry.run({"host-basic"})