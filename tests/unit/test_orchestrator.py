"""Unit tests for the concurrent orchestrator."""

import threading

import pytest

from conftest import FakeRunner
from corrator.core.eol import EolResolver
from corrator.core.orchestrator import Orchestrator, ResultCollector, filter_containers, run
from corrator.models.application import ApplicationStatus
from corrator.models.container import Container, ContainerStatus
from corrator.models.lifecycle import LifecycleRecord
from corrator.models.options import FilterFunction, RunOptions


class BarrierRunner(FakeRunner):
    """Runner whose start blocks until every container has started."""

    def __init__(self, outputs, parties: int) -> None:
        super().__init__(outputs)
        self.barrier = threading.Barrier(parties, timeout=5)

    def start(self, name: str, image: str) -> None:
        super().start(name, image)
        self.barrier.wait()


class BrokenRunner(FakeRunner):
    """Runner that fails unexpectedly for one image."""

    def execute(self, name: str, command: str) -> str:
        if self.images[name] == "postgres:16":
            raise RuntimeError("unexpected")
        return super().execute(name, command)


class TestFilterContainers:
    """Tests for filter_containers."""

    def test_no_filters(self, containers):
        """Test everything is selected without filters."""
        assert set(filter_containers(containers)) == {"web", "worker", "db"}

    def test_names(self, containers):
        """Test selection by exact name."""
        assert set(filter_containers(containers, names=["db", "missing"])) == {"db"}

    def test_all_tags(self, containers):
        """Test all requested tags must be present."""
        assert set(filter_containers(containers, tags=["x"])) == {"web", "worker"}
        assert set(filter_containers(containers, tags=["x", "y"])) == {"web"}

    def test_any_tag(self, containers):
        """Test any requested tag is enough."""
        selected = filter_containers(containers, tags=["y", "z"], filter_function=FilterFunction.ANY)
        assert set(selected) == {"web"}

    def test_untagged_excluded(self, containers):
        """Test containers without tags never match a tag filter."""
        selected = filter_containers(containers, tags=["x"], filter_function=FilterFunction.ANY)
        assert "db" not in selected

    def test_names_and_tags(self, containers):
        """Test both filters apply together."""
        selected = filter_containers(containers, names=["web", "db"], tags=["x"])
        assert set(selected) == {"web"}


class TestResultCollector:
    """Tests for ResultCollector."""

    def test_report_sorted(self):
        """Test the report is sorted by container name."""
        collector = ResultCollector()
        for name in ["worker", "db", "web"]:
            collector.add(ContainerStatus(name=name))

        assert [status.name for status in collector.report()] == ["db", "web", "worker"]


class TestOrchestrator:
    """Tests for Orchestrator.run."""

    def test_report_sorted_by_name(self, runner, applications, containers, resolver):
        """Test the report covers every container in name order."""
        report = Orchestrator(runner, resolver).run(containers, applications)

        assert [status.name for status in report] == ["db", "web", "worker"]
        assert report[0].apps == [ApplicationStatus(name="bash", version="5.2.15")]
        assert report[1].apps[1].eol_status == "2027-04-01"
        assert report[2].apps[1].eol_status == "alive"

    def test_report_independent_of_completion_order(self, outputs, applications, containers):
        """Test different finishing orders give the same report."""
        slow_web = FakeRunner(outputs, delays={"ubuntu:22.04": 0.3, "python:3.11": 0.15})
        slow_db = FakeRunner(outputs, delays={"postgres:16": 0.3, "python:3.11": 0.15})

        first = Orchestrator(slow_web).run(containers, applications)
        second = Orchestrator(slow_db).run(containers, applications)

        assert slow_web.completion_order != slow_db.completion_order
        assert first == second

    def test_containers_run_concurrently(self, outputs, applications, containers):
        """Test every container is in flight at the same time."""
        runner = BarrierRunner(outputs, parties=len(containers))
        report = Orchestrator(runner).run(containers, applications)

        assert len(report) == 3
        assert not runner.barrier.broken

    def test_max_workers(self, runner, applications, containers):
        """Test a worker cap still audits every container."""
        report = Orchestrator(runner).run(containers, applications, RunOptions(max_workers=1))

        assert [status.name for status in report] == ["db", "web", "worker"]

    def test_filters_applied(self, runner, applications, containers):
        """Test only selected containers are started."""
        options = RunOptions(tags=["x"], filter_function=FilterFunction.ALL)
        report = Orchestrator(runner).run(containers, applications, options)

        assert [status.name for status in report] == ["web", "worker"]
        assert sorted(runner.started) == ["python:3.11", "ubuntu:22.04"]

    def test_nothing_selected(self, runner, applications, containers):
        """Test an empty selection gives an empty report."""
        report = Orchestrator(runner).run(containers, applications, RunOptions(names=["nope"]))

        assert report == []
        assert runner.started == []

    def test_clean_flag(self, runner, applications, containers):
        """Test every environment is stopped with image removal."""
        Orchestrator(runner).run(containers, applications, RunOptions(clean_after_query=True))

        assert sorted(runner.stopped) == [
            ("postgres:16", True),
            ("python:3.11", True),
            ("ubuntu:22.04", True),
        ]

    def test_worker_failure_isolated(self, outputs, applications, containers):
        """Test an unexpected failure only affects its own container."""
        runner = BrokenRunner(outputs)
        report = Orchestrator(runner).run(containers, applications)

        by_name = {status.name: status for status in report}
        assert by_name["db"].error.code == "WORKER_ERROR"
        assert by_name["db"].apps == []
        assert by_name["web"].error is None
        assert len(by_name["web"].apps) == 2
        assert len(runner.stopped) == 3

    def test_start_failure_isolated(self, outputs, applications, containers):
        """Test a container that cannot start still appears in the report."""
        runner = FakeRunner(outputs, fail_start={"python:3.11"})
        report = Orchestrator(runner).run(containers, applications)

        assert [status.name for status in report] == ["db", "web", "worker"]
        assert report[2].error.code == "ENVIRONMENT_START_ERROR"
        assert report[1].error is None

    def test_clear_cache(self, runner, applications, containers, cache):
        """Test the cache is emptied before the run when requested."""
        cache.insert_if_absent("ubuntu", "20.04", LifecycleRecord.model_validate({"eol": "2025-04-02"}))

        Orchestrator(runner, cache=cache).run(containers, applications, RunOptions(clear_cache=True))

        assert len(cache) == 0

    def test_shared_cache_entry(self, runner, applications, cache, service):
        """Test containers sharing a release cycle share one cache entry."""
        containers = {
            "a": Container(image="ubuntu:22.04", apps=["ubuntu"]),
            "b": Container(image="ubuntu:22.04", apps=["ubuntu"]),
        }
        resolver = EolResolver(cache, client=service.client())
        report = Orchestrator(runner, resolver, cache).run(containers, applications)

        assert [status.apps[0].eol_status for status in report] == ["2027-04-01", "2027-04-01"]
        assert cache.keys() == ["ubuntu::22.04"]


def test_run_function(runner, applications, containers):
    """Test the module-level run helper."""
    report = run(containers, applications, RunOptions(names=["db"]), runner=runner)

    assert [status.name for status in report] == ["db"]


def test_invalid_max_workers():
    """Test a worker cap below one is rejected."""
    with pytest.raises(ValueError):
        RunOptions(max_workers=0)
