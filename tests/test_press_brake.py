"""Tests for job execution on the press brake."""

import threading

import pytest

from pressbrake.config.defaults import (
    build_default_material_catalog,
    build_default_tooling_catalog,
)
from pressbrake.core.controller import JobController
from pressbrake.core.errors import (
    NilJobOrSheetError,
    PreconditionError,
    ToolingNotSetError,
    UnknownEntryError,
)
from pressbrake.core.press_brake import PressBrake
from pressbrake.core.sheet import SheetState


@pytest.fixture
def tooling():
    return build_default_tooling_catalog()


@pytest.fixture
def press(tooling) -> PressBrake:
    return PressBrake("Test Brake", tooling, tooling.default_punch(), tooling.default_die())


@pytest.fixture
def controller() -> JobController:
    jc = JobController(build_default_material_catalog())
    jc.new_job("Job-1", "Sheet-1", 300.0, 100.0, 2.0, "Steel")
    jc.add_step(50, 90, 3.5, "Up")
    jc.add_step(250, 90, 3.5, "Up")
    jc.add_step(150, 135, 4.0, "Down")
    return jc


class TestTooling:
    def test_starts_with_given_tools(self, press):
        assert press.current_punch.name == "Default Punch"
        assert press.current_die.name == "Default Die"
        assert press.tooling_status() == "Punch: Default Punch, Die: Default Die"

    def test_select_by_name(self, press):
        press.select_punch("P30.15.R1")
        press.select_die("D20.60.R3")
        assert press.current_punch.angle == 30
        assert press.current_die.v_opening == 20

    def test_select_unknown_keeps_current(self, press):
        with pytest.raises(UnknownEntryError):
            press.select_die("D99")
        assert press.current_die.name == "Default Die"

    def test_set_none_rejected(self, press):
        with pytest.raises(ValueError):
            press.set_punch(None)
        with pytest.raises(ValueError):
            press.set_die(None)

    def test_status_with_unset_tools(self, tooling):
        press = PressBrake("Bare", tooling)
        assert press.tooling_status() == "Punch: None, Die: None"


class TestProcessJob:
    def test_replays_steps_in_sequence_order(self, press, controller):
        job = controller.current_job
        sheet = press.process_job(job)
        assert sheet is job.sheet
        assert sheet.current_bends == job.steps
        assert [b.position for b in sheet.current_bends] == [50, 250, 150]
        assert sheet.state is SheetState.FORMED

    def test_repeated_runs_are_identical(self, press, controller):
        job = controller.current_job
        first = list(press.process_job(job).current_bends)
        second = list(press.process_job(job).current_bends)
        assert first == second
        assert len(second) == 3

    def test_counter_increments_once_per_job(self, press, controller):
        assert press.total_parts_bent_session == 0
        press.process_job(controller.current_job)
        press.process_job(controller.current_job)
        assert press.total_parts_bent_session == 2

    def test_empty_job_counts_as_a_part(self, press):
        jc = JobController(build_default_material_catalog())
        job = jc.new_job("Empty", "S", 100.0, 50.0, 1.0, "Copper")
        sheet = press.process_job(job)
        assert sheet.state is SheetState.FLAT
        assert press.total_parts_bent_session == 1

    def test_missing_die(self, tooling, controller):
        press = PressBrake("No Die", tooling, punch=tooling.default_punch())
        with pytest.raises(ToolingNotSetError, match="tooling not set"):
            press.process_job(controller.current_job)
        assert press.total_parts_bent_session == 0
        assert controller.current_job.sheet.state is SheetState.FLAT

    def test_missing_punch(self, tooling, controller):
        press = PressBrake("No Punch", tooling, die=tooling.default_die())
        with pytest.raises(PreconditionError):
            press.process_job(controller.current_job)

    def test_missing_job_or_sheet(self, press, controller):
        with pytest.raises(NilJobOrSheetError):
            press.process_job(None)
        controller.current_job.sheet = None
        with pytest.raises(NilJobOrSheetError):
            press.process_job(controller.current_job)
        assert press.total_parts_bent_session == 0

    def test_formed_state_cleared_by_clear_steps(self, press, controller):
        sheet = press.process_job(controller.current_job)
        controller.clear_steps()
        assert sheet.state is SheetState.FLAT

    def test_concurrent_runs_counted_exactly(self, press, controller):
        job = controller.current_job
        threads = [threading.Thread(target=press.process_job, args=(job,))
                   for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert press.total_parts_bent_session == 8
        assert len(job.sheet.current_bends) == 3

    def test_tooling_checked_under_lock(self, tooling, controller):
        press = PressBrake("No Die", tooling, punch=tooling.default_punch())
        errors = []

        def run():
            try:
                press.process_job(controller.current_job)
            except ToolingNotSetError as exc:
                errors.append(exc)

        with press._lock:
            worker = threading.Thread(target=run)
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            assert errors == []
        worker.join()
        assert len(errors) == 1
        assert press.total_parts_bent_session == 0

    def test_plan_survives_sheet_update(self, press, controller):
        new = controller.update_sheet(400, 100, 2, "Aluminum")
        sheet = press.process_job(controller.current_job)
        assert sheet is new
        assert [b.sequence_order for b in sheet.current_bends] == [1, 2, 3]
