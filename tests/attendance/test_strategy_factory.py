from src.attendance_tracker.attendance_tracker.attendance.factory import AttendanceStrategyFactory
from src.attendance_tracker.attendance_tracker.attendance.strategies.late_strategy import LateStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.present_strategy import PresentStrategy
from src.attendance_tracker.attendance_tracker.core.enums import Remarks


def test_factory_checkin_before_threshold_is_present():
    strategy = AttendanceStrategyFactory().for_checkin(time_in="07:59", threshold="08:00")

    assert isinstance(strategy, PresentStrategy)
    assert strategy.decide_checkin(time_in="07:59", threshold="08:00").remarks == Remarks.PRESENT


def test_factory_checkin_exactly_at_threshold_is_present():
    strategy = AttendanceStrategyFactory().for_checkin(time_in="08:00", threshold="08:00")

    assert isinstance(strategy, PresentStrategy)


def test_factory_checkin_after_threshold_is_late():
    strategy = AttendanceStrategyFactory().for_checkin(time_in="08:01", threshold="08:00")

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(time_in="08:01", threshold="08:00").remarks == Remarks.LATE


def test_factory_respects_configured_threshold():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_checkin(time_in="07:45", threshold="07:30"), LateStrategy)
    assert isinstance(factory.for_checkin(time_in="13:00", threshold="07:30"), LateStrategy)
