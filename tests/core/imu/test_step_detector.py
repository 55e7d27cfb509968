"""Tests for StepDetector thresholds and DeadReckoningIntegrator projection."""

from __future__ import annotations

import math

import pytest

from pathtracker.core.imu.motion_sample import Acceleration, MotionSample, PathPoint
from pathtracker.core.imu.step_detector import (
    DeadReckoningIntegrator,
    HeadingFallback,
    StepDetector,
)
from pathtracker.utils.config_sections import TrackerConfig


def test_value_equal_to_threshold_is_not_a_step():
    detector = StepDetector(threshold=0.05)
    assert not detector.is_step(Acceleration(0.0, 0.05, 0.0))
    assert not detector.is_step(Acceleration(0.0, -0.05, 0.0))


def test_value_just_above_threshold_is_a_step():
    detector = StepDetector(threshold=0.05)
    above = math.nextafter(0.05, 1.0)
    assert detector.is_step(Acceleration(0.0, above, 0.0))
    assert detector.is_step(Acceleration(0.0, -above, 0.0))
    assert detector.last_axis_value == -above


def test_detector_reads_only_the_gait_axis():
    detector = StepDetector(threshold=0.05, axis="y")
    assert not detector.is_step(Acceleration(1.0, 0.0, 1.0))

    z_detector = StepDetector(threshold=0.05, axis="z")
    assert z_detector.is_step(Acceleration(0.0, 0.0, 0.3))


def test_step_from_origin_heading_zero():
    integrator = DeadReckoningIntegrator(StepDetector(), step_length=0.5)
    point = integrator.process(MotionSample(Acceleration(0.0, 0.2, 0.0), 0.0), None)
    assert point == PathPoint(0.5, 0.0)


def test_step_from_origin_heading_north():
    integrator = DeadReckoningIntegrator(StepDetector(), step_length=0.5)
    point = integrator.process(MotionSample(Acceleration(0.0, 0.2, 0.0), math.pi / 2), None)
    assert point.x == pytest.approx(0.0, abs=1e-12)
    assert point.y == pytest.approx(0.5)


def test_step_accumulates_from_last_point():
    integrator = DeadReckoningIntegrator(StepDetector(), step_length=0.5)
    point = integrator.process(
        MotionSample(Acceleration(0.0, 0.2, 0.0), math.pi), PathPoint(2.0, 1.0)
    )
    assert point.x == pytest.approx(1.5)
    assert point.y == pytest.approx(1.0)


def test_no_sample_and_below_threshold_produce_nothing():
    integrator = DeadReckoningIntegrator(StepDetector(), step_length=0.5)
    assert integrator.process(None, None) is None
    assert integrator.process(MotionSample(Acceleration(0.0, 0.01, 0.0), 0.0), None) is None


def test_missing_heading_defaults_to_zero():
    integrator = DeadReckoningIntegrator(StepDetector(), step_length=0.5)
    point = integrator.process(MotionSample(Acceleration(0.0, 0.2, 0.0), None), None)
    assert point == PathPoint(0.5, 0.0)


def test_missing_heading_can_suppress_steps():
    integrator = DeadReckoningIntegrator(
        StepDetector(), step_length=0.5, heading_fallback=HeadingFallback.SUPPRESS
    )
    assert integrator.process(MotionSample(Acceleration(0.0, 0.2, 0.0), None), None) is None
    assert integrator.process(MotionSample(Acceleration(0.0, 0.2, 0.0), 0.0), None) == PathPoint(0.5, 0.0)


def test_from_config_applies_all_settings():
    config = TrackerConfig(step_threshold=0.2, gait_axis="x", step_length_m=0.7, heading_fallback="suppress")
    integrator = DeadReckoningIntegrator.from_config(config)

    assert integrator.detector.threshold == 0.2
    assert integrator.detector.axis == "x"
    assert integrator.step_length == 0.7
    assert integrator.heading_fallback is HeadingFallback.SUPPRESS
    assert integrator.displacement(0.0) == pytest.approx((0.7, 0.0))
