"""Shared fixtures: a manually advanced clock and recording sinks."""

from __future__ import annotations

import pytest

from agentworld_animator.camera_controller import AnimatedViewController
from agentworld_animator.cinematic import Pose, TransitionEngine
from agentworld_animator.config import AnimatorConfig


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, payload):
        self.calls.append(payload)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config(monkeypatch):
    for key in AnimatorConfig.DEFAULTS:
        monkeypatch.delenv(f"{AnimatorConfig.ENV_PREFIX}{key.upper()}", raising=False)
    return AnimatorConfig()


@pytest.fixture
def origin_pose():
    return Pose((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0))


@pytest.fixture
def engine(origin_pose, config, clock):
    return TransitionEngine(
        origin_pose,
        config=config,
        clock=clock,
        pose_sink=Recorder(),
        finished_sink=Recorder(),
        capture_sink=Recorder(),
    )


@pytest.fixture
def view_controller(config, clock):
    return AnimatedViewController(
        config,
        clock=clock,
        pose_publisher=Recorder(),
        finished_publisher=Recorder(),
        image_capture=Recorder(),
    )
