"""
Tests for the controller simulator script.
Frames are checked against the API models and pushed through a TestClient.
"""

import pytest
import sys
import os
from unittest.mock import MagicMock, patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

import demo_device_sim
from demo_device_sim import ControllerState
from wheelchair_api.config import Settings
from wheelchair_api.main import create_app
from wheelchair_api.models.telemetry import GestureUpdate, StatusUpdate


class TestControllerState:

    def test_status_frame_matches_model(self):
        state = ControllerState()
        frame = state.status_frame(tick=1, interval=1.0)
        parsed = StatusUpdate.model_validate(frame)
        assert parsed.currentDirection in demo_device_sim.DIRECTIONS
        assert set(frame) == set(StatusUpdate.model_fields)

    def test_distance_never_decreases(self):
        state = ControllerState()
        distances = [state.status_frame(t, 1.0)["totalDistanceMeters"] for t in range(30)]
        assert distances == sorted(distances)

    def test_gesture_counters_are_cumulative(self):
        state = ControllerState()
        frames = [state.gesture_frame() for _ in range(10)]
        assert [f["totalGestures"] for f in frames] == list(range(1, 11))
        last = frames[-1]
        assert last["upCount"] + last["downCount"] + last["leftCount"] + last["rightCount"] == 10
        GestureUpdate.model_validate(last)


class TestStream:

    def test_stream_posts_status_and_gestures(self):
        ok = MagicMock(status_code=200)
        with patch("demo_device_sim.requests.post", return_value=ok) as mock_post, \
                patch("demo_device_sim.time.sleep"):
            demo_device_sim.stream("http://device.test", interval=0.1, count=4)

        urls = [c.args[0] for c in mock_post.call_args_list]
        assert urls.count("http://device.test/api/wheelchair/update") == 4
        # gestures on ticks 0 and 3
        assert urls.count("http://device.test/api/wheelchair/gesture") == 2

    def test_frames_accepted_by_server(self, tmp_path):
        state = ControllerState()
        with TestClient(create_app(Settings(db_path=str(tmp_path / "sim.db")))) as client:
            frame = state.status_frame(tick=2, interval=1.0)
            assert client.post("/api/wheelchair/update", json=frame).json() == {"success": True}
            gesture = state.gesture_frame()
            assert client.post("/api/wheelchair/gesture", json=gesture).json() == {"success": True}

            log = client.get("/api/wheelchair/log").json()
            assert log[0]["gesture"] == gesture["lastGesture"]
            status = client.get("/api/wheelchair/status").json()
            assert status["currentDirection"] == frame["currentDirection"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
