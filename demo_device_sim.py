"""
Wheelchair Controller Simulator.

Stands in for the ESP32 on the wheelchair: drives around, reports status
frames to /api/wheelchair/update and, every few ticks, a gesture with
running counters to /api/wheelchair/gesture.

Usage:
  python demo_device_sim.py
  python demo_device_sim.py --url http://192.168.1.20:3000 --interval 0.5
  python demo_device_sim.py --count 20
"""

import argparse
import random
import time

import requests

DEFAULT_URL = "http://127.0.0.1:3000"
DIRECTIONS = ["forward", "backward", "left", "right", "stop"]
GESTURES = ["up", "down", "left", "right"]


class ControllerState:
    """Odometer, timers and gesture counters as the controller would keep them."""

    def __init__(self):
        self.total_distance_m = 0.0
        self.session_distance_m = 0.0
        self.total_time_s = 0
        self.counts = {g: 0 for g in GESTURES}
        self.last_gesture = ""

    def status_frame(self, tick: int, interval: float) -> dict:
        direction = random.choice(DIRECTIONS)
        moving = direction != "stop"
        if moving:
            step = round(random.uniform(0.2, 1.2) * interval, 3)
            self.total_distance_m += step
            self.session_distance_m += step
            self.total_time_s += max(1, int(interval))
        hours, rem = divmod(self.total_time_s, 3600)
        minutes, seconds = divmod(rem, 60)
        return {
            "touchActive": tick % 7 != 0,
            "currentDirection": direction,
            "isMoving": moving,
            "tiltMode": tick % 20 >= 10,
            "totalDistanceMeters": round(self.total_distance_m, 2),
            "totalDistanceKm": round(self.total_distance_m / 1000.0, 4),
            "sessionDistanceMeters": round(self.session_distance_m, 2),
            "totalTimeSeconds": self.total_time_s,
            "timeHours": hours,
            "timeMinutes": minutes,
            "timeSeconds": seconds,
            "wifiStrength": random.randint(40, 95),
        }

    def gesture_frame(self) -> dict:
        gesture = random.choice(GESTURES)
        self.counts[gesture] += 1
        self.last_gesture = gesture
        return {
            "totalGestures": sum(self.counts.values()),
            "upCount": self.counts["up"],
            "downCount": self.counts["down"],
            "leftCount": self.counts["left"],
            "rightCount": self.counts["right"],
            "lastGesture": gesture,
        }


def stream(base_url: str, interval: float, count: int):
    """POST frames until interrupted, or `count` status frames have been sent."""
    update_url = f"{base_url}/api/wheelchair/update"
    gesture_url = f"{base_url}/api/wheelchair/gesture"
    print(f"Streaming to {base_url} every {interval}s ...")

    state = ControllerState()
    tick = 0
    try:
        while count <= 0 or tick < count:
            frame = state.status_frame(tick, interval)
            res = requests.post(update_url, json=frame, timeout=5)
            if res.status_code == 200:
                print(f"[STATUS] Sent -> {frame['currentDirection']}, "
                      f"{frame['totalDistanceMeters']} m, wifi {frame['wifiStrength']}")
            else:
                print(f"[STATUS] Error: {res.status_code} {res.text}")

            if tick % 3 == 0:
                gesture = state.gesture_frame()
                res = requests.post(gesture_url, json=gesture, timeout=5)
                if res.status_code == 200:
                    print(f"[GESTURE] Sent -> {gesture['lastGesture']} "
                          f"(total {gesture['totalGestures']})")
                else:
                    print(f"[GESTURE] Error: {res.status_code} {res.text}")

            tick += 1
            time.sleep(interval)
    except KeyboardInterrupt:
        print("Stopping simulator.")
    except requests.ConnectionError as e:
        print(f"Cannot reach server at {base_url}: {e}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Wheelchair controller simulator")
    parser.add_argument("--url", default=DEFAULT_URL,
                        help=f"Server base URL (default: {DEFAULT_URL})")
    parser.add_argument("--interval", type=float, default=1.0,
                        help="Seconds between status frames (default: 1.0)")
    parser.add_argument("--count", type=int, default=0,
                        help="Number of status frames to send, 0 = forever")
    args = parser.parse_args()

    print("=========================================")
    print(" WHEELCHAIR CONTROLLER SIMULATOR")
    print("=========================================")
    print("Make sure the telemetry server is running!")
    print("Press Ctrl+C to stop.")
    print("=========================================\n")

    stream(args.url.rstrip("/"), args.interval, args.count)
