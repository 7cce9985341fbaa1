"""Tests for the pitch-detector API endpoints."""

import io

import numpy as np
import pytest
import soundfile as sf
from fastapi.testclient import TestClient

from pitch_detector.api.main import create_app

SR = 44100


def _sine(freq_hz: float, n_samples: int, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(n_samples) / SR
    return (amplitude * np.sin(2 * np.pi * freq_hz * t)).astype(np.float32)


def _wav_bytes(audio: np.ndarray, sr: int = SR) -> bytes:
    buf = io.BytesIO()
    sf.write(buf, audio, sr, format="WAV", subtype="FLOAT")
    buf.seek(0)
    return buf.read()


@pytest.fixture()
def client(monkeypatch):
    for var in ["SAMPLE_RATE", "BUFFER_SIZE", "THRESHOLD"]:
        monkeypatch.delenv(f"PITCH_DETECTOR_{var}", raising=False)
    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sample_wav_bytes():
    """A one-second 440 Hz sine tone as WAV bytes."""
    return _wav_bytes(_sine(440.0, SR))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealthEndpoint:
    def test_returns_ok(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "ok"
        assert data["algorithms"] == ["yin"]
        assert data["min_frequency_hz"] == 60.0
        assert data["max_frequency_hz"] == 2000.0
        assert data["default_threshold"] == 0.1

    def test_has_version(self, client):
        r = client.get("/api/v1/health")
        assert r.json()["version"] == "0.1.0"


# ---------------------------------------------------------------------------
# Detect
# ---------------------------------------------------------------------------


class TestDetectEndpoint:
    def test_detects_a4(self, client):
        r = client.post(
            "/api/v1/detect",
            json={"samples": _sine(440.0, 2048).tolist(), "sample_rate": SR},
        )
        assert r.status_code == 200
        body = r.json()
        assert body["detected"] is True
        assert abs(body["frequency_hz"] - 440.0) < 5.0
        assert body["note"]["name"] == "A4"
        assert body["threshold"] == 0.1
        assert 0.0 <= body["clarity"] <= 1.0

    def test_silence_returns_sentinel(self, client):
        r = client.post("/api/v1/detect", json={"samples": [0.0] * 2048})
        body = r.json()
        assert body["frequency_hz"] == -1.0
        assert body["detected"] is False
        assert body["note"] is None
        assert body["clarity"] == 0.0

    def test_empty_buffer(self, client):
        r = client.post("/api/v1/detect", json={"samples": []})
        assert r.status_code == 200
        assert r.json()["frequency_hz"] == -1.0
        assert r.json()["rms"] == 0.0

    def test_custom_threshold_echoed(self, client):
        r = client.post(
            "/api/v1/detect",
            json={"samples": _sine(220.0, 2048).tolist(), "threshold": 0.2},
        )
        assert r.json()["threshold"] == 0.2

    def test_solfege_flat_naming(self, client):
        r = client.post(
            "/api/v1/detect",
            json={
                "samples": _sine(466.16, 2048).tolist(),
                "notation": "solfege",
                "accidental": "flat",
            },
        )
        assert r.json()["note"]["name"] == "シ♭4"

    def test_transposition(self, client):
        r = client.post(
            "/api/v1/detect",
            json={"samples": _sine(466.16, 2048).tolist(), "transposition": "Bb"},
        )
        assert r.json()["note"]["name"] == "C5"

    @pytest.mark.parametrize("threshold", [0.0, 1.0, 1.5])
    def test_rejects_threshold_out_of_range(self, client, threshold):
        r = client.post(
            "/api/v1/detect",
            json={"samples": [0.0] * 16, "threshold": threshold},
        )
        assert r.status_code == 422

    def test_rejects_non_positive_sample_rate(self, client):
        r = client.post("/api/v1/detect", json={"samples": [0.0] * 16, "sample_rate": 0})
        assert r.status_code == 422

    def test_rejects_buffer_over_limit(self, client):
        r = client.post("/api/v1/detect", json={"samples": [0.0] * 16385})
        assert r.status_code == 413
        assert "16384" in r.json()["detail"]

    def test_accepts_buffer_at_limit(self, client):
        r = client.post("/api/v1/detect", json={"samples": [0.0] * 16384})
        assert r.status_code == 200


# ---------------------------------------------------------------------------
# Analyze
# ---------------------------------------------------------------------------


class TestAnalyzeEndpoint:
    def test_analyze_wav_returns_success(self, client, sample_wav_bytes):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("test.wav", sample_wav_bytes, "audio/wav")},
            data={"offset_s": "0.25"},
        )
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "success"
        assert body["detected"] is True
        assert abs(body["frequency_hz"] - 440.0) < 5.0
        assert body["note"]["name"] == "A4"
        assert body["sample_rate"] == SR
        assert body["buffer_size"] == 2048
        assert body["offset_s"] == 0.25
        assert body["duration_s"] == pytest.approx(1.0, abs=0.01)

    def test_custom_buffer_and_reference(self, client, sample_wav_bytes):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("test.wav", sample_wav_bytes, "audio/wav")},
            data={"buffer_size": "4096", "reference_frequency": "442"},
        )
        body = r.json()
        assert body["buffer_size"] == 4096
        assert body["note"]["cents"] == -8

    def test_rejects_oversized_file(self, client):
        big = b"\x00" * (11 * 1024 * 1024)
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("big.wav", big, "audio/wav")},
        )
        assert r.status_code == 413

    def test_rejects_unsupported_format(self, client):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("test.txt", b"not audio", "text/plain")},
        )
        assert r.status_code == 400

    def test_rejects_short_audio(self, client):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("short.wav", _wav_bytes(_sine(440.0, 1000)), "audio/wav")},
        )
        assert r.status_code == 400
        assert "too short" in r.json()["detail"].lower()

    def test_rejects_offset_past_end(self, client, sample_wav_bytes):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("test.wav", sample_wav_bytes, "audio/wav")},
            data={"offset_s": "5.0"},
        )
        assert r.status_code == 400

    def test_rejects_undecodable_file(self, client):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("bad.wav", b"not audio at all", "audio/wav")},
        )
        assert r.status_code == 400
        assert "decode" in r.json()["detail"].lower()

    def test_rejects_buffer_size_over_limit(self, client, sample_wav_bytes):
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("test.wav", sample_wav_bytes, "audio/wav")},
            data={"buffer_size": "32768"},
        )
        assert r.status_code == 413


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class TestReferenceEndpoints:
    def test_notes_default(self, client):
        r = client.get("/api/v1/notes")
        assert r.status_code == 200
        data = r.json()
        assert len(data) == 12
        assert data[0] == "C"
        assert data[1] == "C♯"

    def test_notes_solfege_flat(self, client):
        r = client.get("/api/v1/notes", params={"notation": "solfege", "accidental": "flat"})
        data = r.json()
        assert data[0] == "ド"
        assert data[1] == "レ♭"

    def test_tuning_presets(self, client):
        r = client.get("/api/v1/tuning-presets")
        assert r.status_code == 200
        data = r.json()
        assert len(data) >= 4
        ids = [p["id"] for p in data]
        assert "concert_a440" in ids

    def test_reference_tone_wav(self, client):
        r = client.get(
            "/api/v1/reference-tone",
            params={"frequency_hz": 440.0, "duration_s": 0.5, "waveform": "triangle"},
        )
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("audio/wav")
        audio, sr = sf.read(io.BytesIO(r.content), dtype="float32")
        assert sr == SR
        assert len(audio) == SR // 2

    def test_reference_tone_rejects_bad_volume(self, client):
        r = client.get("/api/v1/reference-tone", params={"volume": 2.0})
        assert r.status_code == 422

    def test_click_track_wav(self, client):
        r = client.get("/api/v1/click-track", params={"bpm": 120, "beats": 4})
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("audio/wav")
        audio, sr = sf.read(io.BytesIO(r.content), dtype="float32")
        assert sr == SR
        assert len(audio) == 2 * SR

    @pytest.mark.parametrize("bpm", [10, 1000])
    def test_click_track_rejects_bpm_out_of_range(self, client, bpm):
        r = client.get("/api/v1/click-track", params={"bpm": bpm})
        assert r.status_code == 422


class TestConfiguredSampleRate:
    def test_reference_tone_above_nyquist(self, monkeypatch):
        monkeypatch.setenv("PITCH_DETECTOR_SAMPLE_RATE", "16000")
        with TestClient(create_app()) as c:
            r = c.get("/api/v1/reference-tone", params={"frequency_hz": 9000.0})
        assert r.status_code == 400


class TestConfiguredTuning:
    """Tuning fields omitted from a request come from configs/tuning.json."""

    def test_default_reference_frequency(self, client):
        client.app.state.tuning["default"]["reference_frequency"] = 442.0
        r = client.post("/api/v1/detect", json={"samples": _sine(440.0, 2048).tolist()})
        assert r.json()["note"]["name"] == "A4"
        assert r.json()["note"]["cents"] == -8

    def test_default_transposition(self, client):
        client.app.state.tuning["default"]["transposition"] = "Bb"
        r = client.post("/api/v1/detect", json={"samples": _sine(466.16, 2048).tolist()})
        assert r.json()["note"]["name"] == "C5"

    def test_request_overrides_default(self, client):
        client.app.state.tuning["default"]["reference_frequency"] = 442.0
        r = client.post(
            "/api/v1/detect",
            json={"samples": _sine(440.0, 2048).tolist(), "reference_frequency": 440.0},
        )
        assert r.json()["note"]["cents"] == 0

    def test_analyze_uses_default(self, client, sample_wav_bytes):
        client.app.state.tuning["default"]["reference_frequency"] = 442.0
        r = client.post(
            "/api/v1/analyze",
            files={"file": ("test.wav", sample_wav_bytes, "audio/wav")},
        )
        assert r.json()["note"]["cents"] == -8
