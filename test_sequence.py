import pytest

from docs_capture.core import sequence
from docs_capture.core.markers import parse_line
from docs_capture.core.sequence import capture_sequence, ffmpeg_encode
from fakes import FakeSession

GIF_LINE = "<!-- GIF: /quotes | Open a new quote | /invoices -->"


def test_frames_encoded_and_cleaned_up(tmp_path):
    [d] = parse_line(GIF_LINE, "docs/quotes/flow.md", 1)
    session = FakeSession()
    seen = {}

    def encoder(frame_dir, output_path):
        seen["dir"] = frame_dir
        seen["frames"] = sorted(p.name for p in frame_dir.iterdir())
        output_path.write_bytes(b"GIF89a")

    out = capture_sequence(session, d, tmp_path / "quotes" / "open-a-new-quote.gif", encoder)

    assert out.read_bytes() == b"GIF89a"
    assert seen["frames"] == ["frame-000.png", "frame-001.png", "frame-002.png"]
    assert not seen["dir"].exists()
    assert session.visited == ["/quotes", "/quotes", "/invoices"]


def test_failed_encode_leaves_nothing(tmp_path):
    [d] = parse_line(GIF_LINE, "docs/quotes/flow.md", 1)
    seen = {}

    def encoder(frame_dir, output_path):
        seen["dir"] = frame_dir
        output_path.write_bytes(b"partial")
        raise RuntimeError("encoder crashed")

    out = tmp_path / "flow.gif"
    with pytest.raises(RuntimeError):
        capture_sequence(FakeSession(), d, out, encoder)
    assert not out.exists()
    assert not seen["dir"].exists()


def test_missing_ffmpeg(monkeypatch, tmp_path):
    monkeypatch.setattr(sequence.shutil, "which", lambda name: None)
    with pytest.raises(RuntimeError, match="ffmpeg not found"):
        ffmpeg_encode(tmp_path, tmp_path / "out.gif")
