import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

from .config import FRAME_SETTLE_MS, GIF_FRAMERATE, GIF_MAX_WIDTH
from .routes import infer_path
from .types import Directive

FRAME_PATTERN = "frame-%03d.png"

Encoder = Callable[[Path, Path], None]


def ffmpeg_encode(frame_dir: Path, output_path: Path) -> None:
    """Encode frame-000.png, frame-001.png, ... into an animated GIF."""
    ffmpeg = shutil.which("ffmpeg")
    if not ffmpeg:
        raise RuntimeError("ffmpeg not found on PATH; cannot encode GIF")
    cmd = [
        ffmpeg,
        "-y",
        "-framerate", GIF_FRAMERATE,
        "-i", str(Path(frame_dir) / FRAME_PATTERN),
        "-vf", f"scale={GIF_MAX_WIDTH}:-1",
        str(output_path),
    ]
    completed = subprocess.run(cmd, capture_output=True, text=True, check=False)
    if completed.returncode != 0:
        tail = (completed.stderr or "").strip().splitlines()[-3:]
        raise RuntimeError(f"ffmpeg exited with {completed.returncode}: {' | '.join(tail)}")


def step_route(step: str) -> str:
    if step.startswith("/"):
        return step
    route = infer_path(step)
    print(f"[Sequence] WARNING step {step!r} has no path; guessed {route}")
    return route


def capture_sequence(
    session,
    directive: Directive,
    output_path: Path,
    encoder: Optional[Encoder] = None,
) -> Path:
    """Capture one frame per step and encode them into output_path.

    Frames live in a temporary directory that is removed whether or not the
    encode succeeds; a failed encode leaves no GIF behind.
    """
    if not directive.steps:
        raise RuntimeError("GIF marker requires steps")
    encoder = encoder or ffmpeg_encode
    output_path = Path(output_path)

    print(f"[Sequence] Capturing GIF: {directive.description}")
    print(f"[Sequence]   Steps: {' -> '.join(directive.steps)}")

    frame_dir = Path(tempfile.mkdtemp(prefix="gif-frames-"))
    try:
        frames: List[Path] = []
        for i, step in enumerate(directive.steps):
            session.goto(step_route(step), settle_ms=FRAME_SETTLE_MS)
            frame = session.screenshot(frame_dir / f"frame-{i:03d}.png")
            frames.append(frame)
            print(f"[Sequence]   Frame {i + 1}/{len(directive.steps)}: {step}")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            encoder(frame_dir, output_path)
        except Exception:
            print("[Sequence] Encoding failed, GIF not created")
            if output_path.exists():
                output_path.unlink()
            raise
        print(f"[Sequence]   Saved GIF: {output_path}")
    finally:
        shutil.rmtree(frame_dir, ignore_errors=True)

    return output_path
