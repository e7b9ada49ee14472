from __future__ import annotations

import os
import ssl
import subprocess
import urllib.request


HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)


def _ssl_context() -> ssl.SSLContext:
    # python.org macOS builds often lack root certificates; certifi fixes that when installed.
    try:
        import certifi  # type: ignore
    except ImportError:
        return ssl.create_default_context()
    return ssl.create_default_context(cafile=certifi.where())


def _discard(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def _fetch_with_urllib(url: str, dest: str, timeout_s: int) -> None:
    with urllib.request.urlopen(url, context=_ssl_context(), timeout=timeout_s) as r, open(dest, "wb") as f:
        f.write(r.read())
    if os.path.getsize(dest) == 0:
        raise OSError("empty response body")


def _fetch_with_curl(url: str, dest: str) -> None:
    """An empty file or a non-zero exit counts as failure."""
    proc = subprocess.run(
        ["curl", "-fL", "-o", dest, url],
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    if proc.returncode != 0 or not os.path.exists(dest) or os.path.getsize(dest) == 0:
        _discard(dest)
        raise OSError(proc.stderr.strip() or f"curl exited with {proc.returncode}")


def ensure_hand_landmarker_task(model_path: str, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30) -> str:
    """
    Make sure the HandLandmarker `.task` model exists at `model_path`.

    Downloads it from the MediaPipe model bucket when missing, trying urllib
    first and curl second.
    """

    if os.path.exists(model_path) and os.path.getsize(model_path) > 0:
        return model_path
    _discard(model_path)

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)

    try:
        _fetch_with_urllib(url, model_path, timeout_s)
        return model_path
    except Exception as first:
        # drop partial downloads
        _discard(model_path)
        urllib_err = first

    try:
        _fetch_with_curl(url, model_path)
        return model_path
    except Exception as curl_err:
        _discard(model_path)
        raise RuntimeError(
            "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
            f"Expected model at: {model_path}\n"
            f"URL: {url}\n\n"
            f"urllib: {urllib_err}\n"
            f"curl:   {curl_err}\n\n"
            "Download it manually:\n"
            f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
            f'  curl -L -o "{model_path}" "{url}"\n'
        ) from curl_err
