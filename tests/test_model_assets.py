import http.client
import urllib.request

import pytest

from gesturetree_hand import model_assets


class _Response:
    def __init__(self, body=b"", error=None):
        self.body = body
        self.error = error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def read(self):
        if self.error is not None:
            raise self.error
        return self.body


def _fail_curl(url, dest):
    raise OSError("curl unavailable")


def test_interrupted_download_leaves_no_file(tmp_path, monkeypatch):
    target = tmp_path / "models" / "hand_landmarker.task"
    monkeypatch.setattr(
        urllib.request, "urlopen", lambda *a, **kw: _Response(error=http.client.IncompleteRead(b""))
    )
    monkeypatch.setattr(model_assets, "_fetch_with_curl", _fail_curl)

    with pytest.raises(RuntimeError, match="IncompleteRead"):
        model_assets.ensure_hand_landmarker_task(str(target))
    assert not target.exists()

    # a second attempt must try again rather than accept a leftover file
    with pytest.raises(RuntimeError):
        model_assets.ensure_hand_landmarker_task(str(target))


def test_urllib_error_falls_back_to_curl(tmp_path, monkeypatch):
    target = tmp_path / "hand_landmarker.task"
    monkeypatch.setattr(
        urllib.request, "urlopen", lambda *a, **kw: _Response(error=http.client.IncompleteRead(b"x"))
    )
    calls = []

    def fake_curl(url, dest):
        calls.append(dest)
        with open(dest, "wb") as f:
            f.write(b"model")

    monkeypatch.setattr(model_assets, "_fetch_with_curl", fake_curl)
    assert model_assets.ensure_hand_landmarker_task(str(target)) == str(target)
    assert calls == [str(target)]
    assert target.read_bytes() == b"model"


def test_empty_existing_file_is_downloaded_again(tmp_path, monkeypatch):
    target = tmp_path / "hand_landmarker.task"
    target.write_bytes(b"")
    monkeypatch.setattr(urllib.request, "urlopen", lambda *a, **kw: _Response(body=b"model"))

    assert model_assets.ensure_hand_landmarker_task(str(target)) == str(target)
    assert target.read_bytes() == b"model"


def test_existing_model_is_kept(tmp_path, monkeypatch):
    target = tmp_path / "hand_landmarker.task"
    target.write_bytes(b"cached")

    def no_network(*a, **kw):
        raise AssertionError("should not download")

    monkeypatch.setattr(urllib.request, "urlopen", no_network)
    assert model_assets.ensure_hand_landmarker_task(str(target)) == str(target)
    assert target.read_bytes() == b"cached"
