import json
import logging

import pytest

from wpimage.config import apply_config, load_config
from wpimage.utils import errors
from wpimage.utils.errors import EVENTS, configure_reports, report_error, report_warning


@pytest.fixture(autouse=True)
def _no_reports():
    configure_reports(None)
    yield
    configure_reports(None)


def test_defaults(monkeypatch):
    for name in ("WP_BASE_URL", "WP_USERNAME", "WP_APP_PASSWORD", "WP_UPLOADS_DIR", "WP_ACF", "WPIMAGE_REPORTS"):
        monkeypatch.delenv(name, raising=False)
    cfg = load_config()
    assert cfg["wordpress"] == {
        "base_url": "",
        "username": "",
        "app_password": "",
        "uploads_dir": "",
        "acf": True,
        "rest_bases": ["media", "posts", "pages"],
        "timeout": 15,
        "rpm": 180,
    }
    assert cfg["images"]["default_size"] == "full"
    assert cfg["reports"]["dir"] is None
    assert cfg["logging"]["level"] == "INFO"


def test_environment_fills_missing_keys(monkeypatch):
    monkeypatch.setenv("WP_BASE_URL", "https://env.example.com")
    monkeypatch.setenv("WP_ACF", "false")
    cfg = load_config({"wordpress": {"uploads_dir": "/srv/uploads"}})
    assert cfg["wordpress"]["base_url"] == "https://env.example.com"
    assert cfg["wordpress"]["uploads_dir"] == "/srv/uploads"
    assert cfg["wordpress"]["acf"] is False


def test_config_file_takes_precedence(tmp_path):
    path = tmp_path / "wpimage.json"
    path.write_text(json.dumps({"wordpress": {"base_url": "https://file.example.com"}, "images": {"default_size": "large"}}))
    cfg = load_config({"wordpress": {"base_url": "https://dict.example.com"}}, config_file=str(path))
    assert cfg["wordpress"]["base_url"] == "https://file.example.com"
    assert cfg["images"]["default_size"] == "large"


def test_missing_config_file_falls_back_to_dict(tmp_path):
    cfg = load_config({"images": {"default_size": "medium"}}, config_file=str(tmp_path / "absent.json"))
    assert cfg["images"]["default_size"] == "medium"


def test_apply_config_enables_reports(tmp_path):
    cfg = load_config({"reports": {"dir": str(tmp_path)}})
    apply_config(cfg)
    assert errors._report_dir == str(tmp_path)


def test_report_warning_logs_and_writes_jsonl(tmp_path, caplog):
    configure_reports(str(tmp_path))
    with caplog.at_level(logging.WARNING, logger="wpimage"):
        entry = report_warning("RECORD_NOT_FOUND", {"record": 5})
    assert entry == {"code": "RECORD_NOT_FOUND", "message": EVENTS["RECORD_NOT_FOUND"], "record": 5}
    assert "Record not found - record=5" in caplog.text
    lines = (tmp_path / "warnings.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0]) == entry


def test_report_error_includes_exception(tmp_path):
    configure_reports(str(tmp_path))
    entry = report_error("FILE_UNREADABLE", {"path": "/x"}, OSError("nope"))
    assert entry["error"] == "nope"
    assert json.loads((tmp_path / "errors.jsonl").read_text(encoding="utf-8"))["code"] == "FILE_UNREADABLE"


def test_unknown_code_uses_code_as_message():
    assert report_warning("SOMETHING_ELSE")["message"] == "SOMETHING_ELSE"


def test_no_files_without_report_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    report_warning("RECORD_NOT_FOUND", {"record": 1})
    assert list(tmp_path.iterdir()) == []
